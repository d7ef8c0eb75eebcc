"""
Application layer: configuration and process-level setup.
"""

from __future__ import annotations

from stateful.application.config import (
    GraphConfig,
    LoggingConfig,
    StateMachineConfig,
    load_config,
)
from stateful.application.logging import configure_logging

__all__ = [
    "GraphConfig",
    "LoggingConfig",
    "StateMachineConfig",
    "configure_logging",
    "load_config",
]
