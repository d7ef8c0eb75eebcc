"""
Public API layer: factories and registries wiring the domain to adapters.
"""

from __future__ import annotations

from stateful.api.factory import create_state_machine, create_state_machine_from_config
from stateful.api.registries import DefaultRendererRegistry, DictRendererRegistry, RendererRegistry

__all__ = [
    "DefaultRendererRegistry",
    "DictRendererRegistry",
    "RendererRegistry",
    "create_state_machine",
    "create_state_machine_from_config",
]
