"""
stateful

A generic finite-state-transition engine: declare states and the transitions
between them, attach actions, and drive one or many objects through legal
state changes.
"""

from __future__ import annotations

import logging

from stateful._meta import __version__
from stateful.api import create_state_machine, create_state_machine_from_config
from stateful.domain.errors import (
    ActionNotDefinedError,
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
    GraphExportError,
    InconsistentBatchStateError,
    StatefulError,
    TransitionNotFoundError,
    UnexpectedFailureError,
    ValidationError,
)
from stateful.domain.models import (
    ALL_STATES,
    WILDCARD,
    Context,
    DefaultParams,
    Err,
    Ok,
    RenderOptions,
    Result,
    State,
    States,
    Transition,
    Transitions,
)
from stateful.domain.ports import GraphRendererPort, Params, Stateful
from stateful.domain.services import Future, StateMachine

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ALL_STATES",
    "WILDCARD",
    "ActionNotDefinedError",
    "Context",
    "ContextCancelledError",
    "ContextError",
    "DeadlineExceededError",
    "DefaultParams",
    "Err",
    "Future",
    "GraphExportError",
    "GraphRendererPort",
    "InconsistentBatchStateError",
    "Ok",
    "Params",
    "RenderOptions",
    "Result",
    "State",
    "StateMachine",
    "Stateful",
    "StatefulError",
    "States",
    "Transition",
    "TransitionNotFoundError",
    "Transitions",
    "UnexpectedFailureError",
    "ValidationError",
    "__version__",
    "create_state_machine",
    "create_state_machine_from_config",
]
