from __future__ import annotations

from stateful.domain.models.context import Context
from stateful.domain.models.graph import RenderOptions
from stateful.domain.models.params import DefaultParams
from stateful.domain.models.result import Err, Ok, Result, as_result, try_call
from stateful.domain.models.state import ALL_STATES, WILDCARD, State, States, as_state
from stateful.domain.models.transition import Transition, Transitions

__all__ = [
    "ALL_STATES",
    "WILDCARD",
    "Context",
    "DefaultParams",
    "Err",
    "Ok",
    "RenderOptions",
    "Result",
    "State",
    "States",
    "Transition",
    "Transitions",
    "as_result",
    "as_state",
    "try_call",
]
