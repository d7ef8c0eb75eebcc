from __future__ import annotations

from stateful.domain.services.future import Future
from stateful.domain.services.graph import build_dot
from stateful.domain.services.state_machine import StateMachine

__all__ = ["Future", "StateMachine", "build_dot"]
