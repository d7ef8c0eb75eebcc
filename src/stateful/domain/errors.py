"""
Error taxonomy for the state machine engine.

Every error raised by the engine derives from `StatefulError`. Errors that
actions or commits report via `Err(...)` are re-raised unchanged and are *not*
wrapped in this hierarchy.
"""

from __future__ import annotations

import traceback


class StatefulError(Exception):
    """Base class for engine errors."""


class ValidationError(StatefulError):
    """Invalid construction input (transitions, configuration)."""


class TransitionNotFoundError(StatefulError):
    def __init__(self, source: str, destination: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"no transition found source {source} destination {destination}")


class ActionNotDefinedError(StatefulError):
    def __init__(self, transition_id: str, *, batch: bool) -> None:
        self.transition_id = transition_id
        self.batch = batch
        kind = "batch transfer" if batch else "transfer"
        super().__init__(f"not found {kind} function (transition {transition_id!r})")


class InconsistentBatchStateError(StatefulError):
    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"the stateful object state is not the same. want {expected} got {actual}"
        )


class UnexpectedFailureError(StatefulError):
    """An action or commit raised instead of returning an `Err`."""

    def __init__(self, message: str, *, stack: str, original: BaseException) -> None:
        self.message = message
        self.stack = stack
        self.original = original
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: BaseException, /) -> UnexpectedFailureError:
        message = str(exc) or type(exc).__name__
        error = cls(message, stack="".join(traceback.format_exception(exc)), original=exc)
        error.__cause__ = exc
        return error


class ContextError(StatefulError):
    """Base class for the errors a `Context` reports once it is done."""


class ContextCancelledError(ContextError):
    def __init__(self) -> None:
        super().__init__("context canceled")


class DeadlineExceededError(ContextError, TimeoutError):
    def __init__(self) -> None:
        super().__init__("context deadline exceeded")


class GraphExportError(StatefulError):
    """Graph export could not be performed or the renderer failed."""
