"""
Result[T, E]: explicit success/failure values for the engine internals.

Transition actions, state commits and the `Future` all hand back a `Result`
instead of raising, so the engine can tell an error an action *reported*
(`Err`) apart from one it *raised* (an unexpected failure).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D, /) -> T:
        return self.value

    def map[U](self, fn: Callable[[T], U], /) -> Ok[U]:
        return Ok(fn(self.value))


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> object:
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(f"Called unwrap() on Err: {self.error!r}")

    def unwrap_or[D](self, default: D, /) -> D:
        return default

    def map(self, fn: Callable[[object], object], /) -> Err[E]:
        return self


type Result[T, E] = Ok[T] | Err[E]


def try_call[T](
    fn: Callable[[], T],
    *exc_types: type[Exception],
) -> Result[T, Exception]:
    """
    Call `fn` and capture exceptions as `Err`.

    Only `exc_types` are captured when given (default: `Exception`); anything
    else propagates.
    """
    catch = exc_types or (Exception,)
    try:
        return Ok(fn())
    except catch as exc:
        return Err(exc)


def as_result(outcome: object) -> Result[object, object]:
    """Normalise an action/commit return value (`None`, a value, Ok, Err)."""
    if isinstance(outcome, (Ok, Err)):
        return outcome
    return Ok(outcome)
