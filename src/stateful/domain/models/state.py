from __future__ import annotations

from collections.abc import Iterable

WILDCARD_VALUE = "*"


class State(str):
    """
    Opaque state identifier.

    States compare by value, so `State("paid") == "paid"`. The reserved value
    `"*"` is the wildcard and only has meaning as a transition source.
    """

    __slots__ = ()

    @property
    def is_wildcard(self) -> bool:
        return str(self) == WILDCARD_VALUE

    def __repr__(self) -> str:
        return f"State({str(self)!r})"


WILDCARD = State(WILDCARD_VALUE)
ALL_STATES = WILDCARD


class States(tuple[State, ...]):
    """Ordered, immutable collection of states."""

    __slots__ = ()

    def __new__(cls, states: Iterable[State | str] = ()) -> States:
        return super().__new__(cls, (s if isinstance(s, State) else State(s) for s in states))

    def contains(self, state: State | str) -> bool:
        return any(candidate == state for candidate in self)

    def has_wildcard(self) -> bool:
        return any(candidate.is_wildcard for candidate in self)

    def __repr__(self) -> str:
        return f"States({list(self)!r})"


def as_state(value: State | str) -> State:
    return value if isinstance(value, State) else State(value)
