from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stateful.domain.errors import ActionNotDefinedError, ValidationError
from stateful.domain.models.result import Err, Ok, as_result
from stateful.domain.models.state import State, States, as_state

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from stateful.domain.models.context import Context
    from stateful.domain.models.result import Result
    from stateful.domain.ports import Action, BatchAction, Params, Stateful


@dataclass(frozen=True, slots=True)
class Transition:
    """
    A rule: from any of `sources` to `destination`, running an action.

    Either action shape may be omitted; the other one is used as a fallback.
    A transition with no action at all still answers matching queries but
    fails with `ActionNotDefinedError` when executed.
    """

    id: str
    sources: States
    destination: State
    action: Action | None = None
    batch_action: BatchAction | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.sources, States):
            object.__setattr__(self, "sources", States(self.sources))
        object.__setattr__(self, "destination", as_state(self.destination))
        if self.destination.is_wildcard:
            raise ValidationError(
                f"Transition {self.id!r}: the wildcard state cannot be a destination."
            )

    def get_id(self) -> str:
        return self.id

    def get_source_states(self) -> States:
        return self.sources

    def get_destination_state(self) -> State:
        return self.destination

    def is_allowed_to_run(self, state: State | str) -> bool:
        return self.sources.contains(state) or self.sources.has_wildcard()

    def is_allowed_to_transfer(self, state: State | str) -> bool:
        # Destinations never match by wildcard.
        return self.destination == state

    def transfer(
        self, ctx: Context, stateful: Stateful, params: Params, /
    ) -> Result[object, Exception]:
        if self.action is not None:
            return as_result(self.action(ctx, stateful, params))
        if self.batch_action is not None:
            return as_result(self.batch_action(ctx, [stateful], params))
        return Err(ActionNotDefinedError(self.id, batch=False))

    def batch_transfer(
        self, ctx: Context, stateful_list: Sequence[Stateful], params: Params, /
    ) -> Result[object, Exception]:
        if self.batch_action is not None:
            return as_result(self.batch_action(ctx, stateful_list, params))
        if self.action is None:
            return Err(ActionNotDefinedError(self.id, batch=True))
        # Sequential fallback: no atomicity, the first failure stops the batch.
        for stateful in stateful_list:
            result = as_result(self.action(ctx, stateful, params))
            if isinstance(result, Err):
                return result
        return Ok(None)


class Transitions(list[Transition]):
    """Transitions in registration order; lookups are first-match."""

    def contains(self, transition: Transition, /) -> bool:
        return any(current.id == transition.id for current in self)

    def find(self, current: State | str, target: State | str, /) -> Transition | None:
        for transition in self:
            if not transition.is_allowed_to_run(current):
                continue
            if transition.is_allowed_to_transfer(target):
                return transition
        return None

    def available_for(self, state: State | str, /) -> Transitions:
        return Transitions(t for t in self if t.is_allowed_to_run(state))

    def all_states(self) -> States:
        return States(_dedupe_states(self))


def _dedupe_states(transitions: Iterable[Transition]) -> list[State]:
    seen: set[str] = set()
    ordered: list[State] = []
    for transition in transitions:
        for state in (*transition.sources, transition.destination):
            if state.is_wildcard or state in seen:
                continue
            seen.add(state)
            ordered.append(state)
    return ordered
