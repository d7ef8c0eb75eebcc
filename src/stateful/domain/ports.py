from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stateful.domain.models.context import Context
    from stateful.domain.models.graph import RenderOptions
    from stateful.domain.models.result import Result
    from stateful.domain.models.state import State


@runtime_checkable
class Params(Protocol):
    """Mutable key/value bag threaded through one execution."""

    def get(self, key: str, /) -> tuple[Any, bool]: ...

    def set(self, key: str, value: Any, /) -> None: ...


@runtime_checkable
class Stateful(Protocol):
    """
    Capability the engine needs from a domain entity.

    `set_state` receives the call's params so implementations can persist the
    new state with request-scoped data. It reports failure by returning
    `Err(...)`; raising is treated as an unexpected failure.
    """

    def get_id(self) -> str: ...

    def get_state(self) -> State: ...

    def set_state(
        self, ctx: Context, state: State, params: Params, /
    ) -> Result[object, Exception] | None: ...


class GraphRendererPort(Protocol):
    """Turns a DOT description into an artifact at `options.output_path`."""

    def render(self, dot: str, options: RenderOptions, /) -> Result[None, Exception]: ...


type ActionOutcome = Result[object, Exception] | None
type Action = Callable[[Context, Stateful, Params], ActionOutcome]
type BatchAction = Callable[[Context, Sequence[Stateful], Params], ActionOutcome]
