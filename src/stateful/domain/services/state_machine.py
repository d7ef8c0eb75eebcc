"""
StateMachine: matches (current, target) pairs to transitions and drives
stateful objects through them.

Each `run` / `batch_run` call is one unit of work on a `Future`:

    Idle -> MatchingTransition -> ExecutingAction -> CommittingState
         -> Completed | Failed

Failures before `CommittingState` leave every object untouched. Batch commits
are applied one object at a time and are never rolled back, so a commit
failure can leave a batch partially committed.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from stateful.domain.errors import (
    GraphExportError,
    InconsistentBatchStateError,
    StatefulError,
    TransitionNotFoundError,
)
from stateful.domain.models.context import Context
from stateful.domain.models.graph import RenderOptions
from stateful.domain.models.params import DefaultParams
from stateful.domain.models.result import Err, Ok, as_result
from stateful.domain.models.transition import Transitions
from stateful.domain.services.future import Future
from stateful.domain.services.graph import build_dot

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from stateful.domain.models.result import Result
    from stateful.domain.models.state import State, States
    from stateful.domain.models.transition import Transition
    from stateful.domain.ports import GraphRendererPort, Params, Stateful

logger = logging.getLogger(__name__)


class StateMachine:
    def __init__(
        self,
        transitions: Iterable[Transition] = (),
        *,
        renderer: GraphRendererPort | None = None,
        render_options: RenderOptions | None = None,
    ) -> None:
        self._transitions = Transitions(transitions)
        self._renderer = renderer
        self._render_options = render_options or RenderOptions()

    def add_transition(self, transition: Transition, /) -> None:
        self._transitions.append(transition)

    def add_transitions(self, transitions: Iterable[Transition], /) -> None:
        self._transitions.extend(transitions)

    def get_transitions(self) -> Transitions:
        return self._transitions

    def get_all_states(self) -> States:
        return self._transitions.all_states()

    def get_available_transitions(self, stateful: Stateful, /) -> Transitions:
        return self._transitions.available_for(stateful.get_state())

    def find_transition(self, current: State | str, target: State | str, /) -> Transition | None:
        """First registered transition leaving `current` for `target`."""
        return self._transitions.find(current, target)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(
        self,
        stateful: Stateful,
        target: State | str,
        params: Params | None = None,
        /,
        *,
        ctx: Context | None = None,
    ) -> None:
        """
        Move `stateful` to `target`.

        Raises `TransitionNotFoundError` when no transition matches, the
        action's or commit's own error when they return `Err`,
        `UnexpectedFailureError` when they raise, and the context error when
        `ctx` is cancelled or times out first.
        """
        ctx = ctx or Context.background()
        call_params = params if params is not None else DefaultParams()

        def _unit() -> Result[object, Exception]:
            return self._run_one(ctx, stateful, target, call_params)

        future = Future(_unit, name="stateful-run")
        _raise_for(future.get(ctx))

    def batch_run(
        self,
        stateful_list: Sequence[Stateful],
        target: State | str,
        params: Params | None = None,
        /,
        *,
        ctx: Context | None = None,
    ) -> None:
        """
        Move every object in `stateful_list` to `target` through one transition.

        All objects must share a current state. Commits happen in order and
        are not rolled back if one of them fails.
        """
        ctx = ctx or Context.background()
        call_params = params if params is not None else DefaultParams()
        objects = list(stateful_list)

        def _unit() -> Result[object, Exception]:
            return self._run_batch(ctx, objects, target, call_params)

        future = Future(_unit, name="stateful-batch-run")
        _raise_for(future.get(ctx))

    def _run_one(
        self,
        ctx: Context,
        stateful: Stateful,
        target: State | str,
        params: Params,
    ) -> Result[object, Exception]:
        current = stateful.get_state()
        transition = self.find_transition(current, target)
        if transition is None:
            return Err(TransitionNotFoundError(current, target))
        logger.debug(
            "Running transition %r for %s: %s -> %s",
            transition.id,
            stateful.get_id(),
            current,
            target,
        )
        result = transition.transfer(ctx, stateful, params)
        if isinstance(result, Err):
            return result
        committed = as_result(stateful.set_state(ctx, transition.destination, params))
        if isinstance(committed, Err):
            return committed
        logger.debug("Committed %s for %s", transition.destination, stateful.get_id())
        return Ok(None)

    def _run_batch(
        self,
        ctx: Context,
        objects: list[Stateful],
        target: State | str,
        params: Params,
    ) -> Result[object, Exception]:
        if not objects:
            return Ok(None)
        current = objects[0].get_state()
        for stateful in objects:
            state = stateful.get_state()
            if state != current:
                return Err(InconsistentBatchStateError(current, state))
        transition = self.find_transition(current, target)
        if transition is None:
            return Err(TransitionNotFoundError(current, target))
        logger.debug(
            "Running batch transition %r for %d objects: %s -> %s",
            transition.id,
            len(objects),
            current,
            target,
        )
        result = transition.batch_transfer(ctx, objects, params)
        if isinstance(result, Err):
            return result
        for index, stateful in enumerate(objects):
            committed = as_result(stateful.set_state(ctx, transition.destination, params))
            if isinstance(committed, Err):
                if index:
                    logger.warning(
                        "Batch commit to %s failed on %s after %d of %d objects were committed",
                        transition.destination,
                        stateful.get_id(),
                        index,
                        len(objects),
                    )
                return committed
        return Ok(None)

    # ------------------------------------------------------------------
    # Graph export
    # ------------------------------------------------------------------

    def to_dot(self) -> str:
        return build_dot(self._transitions)

    def graph(self, outfile: str | Path, /) -> None:
        """Render the transition graph to `outfile` through the configured renderer."""
        if not self._transitions:
            raise GraphExportError("can't find any transition")
        if self._renderer is None:
            raise GraphExportError("no graph renderer configured")
        options = replace(self._render_options, output_path=Path(outfile))
        result = self._renderer.render(self.to_dot(), options)
        if isinstance(result, Err):
            logger.warning("Graph rendering to %s failed: %s", options.output_path, result.error)
        _raise_for(result)


def _raise_for(result: Result[object, Exception]) -> None:
    if not isinstance(result, Err):
        return
    if isinstance(result.error, BaseException):
        raise result.error
    raise StatefulError(str(result.error))
