from __future__ import annotations

import threading
from dataclasses import dataclass, field

from stateful import Context, Err, Ok, Params, RenderOptions, Result, State

State1 = State("State1")
State2 = State("State2")
State3 = State("State3")
State4 = State("State4")
State5 = State("State5")


@dataclass
class RecordingStateful:
    """In-memory `Stateful` that records every commit it receives."""

    state: State = State1
    object_id: str = "_test_stateful_object"
    test_value: int = 0
    commits: list[State] = field(default_factory=list)

    def get_id(self) -> str:
        return self.object_id

    def get_state(self) -> State:
        return self.state

    def set_state(self, ctx: Context, state: State, params: Params, /) -> None:
        self.state = state
        self.commits.append(state)


@dataclass
class FailingCommitStateful(RecordingStateful):
    """Reports a commit error instead of storing the new state."""

    commit_error: Exception = field(default_factory=lambda: RuntimeError("commit rejected"))

    def set_state(self, ctx: Context, state: State, params: Params, /) -> Result[None, Exception]:
        return Err(self.commit_error)


@dataclass
class RaisingCommitStateful(RecordingStateful):
    def set_state(self, ctx: Context, state: State, params: Params, /) -> None:
        raise OSError("disk on fire")


@dataclass
class RecordingRenderer:
    calls: list[tuple[str, RenderOptions]] = field(default_factory=list)
    result: Result[None, Exception] = field(default_factory=lambda: Ok(None))

    def render(self, dot: str, options: RenderOptions, /) -> Result[None, Exception]:
        self.calls.append((dot, options))
        return self.result


@dataclass
class Gate:
    """Blocks an action until the test releases it."""

    entered: threading.Event = field(default_factory=threading.Event)
    release: threading.Event = field(default_factory=threading.Event)

    def wait_in_action(self, timeout: float = 5.0) -> None:
        self.entered.set()
        self.release.wait(timeout)


@dataclass
class SignallingStateful(RecordingStateful):
    """Sets `committed` once a new state has been stored."""

    committed: threading.Event = field(default_factory=threading.Event)

    def set_state(self, ctx: Context, state: State, params: Params, /) -> None:
        super().set_state(ctx, state, params)
        self.committed.set()
