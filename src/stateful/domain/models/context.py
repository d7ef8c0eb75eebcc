"""
Cancellation context passed through every `run` / `batch_run` call.

A `Context` becomes *done* once it is cancelled, its deadline passes, or its
parent becomes done. Cancellation is pushed to done-callbacks; deadlines are
checked on read, so waiters bound their waits with `remaining()`. Actions
receive the context and may check `ctx.done()` cooperatively; the engine
itself never interrupts a running action.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from stateful.domain.errors import ContextCancelledError, ContextError, DeadlineExceededError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType


class Context:
    def __init__(self, parent: Context | None = None, *, deadline: float | None = None) -> None:
        self._parent = parent
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._err: ContextError | None = None
        self._callbacks: list[Callable[[], None]] = []

        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

        if parent is not None:
            parent.add_done_callback(self._on_parent_done)
        self._check_deadline()

    @classmethod
    def background(cls) -> Context:
        """A root context that is never cancelled and has no deadline."""
        return cls()

    def with_cancel(self) -> Context:
        return Context(self)

    def with_timeout(self, seconds: float) -> Context:
        return Context(self, deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        """Deadline on the `time.monotonic()` clock, if any."""
        return self._deadline

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def cancel(self) -> None:
        self._finish(ContextCancelledError())

    def done(self) -> bool:
        self._check_deadline()
        return self._done.is_set()

    def err(self) -> ContextError | None:
        self._check_deadline()
        with self._lock:
            return self._err

    def wait(self, timeout: float | None = None) -> bool:
        """Block until done or `timeout` elapses; returns `done()`."""
        limit = self.remaining()
        if timeout is not None:
            limit = timeout if limit is None else min(limit, timeout)
        self._done.wait(limit)
        return self.done()

    def add_done_callback(self, fn: Callable[[], None], /) -> None:
        """Register `fn`; it runs immediately when the context is already done."""
        self._check_deadline()
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(fn)
                return
        fn()

    def remove_done_callback(self, fn: Callable[[], None], /) -> None:
        with self._lock:
            try:
                self._callbacks.remove(fn)
            except ValueError:
                pass

    def _check_deadline(self) -> None:
        if self._deadline is None or self._done.is_set():
            return
        if time.monotonic() >= self._deadline:
            self._finish(DeadlineExceededError())

    def _on_parent_done(self) -> None:
        parent_err = self._parent.err() if self._parent is not None else None
        self._finish(parent_err or ContextCancelledError())

    def _finish(self, err: ContextError) -> None:
        with self._lock:
            if self._done.is_set():
                return
            self._err = err
            self._done.set()
            callbacks, self._callbacks = self._callbacks, []
        if self._parent is not None:
            self._parent.remove_done_callback(self._on_parent_done)
        for callback in callbacks:
            callback()

    def __enter__(self) -> Context:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cancel()
