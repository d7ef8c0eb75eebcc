from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from stateful.domain.errors import UnexpectedFailureError
from stateful.domain.models.context import Context
from stateful.domain.models.result import Err, as_result

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future as _PoolFuture

    from stateful.domain.models.result import Result

logger = logging.getLogger(__name__)


def _guarded(fn: Callable[[], object]) -> Result[object, Exception]:
    try:
        return as_result(fn())
    except BaseException as exc:  # noqa: BLE001 - worker boundary, never let a unit escape
        logger.warning("Unit of work raised; converted to an error: %s", exc, exc_info=exc)
        return Err(UnexpectedFailureError.from_exception(exc))


class Future:
    """
    Runs one unit of work on its own worker thread, starting immediately.

    Whatever the unit raises is caught on the worker thread and stored as
    `Err(UnexpectedFailureError)`. `get()` waits for the result or for the
    caller's context; giving up on the wait does not stop the unit, whose late
    result is kept on the future and otherwise discarded.
    """

    def __init__(self, fn: Callable[[], object], /, *, name: str | None = None) -> None:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name or "stateful-future")
        try:
            self._future: _PoolFuture[Result[object, Exception]] = executor.submit(_guarded, fn)
        finally:
            # The worker thread exits as soon as the unit returns.
            executor.shutdown(wait=False)

    def get(self, ctx: Context | None = None, /) -> Result[object, Exception]:
        """Block until the unit completes or `ctx` is done."""
        ctx = ctx or Context.background()
        if not self._future.done():
            waiter = threading.Event()
            ctx.add_done_callback(waiter.set)
            self._future.add_done_callback(lambda _f: waiter.set())
            try:
                while not waiter.is_set() and not ctx.done():
                    waiter.wait(ctx.remaining())
            finally:
                ctx.remove_done_callback(waiter.set)
        if self._future.done():
            return self._future.result()
        err = ctx.err()
        if err is None:  # pragma: no cover - the loop only exits on completion or ctx done
            raise RuntimeError("Future wait ended without a result or a context error.")
        return Err(err)

    def done(self) -> bool:
        return self._future.done()

    def add_done_callback(self, fn: Callable[[], None], /) -> None:
        """Register `fn`; it runs immediately when the unit has already finished."""
        self._future.add_done_callback(lambda _f: fn())
