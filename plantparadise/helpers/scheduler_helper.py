import asyncio
import traceback
from typing import Any, Callable, Set

from .logging_helper import LoggingHelper


class SchedulerHelper:
    """
    Single-threaded deferred callbacks on the running asyncio loop.
    A callback runs synchronously once its delay elapses; callbacks due at the same
    time run in scheduling order.
    """

    def __init__(self, logger: LoggingHelper):
        self.logger = logger
        self._pending: Set[asyncio.Task] = set()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run_later(delay, callback, args))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _run_later(self, delay: float, callback: Callable[..., Any], args: tuple):
        await asyncio.sleep(delay)
        try:
            callback(*args)
        except Exception as e:
            self.logger.log(f"Scheduler: Deferred callback {getattr(callback, '__name__', callback)} failed: "
                            f"{e}\n{traceback.format_exc()}", "ERROR")

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def wait_until_idle(self):
        """Waits for every pending callback, including ones scheduled by callbacks."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def cancel_all(self):
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()
