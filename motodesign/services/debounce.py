import asyncio
import logging

from motodesign.config import settings

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid triggers into one callback run after a quiet period.

    Each ``trigger`` cancels the pending run and schedules a new one, so the
    callback fires exactly once, ``delay`` seconds after the last trigger.
    Must be used from inside a running event loop.
    """

    def __init__(self, callback, delay: float | None = None):
        self.callback = callback
        self.delay = delay if delay is not None else settings.SEARCH_DEBOUNCE_MS / 1000
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args, **kwargs) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(args, kwargs))
        self._task.add_done_callback(self._log_failure)
        return self._task

    def cancel(self):
        if self.pending:
            self._task.cancel()
            logger.debug("[Debouncer] Pending run cancelled")
        self._task = None

    @staticmethod
    def _log_failure(task: asyncio.Task):
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"[Debouncer] Scheduled run failed: {exc}", exc_info=exc)

    async def _run(self, args, kwargs):
        await asyncio.sleep(self.delay)
        result = self.callback(*args, **kwargs)
        if asyncio.iscoroutine(result):
            result = await result
        return result
