import asyncio
import logging
from abc import ABC, abstractmethod

from motodesign.config import settings
from motodesign.errors import FetchError
from motodesign.schemas.record import Record

logger = logging.getLogger(__name__)


class BaseGateway(ABC):
    SOURCE_NAME: str = ""

    def __init__(self, retry_attempts: int | None = None, retry_delay: float | None = None):
        self.retry_attempts = max(1, retry_attempts if retry_attempts is not None else settings.RETRY_ATTEMPTS)
        self.retry_delay = retry_delay if retry_delay is not None else settings.RETRY_DELAY_MS / 1000

    @abstractmethod
    async def fetch_collection(self) -> list[Record]:
        """Fetch and normalize every available record."""
        pass

    @abstractmethod
    async def fetch_record_by_id(self, record_id: str) -> Record:
        pass

    async def _retry(self, coro_func, *args, **kwargs):
        """Run ``coro_func`` up to ``retry_attempts`` times, sleeping a fixed delay in between.

        The attempt counter lives in this call only; the last error is re-raised
        once the attempts are used up.
        """
        for attempt in range(1, self.retry_attempts + 1):
            try:
                return await coro_func(*args, **kwargs)
            except FetchError as e:
                if attempt == self.retry_attempts:
                    logger.error(
                        f"[{self.SOURCE_NAME}] Attempt {attempt}/{self.retry_attempts} failed: {e}. Giving up"
                    )
                    raise
                logger.warning(
                    f"[{self.SOURCE_NAME}] Attempt {attempt}/{self.retry_attempts} "
                    f"failed: {e}. Retrying in {self.retry_delay:.1f}s"
                )
                await asyncio.sleep(self.retry_delay)
