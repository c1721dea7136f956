import asyncio
import logging
import time
from typing import Awaitable, TypeVar

from safaraya.core.exceptions import ApiError, InternalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Deadline:
    """Per-request time budget shared by every storage call of that request."""

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    async def run(self, operation: str, awaitable: Awaitable[T]) -> T:
        remaining = self.remaining()
        if remaining <= 0:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            logger.error("%s: deadline of %.1fs already exceeded", operation, self.seconds)
            raise InternalError()

        start = time.perf_counter()
        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except ApiError:
            raise
        except asyncio.TimeoutError as exc:
            elapsed = time.perf_counter() - start
            logger.error("%s: deadline of %.1fs exceeded after %.3fs", operation, self.seconds, elapsed)
            raise InternalError() from exc
        except Exception as exc:
            elapsed = time.perf_counter() - start
            logger.exception("%s: failed after %.3fs: %s", operation, elapsed, exc)
            raise InternalError() from exc
