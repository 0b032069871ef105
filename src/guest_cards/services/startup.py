"""Record store connection loop run at startup."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-interval retry policy; max_attempts=None retries forever."""

    interval_seconds: float = 5.0
    max_attempts: int | None = None

    def allows(self, attempt: int) -> bool:
        """Return true when the given 1-based attempt may run."""
        return self.max_attempts is None or attempt <= self.max_attempts


async def wait_for_store(
    ping: Callable[[], None],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> bool:
    """Call ping in a worker thread until it succeeds or attempts run out."""
    attempt = 1
    while policy.allows(attempt):
        try:
            await asyncio.to_thread(ping)
        except Exception as exc:
            logger.warning(
                "Record store unreachable (attempt %s): %s: %s",
                attempt,
                type(exc).__name__,
                exc,
            )
        else:
            logger.info("Connected to record store")
            return True
        attempt += 1
        if policy.allows(attempt):
            await sleep(policy.interval_seconds)
    logger.error("Giving up on record store after %s attempts", attempt - 1)
    return False
