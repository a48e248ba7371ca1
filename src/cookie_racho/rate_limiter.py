"""Per-host request spacing.

The host → next-allowed-time map is owned by one limiter instance and is not
shared across processes; concurrent CLI runs can together exceed the
intended per-host rate.
"""

from __future__ import annotations

import asyncio
import math
import random
import time
from collections.abc import Awaitable, Callable

import structlog

log = structlog.get_logger()


def _now_ms() -> float:
    return time.time() * 1000


async def _sleep_ms(ms: float) -> None:
    await asyncio.sleep(ms / 1000)


class DomainRateLimiter:
    """Enforce a minimum delay (plus random jitter) between requests to a host.

    Every call to :meth:`schedule` advances the host's next allowed time,
    including the first call for a host, so jitter also applies to the gap
    after a host's first request.
    """

    def __init__(
        self,
        min_delay_ms: float,
        jitter_ms: float = 0,
        *,
        now: Callable[[], float] = _now_ms,
        sleep: Callable[[float], Awaitable[None]] = _sleep_ms,
        random_fn: Callable[[], float] = random.random,
    ) -> None:
        self._min_delay_ms = max(0, math.trunc(min_delay_ms))
        self._jitter_ms = max(0, math.trunc(jitter_ms))
        self._now = now
        self._sleep = sleep
        self._random = random_fn
        self._next_allowed_at: dict[str, float] = {}

    async def schedule(self, host: str) -> None:
        start = self._now()
        allowed_at = self._next_allowed_at.get(host, start)
        wait_ms = max(0, allowed_at - start)
        if wait_ms > 0:
            log.debug("rate_limit_wait", host=host, wait_ms=wait_ms)
            await self._sleep(wait_ms)

        jitter = math.floor(self._random() * self._jitter_ms) if self._jitter_ms > 0 else 0
        self._next_allowed_at[host] = self._now() + self._min_delay_ms + jitter
