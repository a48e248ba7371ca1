"""Integration test fixtures.

Provides a Fetcher wired to an in-memory SQLite page cache and a real
httpx client (mocked per test with respx), with rate limiting disabled.
"""

from __future__ import annotations

import aiosqlite
import httpx
import pytest

from cookie_racho.cache import SqlitePageCache
from cookie_racho.config import FetcherSettings
from cookie_racho.fetcher import Fetcher
from cookie_racho.rate_limiter import DomainRateLimiter


@pytest.fixture()
async def page_cache():
    async with aiosqlite.connect(":memory:") as db:
        cache = SqlitePageCache(db)
        await cache.init_db()
        yield cache


@pytest.fixture()
async def fetcher(page_cache: SqlitePageCache):
    """Fetcher for integration tests: cached, unthrottled, 5s timeout."""
    settings = FetcherSettings(timeout_seconds=5, rate_limit_ms=0)
    async with httpx.AsyncClient() as client:
        yield Fetcher(
            client,
            settings,
            cache=page_cache,
            rate_limiter=DomainRateLimiter(settings.rate_limit_ms, settings.effective_jitter_ms),
        )
