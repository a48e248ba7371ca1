"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import aiosqlite
import pytest

from cookie_racho.cache import SqlitePageCache


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 1_000_000) -> None:
        self.now_ms = start_ms
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms

    async def sleep(self, ms: float) -> None:
        self.sleeps.append(ms)
        self.now_ms += ms


@pytest.fixture()
async def cache():
    """In-memory SQLite page cache for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        c = SqlitePageCache(db)
        await c.init_db()
        yield c


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
