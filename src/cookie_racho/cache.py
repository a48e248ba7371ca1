"""SQLite page cache.

Entries are keyed by the normalized *requested* URL and are never evicted:
a newer fetch of the same URL overwrites the row, and freshness is judged by
the reader (see :class:`cookie_racho.fetcher.Fetcher`) from ``fetched_at_ms``.

Several CLI processes may share one cache file, so connections wait on a
locked database (``busy_timeout``) instead of failing, and file-backed stores
switch to WAL. Both pragmas are best-effort.

``aiosqlite.Error`` never leaves this module. A failed read is a miss
(``None``); a failed write is logged and the fetched page is still returned.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import aiosqlite
import structlog

from cookie_racho.models.cache import PageCacheEntry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

log = structlog.get_logger()

BUSY_TIMEOUT_MS = 5000

_CREATE_PAGE_TABLE = """
CREATE TABLE IF NOT EXISTS page_cache (
    url           TEXT PRIMARY KEY,
    fetched_at_ms INTEGER NOT NULL,
    resolved_url  TEXT NOT NULL,
    status        INTEGER NOT NULL,
    headers_json  TEXT NOT NULL,
    body          TEXT NOT NULL
)
"""


class PageCache(Protocol):
    async def get(self, url: str) -> PageCacheEntry | None: ...

    async def set(self, entry: PageCacheEntry) -> None: ...


class SqlitePageCache:
    """aiosqlite-backed implementation of :class:`PageCache`."""

    def __init__(self, db: aiosqlite.Connection, *, file_backed: bool = False) -> None:
        self._db = db
        self._file_backed = file_backed

    async def init_db(self) -> None:
        """Apply pragmas and create the table. Called once after connecting."""
        await self._try_pragma(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
        if self._file_backed:
            await self._try_pragma("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_PAGE_TABLE)
        await self._db.commit()

    async def _try_pragma(self, pragma: str) -> None:
        try:
            await self._db.execute(pragma)
        except aiosqlite.Error:
            log.debug("cache_pragma_failed", pragma=pragma, exc_info=True)

    async def get(self, url: str) -> PageCacheEntry | None:
        """Read an entry. Returns ``None`` on cache miss or read failure."""
        try:
            cursor = await self._db.execute(
                "SELECT url, fetched_at_ms, resolved_url, status, headers_json, body "
                "FROM page_cache WHERE url = ?",
                (url,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("cache_read_error", url=url, exc_info=True)
            return None

        if row is None:
            return None

        return PageCacheEntry(
            url=row[0],
            fetched_at_ms=row[1],
            resolved_url=row[2],
            status=row[3],
            headers=_load_headers(row[4]),
            body=row[5],
        )

    async def set(self, entry: PageCacheEntry) -> None:
        """Write (or overwrite) an entry. Non-fatal on failure."""
        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO page_cache "
                "(url, fetched_at_ms, resolved_url, status, headers_json, body) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    entry.url,
                    entry.fetched_at_ms,
                    entry.resolved_url,
                    entry.status,
                    json.dumps(entry.headers),
                    entry.body,
                ),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", url=entry.url, exc_info=True)


def _load_headers(raw: str) -> dict[str, str]:
    try:
        value = json.loads(raw)
    except ValueError:
        return {}
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@asynccontextmanager
async def open_page_cache(db_path: str) -> AsyncIterator[SqlitePageCache]:
    """Open (creating if needed) the cache database at *db_path*."""
    file_backed = db_path != ":memory:"
    if file_backed:
        Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        db_path = str(Path(db_path).expanduser())

    async with aiosqlite.connect(db_path, timeout=BUSY_TIMEOUT_MS / 1000) as db:
        cache = SqlitePageCache(db, file_backed=file_backed)
        await cache.init_db()
        log.debug("cache_opened", db_path=db_path)
        yield cache
