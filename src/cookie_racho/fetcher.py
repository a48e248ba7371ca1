"""HTML fetching with a TTL page cache, per-host rate limiting and timeouts.

A fresh cache entry short-circuits everything: no rate-limit wait, no
network. Otherwise the host is rate limited, the page is fetched with
redirects followed, and a successful response is written back to the cache
under the originally requested URL so a redirecting URL can be served from
cache without following the redirect again.

Nothing here retries; transient failures surface as recoverable errors.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

import httpx
import structlog

from cookie_racho.config import FetcherSettings
from cookie_racho.errors import (
    InvalidUrlError,
    RequestFailedError,
    RequestTimedOutError,
    UnsupportedSchemeError,
)
from cookie_racho.models.cache import FetchResult, PageCacheEntry
from cookie_racho.url import get_host, normalize_url

if TYPE_CHECKING:
    from cookie_racho.cache import PageCache
    from cookie_racho.rate_limiter import DomainRateLimiter

log = structlog.get_logger()

DEFAULT_CACHE_TTL_MS = 7 * 24 * 60 * 60 * 1000
ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def _now_ms() -> float:
    return time.time() * 1000


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Shared AsyncClient; redirects are followed per request in :class:`Fetcher`."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
    )


class Fetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: FetcherSettings | None = None,
        *,
        cache: PageCache | None = None,
        rate_limiter: DomainRateLimiter | None = None,
        now: Callable[[], float] = _now_ms,
    ) -> None:
        self._client = client
        self._settings = settings or FetcherSettings()
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._now = now

    async def fetch_html(self, url_spec: str, *, cache_ttl_ms: int | None = None) -> FetchResult:
        """Fetch *url_spec*, serving it from the cache when fresh enough.

        Raises:
            InvalidUrlError / UnsupportedSchemeError: the URL is unusable.
            RequestTimedOutError: no response within the configured timeout.
            RequestFailedError: non-2xx status, or a transport failure.
        """
        url = normalize_url(url_spec)
        host = get_host(url)
        ttl_ms = DEFAULT_CACHE_TTL_MS if cache_ttl_ms is None else cache_ttl_ms

        if self._cache is not None:
            entry = await self._cache.get(url)
            if entry is not None and self._now() - entry.fetched_at_ms <= ttl_ms:
                log.debug("cache_hit", url=url)
                return FetchResult(
                    url=url,
                    resolved_url=entry.resolved_url,
                    status=entry.status,
                    headers=entry.headers,
                    html=entry.body,
                    from_cache=True,
                )

        if self._rate_limiter is not None:
            await self._rate_limiter.schedule(host)

        response = await self._get(url)
        html = response.text
        resolved_url = _safe_normalize(str(response.url)) or url
        headers = {k: v for k, v in response.headers.items()}

        if self._cache is not None:
            await self._cache.set(
                PageCacheEntry(
                    url=url,
                    fetched_at_ms=int(self._now()),
                    resolved_url=resolved_url,
                    status=response.status_code,
                    headers=headers,
                    body=html,
                )
            )

        return FetchResult(
            url=url,
            resolved_url=resolved_url,
            status=response.status_code,
            headers=headers,
            html=html,
            from_cache=False,
        )

    async def _get(self, url: str) -> httpx.Response:
        timeout_ms = self._settings.timeout_ms
        headers = {
            "Accept": ACCEPT_HEADER,
            "Accept-Language": self._settings.accept_language,
            "User-Agent": self._settings.user_agent,
        }

        log.info("fetch_start", url=url)
        try:
            # Cancels the in-flight request when the deadline passes
            response = await asyncio.wait_for(
                self._client.get(url, headers=headers, follow_redirects=True),
                timeout=timeout_ms / 1000,
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            log.warning("fetch_timeout", url=url, timeout_ms=timeout_ms)
            raise RequestTimedOutError(timeout_ms) from exc
        except httpx.HTTPError as exc:
            log.warning("fetch_error", url=url, error=repr(exc))
            raise RequestFailedError(None, f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            log.warning("fetch_bad_status", url=url, status=response.status_code)
            raise RequestFailedError(response.status_code, response.reason_phrase)

        log.info("fetch_complete", url=url, status=response.status_code)
        return response


def _safe_normalize(url: str) -> str | None:
    try:
        return normalize_url(url)
    except (InvalidUrlError, UnsupportedSchemeError):
        return None
