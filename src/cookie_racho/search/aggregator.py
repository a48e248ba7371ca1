"""Federated recipe search across the site registry.

Sites are queried one after another in the caller's order, sharing the
fetcher's rate limiter and cache. A failing site is reported in
``SearchOutcome.errors`` and never aborts the batch.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

import structlog

from cookie_racho.errors import CookieRachoError, EmptyQueryError, UnknownSiteError
from cookie_racho.models.search import LinkResult, SearchOutcome, SearchResult, SearchSiteError
from cookie_racho.models.sites import Site
from cookie_racho.search.duckduckgo import (
    build_duckduckgo_search_url,
    extract_duckduckgo_results,
    is_duckduckgo_host,
)
from cookie_racho.search.item_list import extract_item_list_results
from cookie_racho.sites import build_search_url, default_site_ids, get_site_by_id
from cookie_racho.url import get_host

if TYPE_CHECKING:
    from cookie_racho.fetcher import Fetcher

log = structlog.get_logger()

DEFAULT_MAX_RESULTS = 10
DEFAULT_MAX_RESULTS_PER_SITE = 5

_EXTENSION_RE = re.compile(r"\.[a-zA-Z0-9]+$")


async def search_recipes(
    query: str,
    fetcher: Fetcher,
    *,
    site_ids: Sequence[str] | None = None,
    max_results: int = DEFAULT_MAX_RESULTS,
    max_results_per_site: int = DEFAULT_MAX_RESULTS_PER_SITE,
    cache_ttl_ms: int | None = None,
) -> SearchOutcome:
    """Search every requested site for *query*.

    Results are deduplicated by normalized URL in first-seen order, capped
    per site and globally. Every site is still searched after the global cap
    is reached so that its failures are reported.

    Raises:
        EmptyQueryError: *query* is blank.
        UnknownSiteError: a site id is not in the registry (before any fetch).
    """
    q = query.strip()
    if not q:
        raise EmptyQueryError()

    sites: list[Site] = []
    for site_id in default_site_ids() if site_ids is None else site_ids:
        site = get_site_by_id(site_id)
        if site is None:
            raise UnknownSiteError(site_id)
        sites.append(site)

    outcome = SearchOutcome()
    seen: set[str] = set()

    for site in sites:
        search_url = build_search_url(site, q)
        if search_url is None:
            continue

        try:
            links = await _search_site(site, search_url, q, fetcher, cache_ttl_ms)
        except Exception as exc:
            # Unexpected exceptions are recorded like package errors, with a traceback
            expected = isinstance(exc, CookieRachoError)
            message = _describe(exc)
            log.warning(
                "search_site_failed",
                site_id=site.id,
                search_url=search_url,
                error=message,
                exc_info=not expected,
            )
            outcome.errors.append(
                SearchSiteError(
                    site_id=site.id,
                    site_name=site.source_name,
                    search_url=search_url,
                    message=message,
                )
            )
            continue

        added = 0
        for link in links:
            if added >= max_results_per_site or len(outcome.results) >= max_results:
                break
            if link.url in seen:
                continue
            seen.add(link.url)
            outcome.results.append(
                SearchResult(
                    name=(link.name or fallback_name_from_url(link.url)).strip(),
                    source_name=site.source_name,
                    source_url=link.url,
                )
            )
            added += 1

        log.info("search_site_done", site_id=site.id, found=len(links), added=added)

    return outcome


async def _search_site(
    site: Site, search_url: str, query: str, fetcher: Fetcher, cache_ttl_ms: int | None
) -> list[LinkResult]:
    links = await _fetch_links(search_url, site, fetcher, cache_ttl_ms)
    if links or not site.client_rendered:
        return links

    # The site's own search page renders results with JavaScript
    fallback_url = build_duckduckgo_search_url(f"site:{site.primary_host} recette {query}")
    log.debug("search_engine_fallback", site_id=site.id, search_url=fallback_url)
    try:
        return await _fetch_links(fallback_url, site, fetcher, cache_ttl_ms)
    except CookieRachoError as exc:
        raise CookieRachoError(
            exc.code, f"DuckDuckGo fallback failed: {exc.message}", exc.recoverable
        ) from exc


async def _fetch_links(
    search_url: str, site: Site, fetcher: Fetcher, cache_ttl_ms: int | None
) -> list[LinkResult]:
    page = await fetcher.fetch_html(search_url, cache_ttl_ms=cache_ttl_ms)
    if is_duckduckgo_host(get_host(search_url)):
        return extract_duckduckgo_results(page.html, page.resolved_url, site.host_suffixes)
    return extract_item_list_results(page.html, page.resolved_url, site.host_suffixes)


def fallback_name_from_url(url: str) -> str:
    """Human-ish name from the last path segment: ``/recettes/tarte-aux-pommes.aspx``."""
    segments = [s for s in urlsplit(url).path.split("/") if s]
    last = unquote(segments[-1]) if segments else ""
    stem = _EXTENSION_RE.sub("", last)
    cleaned = " ".join(stem.replace("_", " ").replace("-", " ").split())
    if not cleaned:
        return get_host(url)
    return cleaned[0].upper() + cleaned[1:]


def _describe(exc: Exception) -> str:
    if isinstance(exc, CookieRachoError):
        return exc.message
    return str(exc) or type(exc).__name__
