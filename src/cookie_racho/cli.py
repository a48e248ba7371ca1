"""cookie-racho command line.

Usage:
    cookie-racho extract URL [URL ...] [--format json|jsonl]
    cookie-racho search QUERY [--sites marmiton,750g] [--max-results 10]

Recipes and search results go to stdout as JSON; per-item failures go to
stderr. The exit code is 1 when any URL or site failed, 2 on usage errors.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Sequence
from contextlib import AsyncExitStack, asynccontextmanager
from enum import StrEnum
from typing import Any

import typer
from pydantic import ValidationError

from cookie_racho.cache import open_page_cache
from cookie_racho.config import Settings
from cookie_racho.errors import CookieRachoError
from cookie_racho.fetcher import Fetcher, build_http_client
from cookie_racho.logging_config import configure_logging
from cookie_racho.models.scrape import ScrapeOutcome
from cookie_racho.models.search import SearchOutcome
from cookie_racho.normalize.duration import parse_duration_to_ms
from cookie_racho.rate_limiter import DomainRateLimiter
from cookie_racho.scrape import scrape_recipes
from cookie_racho.search import search_recipes
from cookie_racho.sites import get_site_by_id

app = typer.Typer(
    name="cookie-racho",
    help="Extract structured recipes from French cooking sites and search across them.",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    JSON = "json"
    JSONL = "jsonl"


# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------


def _duration_ms(value: str | None, option: str, *, allow_zero: bool = False) -> int | None:
    if value is None:
        return None
    ms = parse_duration_to_ms(value)
    if ms is None or ms < 0 or (ms == 0 and not allow_zero):
        kind = "non-negative" if allow_zero else "positive"
        raise typer.BadParameter(f"{option} must be a {kind} duration (e.g. 500ms, 10s, 7d)")
    return ms


def _site_ids(value: str | None) -> list[str] | None:
    if value is None:
        return None
    ids = [s.strip() for s in value.split(",") if s.strip()]
    for site_id in ids:
        if get_site_by_id(site_id) is None:
            raise typer.BadParameter(f"Unknown site id: {site_id}")
    return ids


def _load_settings(
    *,
    no_cache: bool,
    cache_path: str | None,
    timeout_ms: int | None,
    rate_ms: int | None,
    user_agent: str | None,
    accept_language: str | None,
    search: dict[str, Any] | None = None,
) -> Settings:
    cache: dict[str, Any] = {}
    if no_cache:
        cache["enabled"] = False
    if cache_path is not None:
        cache["db_path"] = cache_path

    fetcher: dict[str, Any] = {}
    if timeout_ms is not None:
        fetcher["timeout_seconds"] = timeout_ms / 1000
    if rate_ms is not None:
        fetcher["rate_limit_ms"] = rate_ms
    if user_agent is not None:
        fetcher["user_agent"] = user_agent
    if accept_language is not None:
        fetcher["accept_language"] = accept_language

    overrides: dict[str, Any] = {"cache": cache, "fetcher": fetcher}
    if search:
        overrides["search"] = search

    try:
        # Nested dicts are merged over env/YAML values, not substituted
        settings = Settings(**{k: v for k, v in overrides.items() if v})
    except ValidationError as exc:
        typer.echo(f"Invalid configuration:\n{exc}", err=True)
        raise typer.Exit(code=2) from exc

    configure_logging(settings.logging)
    return settings


@asynccontextmanager
async def open_fetcher(settings: Settings) -> AsyncIterator[Fetcher]:
    """A :class:`Fetcher` wired to the configured cache and rate limiter."""
    async with AsyncExitStack() as stack:
        client = await stack.enter_async_context(build_http_client(settings.fetcher))
        cache = None
        if settings.cache.enabled:
            cache = await stack.enter_async_context(open_page_cache(settings.cache.db_path))
        limiter = DomainRateLimiter(
            settings.fetcher.rate_limit_ms, settings.fetcher.effective_jitter_ms
        )
        yield Fetcher(client, settings.fetcher, cache=cache, rate_limiter=limiter)


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def _emit(items: Sequence[dict[str, Any]], fmt: OutputFormat, *, unwrap_single: bool) -> None:
    if fmt is OutputFormat.JSONL:
        for item in items:
            typer.echo(_dump(item))
    elif unwrap_single and len(items) == 1:
        typer.echo(_dump(items[0]))
    else:
        typer.echo(_dump(list(items)))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def extract(
    urls: list[str] = typer.Argument(..., help="Recipe page URLs."),
    fmt: OutputFormat = typer.Option(OutputFormat.JSON, "--format", help="Output framing."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the page cache."),
    cache_path: str | None = typer.Option(None, "--cache-path", help="SQLite cache file."),
    cache_ttl: str | None = typer.Option(None, "--cache-ttl", help="Cache freshness, e.g. 7d."),
    timeout: str | None = typer.Option(None, "--timeout", help="Per-request timeout, e.g. 30s."),
    rate: str | None = typer.Option(None, "--rate", help="Minimum delay per host, e.g. 1500ms."),
    user_agent: str | None = typer.Option(None, "--user-agent"),
    accept_language: str | None = typer.Option(None, "--accept-language"),
) -> None:
    """Scrape recipes from one or more URLs."""
    ttl_ms = _duration_ms(cache_ttl, "--cache-ttl")
    settings = _load_settings(
        no_cache=no_cache,
        cache_path=cache_path,
        timeout_ms=_duration_ms(timeout, "--timeout"),
        rate_ms=_duration_ms(rate, "--rate", allow_zero=True),
        user_agent=user_agent,
        accept_language=accept_language,
    )
    if ttl_ms is None:
        ttl_ms = settings.cache.extract_ttl_ms

    async def run() -> ScrapeOutcome:
        async with open_fetcher(settings) as fetcher:
            return await scrape_recipes(urls, fetcher, cache_ttl_ms=ttl_ms)

    outcome = asyncio.run(run())

    for error in outcome.errors:
        typer.echo(f"Failed to scrape {error.url}: {error.message}", err=True)
    if outcome.recipes:
        _emit([r.to_json_dict() for r in outcome.recipes], fmt, unwrap_single=True)
    if outcome.errors:
        raise typer.Exit(code=1)


@app.command()
def search(
    query: list[str] = typer.Argument(..., help="Search terms."),
    sites: str | None = typer.Option(None, "--sites", help="Comma-separated site ids."),
    max_results: int | None = typer.Option(None, "--max-results", min=1),
    max_results_per_site: int | None = typer.Option(None, "--max-results-per-site", min=1),
    fmt: OutputFormat = typer.Option(OutputFormat.JSON, "--format", help="Output framing."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the page cache."),
    cache_path: str | None = typer.Option(None, "--cache-path", help="SQLite cache file."),
    cache_ttl: str | None = typer.Option(None, "--cache-ttl", help="Cache freshness, e.g. 12h."),
    timeout: str | None = typer.Option(None, "--timeout", help="Per-request timeout, e.g. 30s."),
    rate: str | None = typer.Option(None, "--rate", help="Minimum delay per host, e.g. 1500ms."),
    user_agent: str | None = typer.Option(None, "--user-agent"),
    accept_language: str | None = typer.Option(None, "--accept-language"),
) -> None:
    """Search recipe sites and list candidate recipe URLs."""
    ttl_ms = _duration_ms(cache_ttl, "--cache-ttl")
    search_overrides: dict[str, Any] = {}
    site_ids = _site_ids(sites)
    if site_ids is not None:
        search_overrides["sites"] = site_ids
    if max_results is not None:
        search_overrides["max_results"] = max_results
    if max_results_per_site is not None:
        search_overrides["max_results_per_site"] = max_results_per_site

    settings = _load_settings(
        no_cache=no_cache,
        cache_path=cache_path,
        timeout_ms=_duration_ms(timeout, "--timeout"),
        rate_ms=_duration_ms(rate, "--rate", allow_zero=True),
        user_agent=user_agent,
        accept_language=accept_language,
        search=search_overrides,
    )
    if ttl_ms is None:
        ttl_ms = settings.cache.search_ttl_ms

    async def run() -> SearchOutcome:
        async with open_fetcher(settings) as fetcher:
            return await search_recipes(
                " ".join(query),
                fetcher,
                site_ids=settings.search.sites or None,
                max_results=settings.search.max_results,
                max_results_per_site=settings.search.max_results_per_site,
                cache_ttl_ms=ttl_ms,
            )

    try:
        outcome = asyncio.run(run())
    except CookieRachoError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=2) from exc

    for error in outcome.errors:
        typer.echo(
            f"Search failed for {error.site_name} ({error.site_id}): {error.message}", err=True
        )
    _emit([r.model_dump(mode="json") for r in outcome.results], fmt, unwrap_single=False)
    if outcome.errors:
        raise typer.Exit(code=1)
