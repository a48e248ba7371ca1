"""Scrape orchestration: fetch a page, extract its Recipe data, normalize it."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from cookie_racho.errors import CookieRachoError, NoRecipeDataError
from cookie_racho.extract import (
    extract_canonical_url,
    extract_html_title,
    extract_merged_recipe_node,
)
from cookie_racho.models.recipe import ScrapedRecipe
from cookie_racho.models.scrape import ScrapeError, ScrapeOutcome
from cookie_racho.normalize import NormalizeContext, normalize_recipe

if TYPE_CHECKING:
    from cookie_racho.fetcher import Fetcher

log = structlog.get_logger()


async def scrape_recipe_from_url(
    url: str, fetcher: Fetcher, *, cache_ttl_ms: int | None = None
) -> ScrapedRecipe:
    """Fetch *url* and return its normalized recipe.

    Raises:
        NoRecipeDataError: the page has neither JSON-LD nor microdata Recipe.
        CookieRachoError: any fetch or normalization failure.
    """
    page = await fetcher.fetch_html(url, cache_ttl_ms=cache_ttl_ms)

    node = extract_merged_recipe_node(page.html)
    if node is None:
        raise NoRecipeDataError()

    context = NormalizeContext(
        source_url=page.resolved_url,
        canonical_url=extract_canonical_url(page.html),
        page_title=extract_html_title(page.html),
    )
    recipe = normalize_recipe(node, context)
    log.info("recipe_scraped", url=url, source_url=recipe.source_url, from_cache=page.from_cache)
    return recipe


async def scrape_recipes(
    urls: Iterable[str], fetcher: Fetcher, *, cache_ttl_ms: int | None = None
) -> ScrapeOutcome:
    """Scrape every URL in order; a failing URL is recorded and skipped."""
    outcome = ScrapeOutcome()
    for url in urls:
        try:
            recipe = await scrape_recipe_from_url(url, fetcher, cache_ttl_ms=cache_ttl_ms)
        except CookieRachoError as exc:
            log.warning("scrape_failed", url=url, code=exc.code, error=exc.message)
            outcome.errors.append(ScrapeError(url=url, message=exc.message))
            continue
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            log.warning("scrape_failed", url=url, error=message, exc_info=True)
            outcome.errors.append(ScrapeError(url=url, message=message))
            continue
        outcome.recipes.append(recipe)
    return outcome
