from __future__ import annotations

from cookie_racho.models.cache import FetchResult, PageCacheEntry
from cookie_racho.models.recipe import (
    AisleCategory,
    Allergen,
    FieldViolation,
    ScrapedIngredient,
    ScrapedRecipe,
    ScrapedStep,
    Unit,
    validate_recipe,
)
from cookie_racho.models.scrape import ScrapeError, ScrapeOutcome
from cookie_racho.models.search import LinkResult, SearchOutcome, SearchResult, SearchSiteError
from cookie_racho.models.sites import Site, SourceMeta

__all__ = [
    # cache / fetch
    "PageCacheEntry",
    "FetchResult",
    # recipe
    "Unit",
    "AisleCategory",
    "Allergen",
    "ScrapedIngredient",
    "ScrapedStep",
    "ScrapedRecipe",
    "FieldViolation",
    "validate_recipe",
    # scrape
    "ScrapeError",
    "ScrapeOutcome",
    # search
    "LinkResult",
    "SearchResult",
    "SearchSiteError",
    "SearchOutcome",
    # sites
    "Site",
    "SourceMeta",
]
