from __future__ import annotations

from pydantic import BaseModel, Field


class LinkResult(BaseModel):
    """A candidate URL found on a search page; ``name`` when the page offered one."""

    url: str
    name: str | None = None


class SearchResult(BaseModel):
    name: str
    source_name: str
    source_url: str


class SearchSiteError(BaseModel):
    site_id: str
    site_name: str
    search_url: str
    message: str


class SearchOutcome(BaseModel):
    results: list[SearchResult] = Field(default_factory=list)
    errors: list[SearchSiteError] = Field(default_factory=list)
