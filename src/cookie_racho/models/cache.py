from __future__ import annotations

from pydantic import BaseModel, Field


class PageCacheEntry(BaseModel):
    """Stored result of a successful fetch, keyed by the normalized request URL."""

    url: str  # Normalized request URL (primary key), not the post-redirect URL
    fetched_at_ms: int
    resolved_url: str
    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str


class FetchResult(BaseModel):
    url: str
    resolved_url: str
    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    html: str
    from_cache: bool
