from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator


class SourceMeta(BaseModel):
    source_name: str
    source_license: str
    source_attribution: str


class Site(BaseModel):
    """Static description of a known recipe site."""

    model_config = ConfigDict(frozen=True)

    id: str
    source_name: str
    source_license: str
    source_attribution: str
    host_suffixes: tuple[str, ...]
    # "{query}" is replaced by the percent-encoded search_query_prefix + query
    search_url_template: str | None = None
    search_query_prefix: str = ""
    # On-site search results are rendered client-side; fall back to the search engine
    client_rendered: bool = False

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not re.match(r"^[a-z0-9][a-z0-9_-]*$", v):
            raise ValueError(f"Invalid site ID: {v!r}")
        return v

    @property
    def primary_host(self) -> str:
        return self.host_suffixes[0]

    @property
    def meta(self) -> SourceMeta:
        return SourceMeta(
            source_name=self.source_name,
            source_license=self.source_license,
            source_attribution=self.source_attribution,
        )
