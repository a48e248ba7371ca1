from __future__ import annotations

from pydantic import BaseModel, Field

from cookie_racho.models.recipe import ScrapedRecipe


class ScrapeError(BaseModel):
    url: str
    message: str


class ScrapeOutcome(BaseModel):
    recipes: list[ScrapedRecipe] = Field(default_factory=list)
    errors: list[ScrapeError] = Field(default_factory=list)
