"""Shared fixtures: realistic recipe pages."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any

import pytest
import structlog

TARTE_JSON_LD: dict[str, Any] = {
    "@context": "https://schema.org",
    "@graph": [
        {"@type": "WebPage", "@id": "https://www.marmiton.org/recettes/tarte.aspx"},
        {
            "@type": "Recipe",
            "name": "Tarte aux pommes",
            "description": "Une tarte simple et rapide.",
            "totalTime": "PT20M",
            "recipeYield": "4 personnes",
            "recipeIngredient": [
                "200 g de farine",
                "3 pommes",
                "100 g de beurre",
            ],
            "recipeInstructions": [
                {"@type": "HowToStep", "text": "Préchauffer le four."},
                {"@type": "HowToStep", "text": "Cuire 20 min."},
            ],
        },
    ],
}


def render_page(
    json_ld: Any | None = None,
    *,
    title: str | None = "Tarte aux pommes - Marmiton",
    canonical: str | None = None,
    body: str = "",
) -> str:
    head = []
    if title is not None:
        head.append(f"<title>{title}</title>")
    if canonical is not None:
        head.append(f'<link rel="canonical" href="{canonical}">')
    if json_ld is not None:
        head.append(
            f'<script type="application/ld+json">{json.dumps(json_ld, ensure_ascii=False)}</script>'
        )
    return f"<html><head>{''.join(head)}</head><body>{body}</body></html>"


@pytest.fixture()
def recipe_page_html() -> str:
    """Marmiton-style page with a @graph JSON-LD Recipe and a canonical link."""
    return render_page(
        TARTE_JSON_LD,
        canonical="https://www.marmiton.org/recettes/recette_tarte-aux-pommes_12345.aspx",
    )


@pytest.fixture()
def render() -> Callable[..., str]:
    """The page builder, for tests that need a custom document."""
    return render_page


@pytest.fixture()
def tarte_json_ld() -> dict[str, Any]:
    return copy.deepcopy(TARTE_JSON_LD)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI runs point structlog at a captured stderr; undo that after each test."""
    yield
    structlog.reset_defaults()
