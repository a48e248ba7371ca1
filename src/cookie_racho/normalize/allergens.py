"""Allergen detection over ingredient names."""

from __future__ import annotations

from collections.abc import Iterable

from cookie_racho.models.recipe import Allergen
from cookie_racho.text import matches_any, tokenize

ALLERGEN_RULES: tuple[tuple[Allergen, tuple[str, ...]], ...] = (
    (
        "gluten",
        (
            "farine",
            "ble",
            "pate",
            "pates",
            "pain",
            "semoule",
            "biscuit",
            "gateau",
            "couscous",
            "seigle",
            "orge",
            "avoine",
        ),
    ),
    ("lactose", ("lait", "beurre", "creme", "fromage", "yaourt", "yoghourt", "lactose")),
    ("oeuf", ("oeuf", "oeufs")),
    ("arachide", ("arachide", "cacahuete", "cacahuetes")),
    (
        "fruits_a_coque",
        (
            "noix",
            "noisette",
            "noisettes",
            "amande",
            "amandes",
            "cajou",
            "pistache",
            "pecan",
            "macadamia",
        ),
    ),
    ("soja", ("soja",)),
    ("poisson", ("poisson", "saumon", "thon", "cabillaud", "sardine", "maquereau", "anchois")),
    ("crustaces", ("crustace", "crevette", "crevettes", "crabe", "homard")),
    ("sesame", ("sesame",)),
)


def detect_allergens(ingredient_names: Iterable[str]) -> list[Allergen]:
    """Allergens present in any ingredient, in rule order, each at most once."""
    tokenized = [tokenize(name) for name in ingredient_names]
    return [
        allergen
        for allergen, keywords in ALLERGEN_RULES
        if any(matches_any(tokens, keywords) for tokens in tokenized)
    ]
