"""Supermarket aisle inference for ingredient names."""

from __future__ import annotations

from cookie_racho.models.recipe import AisleCategory
from cookie_racho.text import matches_any, tokenize

# First matching rule wins, so meat/fish must come before anything that
# shares a word with it.
AISLE_RULES: tuple[tuple[AisleCategory, tuple[str, ...]], ...] = (
    (
        "boucherie_poisson",
        (
            "boeuf",
            "veau",
            "porc",
            "poulet",
            "dinde",
            "agneau",
            "jambon",
            "lardon",
            "saucisse",
            "saumon",
            "thon",
            "poisson",
            "crevette",
            "crabe",
            "homard",
        ),
    ),
    ("cremerie", ("lait", "beurre", "creme", "fromage", "yaourt", "yoghourt", "oeuf", "oeufs")),
    (
        "fruits_legumes",
        (
            "tomate",
            "oignon",
            "ail",
            "carotte",
            "courgette",
            "aubergine",
            "poivron",
            "pomme",
            "banane",
            "citron",
            "orange",
            "fraise",
            "salade",
            "epinard",
            "champignon",
            "asperge",
            "brocoli",
            "chou",
            "concombre",
        ),
    ),
    ("boulangerie", ("pain", "baguette", "brioche")),
    ("surgeles", ("surgele", "congele")),
    ("boissons", ("vin", "biere", "jus", "sirop")),
    ("entretien", ("papier", "aluminium", "film alimentaire", "liquide vaisselle")),
    (
        "epicerie",
        (
            "farine",
            "sucre",
            "sel",
            "poivre",
            "riz",
            "pate",
            "pates",
            "huile",
            "vinaigre",
            "levure",
            "chocolat",
            "cacao",
            "epice",
            "epices",
            "lentille",
            "pois chiche",
            "haricot",
        ),
    ),
)


def infer_aisle_category(ingredient_name: str) -> AisleCategory | None:
    tokens = tokenize(ingredient_name)
    if not tokens:
        return None
    for aisle, keywords in AISLE_RULES:
        if matches_any(tokens, keywords):
            return aisle
    return None
