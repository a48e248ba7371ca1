from __future__ import annotations

from collections.abc import Iterable

from cookie_racho.text import matches_any, tokenize

SEASONAL_KEYWORDS: tuple[str, ...] = (
    "asperge",
    "potimarron",
    "courge",
    "marron",
    "chataigne",
    "girolle",
    "morille",
    "cepe",
    "rhubarbe",
    "cerise",
    "fraise",
    "figue",
    "artichaut",
)

# "moule" is left out: it also names a baking tin
NON_VEGETARIAN_KEYWORDS: tuple[str, ...] = (
    "boeuf",
    "veau",
    "agneau",
    "poulet",
    "dinde",
    "canard",
    "lapin",
    "porc",
    "jambon",
    "lardon",
    "saucisse",
    "chorizo",
    "bacon",
    "merguez",
    "saumon",
    "thon",
    "cabillaud",
    "sardine",
    "maquereau",
    "calamar",
    "poisson",
    "crevette",
    "crabe",
    "homard",
    "gelatine",
    "anchois",
)


def infer_is_seasonal(ingredient_names: Iterable[str]) -> bool:
    return any(matches_any(tokenize(name), SEASONAL_KEYWORDS) for name in ingredient_names)


def contains_non_vegetarian(ingredient_names: Iterable[str]) -> bool:
    return any(matches_any(tokenize(name), NON_VEGETARIAN_KEYWORDS) for name in ingredient_names)
