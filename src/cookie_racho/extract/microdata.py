"""schema.org Recipe microdata (``itemscope``/``itemprop``) extraction.

Produces a node shaped like a JSON-LD Recipe so both sources can be merged.
"""

from __future__ import annotations

from bs4 import Tag

from cookie_racho.extract.jsonld import JsonObject, parse_html
from cookie_racho.text import normalize_whitespace

_SCALAR_PROPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("name", ("name",)),
    ("description", ("description",)),
    ("totalTime", ("totalTime",)),
    ("prepTime", ("prepTime",)),
    ("cookTime", ("cookTime",)),
    ("recipeYield", ("recipeYield", "yield")),
    ("suitableForDiet", ("suitableForDiet",)),
    ("url", ("url",)),
)
_INGREDIENT_PROPS = ("recipeIngredient", "ingredients")
_INSTRUCTION_PROPS = ("recipeInstructions", "instructions")
_VALUE_ATTRS = ("content", "value", "href", "src")


def extract_recipe_microdata(html: str) -> JsonObject | None:
    root = _find_recipe_root(html)
    if root is None:
        return None

    node: JsonObject = {}
    for key, props in _SCALAR_PROPS:
        value = _read_first(root, props)
        if value:
            node[key] = value

    ingredients = _read_all(root, _INGREDIENT_PROPS)
    if ingredients:
        node["recipeIngredient"] = ingredients
    instructions = _read_instructions(root)
    if instructions:
        node["recipeInstructions"] = instructions

    return node or None


def _find_recipe_root(html: str) -> Tag | None:
    soup = parse_html(html)
    for el in soup.find_all(attrs={"itemscope": True, "itemtype": True}):
        itemtype = str(el.get("itemtype", "")).lower()
        if "schema.org" in itemtype and "recipe" in itemtype:
            return el
    return None


def _selector(props: tuple[str, ...]) -> str:
    return ",".join(f'[itemprop="{p}"]' for p in props)


def _read_first(root: Tag, props: tuple[str, ...]) -> str | None:
    for prop in props:
        el = root.select_one(_selector((prop,)))
        if el is None:
            continue
        value = _read_value(el)
        if value:
            return value
    return None


def _read_all(root: Tag, props: tuple[str, ...]) -> list[str]:
    values = (_read_value(el) for el in root.select(_selector(props)))
    return [v for v in values if v]


def _read_instructions(root: Tag) -> list[str]:
    out: list[str] = []
    for el in root.select(_selector(_INSTRUCTION_PROPS)):
        li_texts = [normalize_whitespace(li.get_text()) for li in el.find_all("li")]
        li_texts = [t for t in li_texts if t]
        if len(li_texts) >= 2:
            out.extend(li_texts)
            continue
        value = _read_value(el)
        if value:
            out.append(value)
    return out


def _read_value(el: Tag) -> str | None:
    for attr in _VALUE_ATTRS:
        raw = el.get(attr)
        if isinstance(raw, str) and raw:
            return normalize_whitespace(raw) or None
    return normalize_whitespace(el.get_text()) or None
