"""Merge of the JSON-LD Recipe node (primary) with the microdata node (fallback)."""

from __future__ import annotations

from cookie_racho.extract.jsonld import JsonObject, JsonValue, extract_recipe_json_ld
from cookie_racho.extract.microdata import extract_recipe_microdata

_SCALAR_KEYS = (
    "name",
    "description",
    "totalTime",
    "prepTime",
    "cookTime",
    "recipeYield",
    "suitableForDiet",
    "url",
)


def extract_merged_recipe_node(html: str) -> JsonObject | None:
    return merge_recipe_nodes(extract_recipe_json_ld(html), extract_recipe_microdata(html))


def merge_recipe_nodes(
    primary: JsonObject | None, fallback: JsonObject | None
) -> JsonObject | None:
    """Combine two Recipe nodes without mutating either.

    Scalar strings take the first non-empty value, primary first. List fields
    prefer whichever side has at least two entries, since a single entry
    usually means the page crammed everything into one blob.
    """
    if primary is None:
        return fallback
    if fallback is None:
        return primary

    merged: JsonObject = {**fallback, **primary}
    for key in _SCALAR_KEYS:
        chosen = _choose_non_empty_string(primary.get(key), fallback.get(key))
        if chosen is not None:
            merged[key] = chosen

    merged["recipeIngredient"] = _choose_best_list(
        primary.get("recipeIngredient"), fallback.get("recipeIngredient")
    )
    merged["recipeInstructions"] = _choose_best_instructions(
        primary.get("recipeInstructions"), fallback.get("recipeInstructions")
    )
    return merged


def _non_empty_str(value: JsonValue) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _choose_non_empty_string(a: JsonValue, b: JsonValue) -> str | None:
    return _non_empty_str(a) or _non_empty_str(b)


def _as_list(value: JsonValue) -> list[JsonValue]:
    if isinstance(value, list):
        return value
    if _non_empty_str(value):
        return [value]
    return []


def _choose_best_list(a: JsonValue, b: JsonValue) -> list[JsonValue]:
    a_list, b_list = _as_list(a), _as_list(b)
    for candidate in (a_list, b_list):
        if len(candidate) >= 2:
            return candidate
    return a_list or b_list


def _choose_best_instructions(a: JsonValue, b: JsonValue) -> JsonValue:
    a_list = a if isinstance(a, list) else None
    b_list = b if isinstance(b, list) else None

    if a_list and len(a_list) >= 2:
        return a_list
    if b_list and len(b_list) >= 2:
        return b_list
    if a_list:
        return a_list
    if _non_empty_str(a):
        return a
    if b_list:
        return b_list
    if _non_empty_str(b):
        return b
    return []
