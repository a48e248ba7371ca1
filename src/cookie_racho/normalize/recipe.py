"""Recipe normalization: a merged Recipe node becomes a validated ScrapedRecipe."""

from __future__ import annotations

import html
import math
import re
from dataclasses import dataclass
from typing import Any

from cookie_racho.errors import (
    InsufficientDataError,
    InvalidIngredientsError,
    MissingNameError,
    RecipeValidationError,
)
from cookie_racho.models.recipe import ScrapedIngredient, ScrapedRecipe, validate_recipe
from cookie_racho.normalize.aisle import infer_aisle_category
from cookie_racho.normalize.allergens import detect_allergens
from cookie_racho.normalize.batch import infer_batch_friendly
from cookie_racho.normalize.duration import parse_iso8601_duration_to_minutes
from cookie_racho.normalize.ingredients import parse_ingredient_line
from cookie_racho.normalize.seasonal import contains_non_vegetarian, infer_is_seasonal
from cookie_racho.normalize.steps import normalize_instructions_to_steps
from cookie_racho.sites import infer_source_meta
from cookie_racho.text import to_ascii_lower
from cookie_racho.url import normalize_url, resolve_url

DEFAULT_PREP_MINUTES = 30
DEFAULT_SERVINGS = 4
PREP_TIME_BOUNDS = (5, 300)
SERVINGS_BOUNDS = (1, 20)

_FIRST_INT_RE = re.compile(r"\d+")
_VEGETARIAN_DIETS = ("vegetariandiet", "vegandiet")


@dataclass(frozen=True)
class NormalizeContext:
    """Page-level facts the Recipe node itself may not carry."""

    source_url: str
    canonical_url: str | None = None
    page_title: str | None = None
    source_name: str | None = None
    source_license: str | None = None
    source_attribution: str | None = None


def normalize_recipe(node: dict[str, Any], context: NormalizeContext) -> ScrapedRecipe:
    """Build a :class:`ScrapedRecipe` from a schema.org Recipe node.

    Raises:
        MissingNameError: neither the node nor the page title gives a name.
        InvalidIngredientsError: ``recipeIngredient`` has an unusable shape.
        InsufficientDataError: fewer than two ingredients or two steps.
        RecipeValidationError: the assembled record breaks a field invariant.
    """
    base_url = normalize_url(context.source_url)
    source_url = _pick_source_url(node, context, base_url)

    inferred = infer_source_meta(source_url)
    source_name = _override(context.source_name, inferred.source_name)
    source_license = _override(context.source_license, inferred.source_license)
    source_attribution = _override(context.source_attribution, inferred.source_attribution)

    raw_name = node.get("name")
    if not isinstance(raw_name, str) or not raw_name.strip():
        raw_name = context.page_title or ""
    name = html.unescape(raw_name).strip()
    if not name:
        raise MissingNameError()

    raw_description = node.get("description")
    description = html.unescape(raw_description).strip() if isinstance(raw_description, str) else ""

    ingredients = [_with_aisle(ing) for ing in _parse_ingredients(node.get("recipeIngredient"))]
    steps = normalize_instructions_to_steps(node.get("recipeInstructions"))

    if len(ingredients) < 2:
        raise InsufficientDataError("ingredients", len(ingredients))
    if len(steps) < 2:
        raise InsufficientDataError("steps", len(steps))

    ingredient_names = [ing.name for ing in ingredients]
    data = {
        "name": name,
        "description": description,
        "vegetarian": _derive_vegetarian(node, ingredient_names),
        "max_prep_time": clamp_int(_derive_total_minutes(node), *PREP_TIME_BOUNDS),
        "is_seasonal": infer_is_seasonal(ingredient_names),
        "batch_friendly": infer_batch_friendly(name, description, steps),
        "base_servings": clamp_int(_derive_servings(node), *SERVINGS_BOUNDS),
        "allergens": detect_allergens(ingredient_names),
        "ingredients": ingredients,
        "steps": steps,
        "source_name": source_name,
        "source_url": source_url,
        "source_license": source_license,
        "source_attribution": source_attribution,
    }

    result = validate_recipe(data)
    if isinstance(result, list):
        raise RecipeValidationError(result)
    return result


def clamp_int(value: float, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


# ---------------------------------------------------------------------------
# Field derivation
# ---------------------------------------------------------------------------


def _override(explicit: str | None, inferred: str) -> str:
    return inferred if explicit is None else explicit


def _pick_source_url(node: dict[str, Any], context: NormalizeContext, base_url: str) -> str:
    for candidate in (context.canonical_url, node.get("mainEntityOfPage"), node.get("url")):
        if isinstance(candidate, dict):
            candidate = candidate.get("@id")
        if not isinstance(candidate, str):
            continue
        resolved = resolve_url(candidate, base_url)
        if resolved:
            return resolved
    return base_url


def _parse_ingredients(value: Any) -> list[ScrapedIngredient]:
    if not value:
        return []
    if isinstance(value, str):
        lines = [value]
    elif isinstance(value, list):
        lines = [v for v in value if isinstance(v, str)]
    else:
        raise InvalidIngredientsError(type(value).__name__)

    parsed = (parse_ingredient_line(html.unescape(line)) for line in lines)
    return [ing for ing in parsed if ing is not None]


def _with_aisle(ingredient: ScrapedIngredient) -> ScrapedIngredient:
    if ingredient.aisle is not None:
        return ingredient
    aisle = infer_aisle_category(ingredient.name)
    if aisle is None:
        return ingredient
    return ingredient.model_copy(update={"aisle": aisle})


def _derive_vegetarian(node: dict[str, Any], ingredient_names: list[str]) -> bool:
    diets = _collect_diet_strings(node.get("suitableForDiet"))
    if any(marker in diet for diet in diets for marker in _VEGETARIAN_DIETS):
        return True
    return not contains_non_vegetarian(ingredient_names)


def _collect_diet_strings(value: Any) -> list[str]:
    if isinstance(value, list):
        items = value
    elif value:
        items = [value]
    else:
        return []

    out = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("@id")
        if isinstance(item, str):
            out.append(to_ascii_lower(item))
    return out


def _parse_minutes(value: Any) -> int | None:
    return parse_iso8601_duration_to_minutes(value) if isinstance(value, str) else None


def _derive_total_minutes(node: dict[str, Any]) -> int:
    total = _parse_minutes(node.get("totalTime"))
    if total is not None:
        return total

    prep = _parse_minutes(node.get("prepTime"))
    cook = _parse_minutes(node.get("cookTime"))
    if prep is not None and cook is not None:
        return prep + cook
    if prep is not None:
        return prep
    if cook is not None:
        return cook
    return DEFAULT_PREP_MINUTES


def _derive_servings(node: dict[str, Any]) -> int:
    value = node.get("recipeYield")
    if value is None:
        value = node.get("yield")
    if isinstance(value, list):
        value = next((v for v in value if isinstance(v, (str, int, float))), None)

    if isinstance(value, str):
        match = _FIRST_INT_RE.search(value)
        if match is None:
            return DEFAULT_SERVINGS
        digits = match.group().lstrip("0") or "0"
        # anything this long is far above the clamp anyway
        servings = int(digits) if len(digits) <= 9 else SERVINGS_BOUNDS[1]
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # json.loads accepts NaN and Infinity
        servings = int(value) if math.isfinite(value) else DEFAULT_SERVINGS
    else:
        return DEFAULT_SERVINGS
    return servings if servings > 0 else DEFAULT_SERVINGS
