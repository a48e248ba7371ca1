from __future__ import annotations

from cookie_racho.normalize.aisle import infer_aisle_category
from cookie_racho.normalize.allergens import detect_allergens
from cookie_racho.normalize.batch import infer_batch_friendly
from cookie_racho.normalize.duration import parse_duration_to_ms, parse_iso8601_duration_to_minutes
from cookie_racho.normalize.ingredients import parse_ingredient_line
from cookie_racho.normalize.recipe import NormalizeContext, normalize_recipe
from cookie_racho.normalize.seasonal import infer_is_seasonal
from cookie_racho.normalize.steps import normalize_instructions_to_steps

__all__ = [
    # ingredients
    "parse_ingredient_line",
    "infer_aisle_category",
    # durations / steps
    "parse_iso8601_duration_to_minutes",
    "parse_duration_to_ms",
    "normalize_instructions_to_steps",
    # derived flags
    "detect_allergens",
    "infer_is_seasonal",
    "infer_batch_friendly",
    # recipe
    "NormalizeContext",
    "normalize_recipe",
]
