"""French ingredient-line parsing.

``"200 g de farine"`` becomes ``ScrapedIngredient(name="Farine",
quantity=200, unit="g")``. The parser only ever consumes a prefix: a
quantity, then a unit, then connectors and container words. Whatever is
left is the ingredient name.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from cookie_racho.models.recipe import ScrapedIngredient, Unit
from cookie_racho.text import to_ascii_lower

_FLAGS = re.IGNORECASE

_BULLET_RE = re.compile(r"^[\-*•]\s+")
_NUMBER = r"\d+(?:[.,]\d+)?"
# (?![\d/]) keeps "1 1/2" from being read as the range or decimal "1"
_RANGE_RE = re.compile(rf"^({_NUMBER})\s*(?:-|–|—|à|a)\s*({_NUMBER})(?![\d/])\s*", _FLAGS)
_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)/(\d+)(?![\d/])\s*")
_FRACTION_RE = re.compile(r"^(\d+)/(\d+)(?![\d/])\s*")
_DECIMAL_RE = re.compile(rf"^({_NUMBER})(?![\d/])\s*")
_WORD_NUMBER_RE = re.compile(r"^(une?|deux|trois|quatre|cinq|six|sept|huit|neuf|dix)\b\s*", _FLAGS)

_WORD_NUMBERS = {
    "un": 1,
    "une": 1,
    "deux": 2,
    "trois": 3,
    "quatre": 4,
    "cinq": 5,
    "six": 6,
    "sept": 7,
    "huit": 8,
    "neuf": 9,
    "dix": 10,
}

_UNICODE_FRACTIONS = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

# (unit, multiplier, pattern); metric patterns run on the raw text, the
# spoon/pinch ones on the accent-folded text
_METRIC_UNITS: tuple[tuple[Unit, int, re.Pattern[str]], ...] = (
    ("kg", 1, re.compile(r"^(?:kg|kilogrammes?|kilos?)\b", _FLAGS)),
    ("g", 1, re.compile(r"^(?:g|gr|grammes?)\b", _FLAGS)),
    ("ml", 1, re.compile(r"^(?:ml|millilitres?)\b", _FLAGS)),
    ("ml", 10, re.compile(r"^(?:cl|centilitres?)\b", _FLAGS)),
    ("l", 1, re.compile(r"^(?:l|litres?)\b", _FLAGS)),
)
_FOLDED_UNITS: tuple[tuple[Unit, re.Pattern[str]], ...] = (
    ("cs", re.compile(r"^(?:cs\b|c\.?\s*a\s*soupe\b|cuilleres?\s*a\s*soupe\b)")),
    ("cc", re.compile(r"^(?:cc\b|c\.?\s*a\s*cafe\b|cuilleres?\s*a\s*cafe\b)")),
    ("pincee", re.compile(r"^pincees?\b")),
)

_CONNECTOR_RES = (
    re.compile(r"^de\s+", re.IGNORECASE),
    re.compile(r"^du\s+", re.IGNORECASE),
    re.compile(r"^des\s+", re.IGNORECASE),
    re.compile(r"^d['’]\s*", re.IGNORECASE),
)
_CONTAINER_RE = re.compile(
    r"^(?:gousses?|tranches?|branches?|sachets?|bo[iî]tes?)\s+(?:(?:de|du|des)\s+|d['’]\s*)",
    re.IGNORECASE,
)
_QUANTITY_HINT_RE = re.compile(r"\(\s*[\d.,]+\s*(?:g|gr|kg|ml|cl|l)\s*\)", _FLAGS)

_PINCH_INGREDIENTS = frozenset({"sel", "poivre"})


class _Quantity(NamedTuple):
    value: float
    rest: str


def parse_ingredient_line(line: str) -> ScrapedIngredient | None:
    original = line.replace("\u00a0", " ").strip()
    if not original:
        return None

    rest = _replace_unicode_fractions(_BULLET_RE.sub("", original, count=1).strip())

    quantity = 1.0
    unit: Unit = "unit"

    parsed = extract_leading_quantity(rest)
    if parsed is not None:
        quantity, rest = parsed
        unit_match = _extract_leading_unit(rest)
        if unit_match is not None:
            unit, multiplier, rest = unit_match
            quantity *= multiplier
    elif to_ascii_lower(rest) in _PINCH_INGREDIENTS:
        unit = "pincee"

    rest = _strip_connectors(rest)
    rest = _CONTAINER_RE.sub("", rest, count=1)
    rest = " ".join(_QUANTITY_HINT_RE.sub(" ", rest).split())

    return ScrapedIngredient(
        name=_capitalize_first(rest or original),
        quantity=_sanitize_quantity(quantity),
        unit=unit,
    )


def extract_leading_quantity(text: str) -> _Quantity | None:
    """Leading amount of *text* as ``(value, remainder)``, or ``None``.

    Tried in order: range (mean of both ends), mixed fraction, fraction,
    decimal with comma or dot, French number word.
    """
    s = text.strip()
    if not s:
        return None

    match = _RANGE_RE.match(s)
    if match:
        low, high = _parse_number(match.group(1)), _parse_number(match.group(2))
        return _Quantity((low + high) / 2, s[match.end() :])

    # Floats throughout: an overlong digit run becomes inf and is sanitized later
    match = _MIXED_RE.match(s)
    if match and float(match.group(3)) > 0:
        whole, num, den = (float(g) for g in match.groups())
        return _Quantity(whole + num / den, s[match.end() :])

    match = _FRACTION_RE.match(s)
    if match and float(match.group(2)) > 0:
        return _Quantity(float(match.group(1)) / float(match.group(2)), s[match.end() :])

    match = _DECIMAL_RE.match(s)
    if match:
        return _Quantity(_parse_number(match.group(1)), s[match.end() :])

    match = _WORD_NUMBER_RE.match(s)
    if match:
        return _Quantity(float(_WORD_NUMBERS[match.group(1).lower()]), s[match.end() :])

    return None


def _extract_leading_unit(text: str) -> tuple[Unit, int, str] | None:
    s = text.strip()
    if not s:
        return None

    for unit, multiplier, pattern in _METRIC_UNITS:
        match = pattern.match(s)
        if match:
            return unit, multiplier, s[match.end() :].strip()

    folded = to_ascii_lower(s)
    for unit, pattern in _FOLDED_UNITS:
        match = pattern.match(folded)
        if match:
            return unit, 1, s[_original_offset(s, match.end()) :].strip()
    return None


def _original_offset(text: str, folded_end: int) -> int:
    # Folding can change the length (ligatures, decomposed accents)
    for i in range(len(text) + 1):
        if len(to_ascii_lower(text[:i])) >= folded_end:
            return i
    return len(text)


def _strip_connectors(text: str) -> str:
    for pattern in _CONNECTOR_RES:
        text = pattern.sub("", text, count=1)
    return text.strip()


def _replace_unicode_fractions(text: str) -> str:
    for glyph, replacement in _UNICODE_FRACTIONS.items():
        text = text.replace(glyph, replacement)
    return text


def _parse_number(raw: str) -> float:
    return float(raw.replace(",", "."))


def _sanitize_quantity(quantity: float) -> float:
    if not math.isfinite(quantity) or quantity <= 0:
        return 1.0
    return quantity


def _capitalize_first(text: str) -> str:
    text = text.strip()
    return text[:1].upper() + text[1:]
