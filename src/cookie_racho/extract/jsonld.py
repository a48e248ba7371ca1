"""JSON-LD extraction.

Pages embed one or more ``<script type="application/ld+json">`` blocks, often
as ``@graph`` arrays mixing WebPage, BreadcrumbList, Recipe and more. Every
block is parsed and every nested object is collected, then callers filter by
declared ``@type``.
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from bs4 import BeautifulSoup

log = structlog.get_logger()

JsonValue = Any
JsonObject = dict[str, Any]

JSON_LD_MIME = "application/ld+json"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_json_ld_objects(html: str) -> list[JsonValue]:
    """Parsed roots of every JSON-LD script in *html*; unparsable blocks are skipped."""
    roots: list[JsonValue] = []
    for script in parse_html(html).find_all("script"):
        type_attr = script.get("type")
        if not isinstance(type_attr, str) or not _is_json_ld_type(type_attr):
            continue
        parsed = _parse_json_ld(script.string or script.get_text())
        if parsed is not None:
            roots.append(parsed)
    return roots


def _is_json_ld_type(type_attr: str) -> bool:
    mime = type_attr.split(";", 1)[0].strip().lower()
    return mime == JSON_LD_MIME


def _parse_json_ld(content: str) -> JsonValue | None:
    cleaned = _cleanup_json_ld(content)
    if not cleaned:
        return None
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        log.debug("jsonld_parse_failed", size=len(cleaned))
        return None


def _cleanup_json_ld(content: str) -> str:
    s = content.strip()
    # Some sites wrap JSON-LD in HTML comments
    if s.startswith("<!--"):
        s = s[4:].lstrip()
    if s.endswith("-->"):
        s = s[:-3].rstrip()
    return s.strip()


def collect_objects(value: JsonValue) -> list[JsonObject]:
    """Flatten *value* into every JSON object it contains, depth first, parents first."""
    out: list[JsonObject] = []
    # Explicit stack: page-supplied nesting depth is unbounded
    stack: list[JsonValue] = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, dict):
            out.append(current)
            stack.extend(reversed(list(current.values())))
    return out


def normalize_type(type_value: str) -> str:
    """``http://schema.org/Recipe`` and ``schema:Recipe`` both become ``Recipe``."""
    trimmed = type_value.strip()
    idx = max(trimmed.rfind("/"), trimmed.rfind(":"))
    return (trimmed[idx + 1 :] if idx >= 0 else trimmed) or trimmed


def has_type(obj: JsonObject, expected: str) -> bool:
    raw = obj.get("@type")
    if isinstance(raw, str):
        return normalize_type(raw) == expected
    if isinstance(raw, list):
        return any(isinstance(t, str) and normalize_type(t) == expected for t in raw)
    return False


def find_first_node(roots: list[JsonValue], expected_type: str) -> JsonObject | None:
    for obj in collect_objects(roots):
        if has_type(obj, expected_type):
            return obj
    return None


def extract_recipe_json_ld(html: str) -> JsonObject | None:
    return find_first_node(extract_json_ld_objects(html), "Recipe")
