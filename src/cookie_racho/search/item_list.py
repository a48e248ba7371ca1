"""Result extraction from schema.org ``ItemList`` JSON-LD on site search pages."""

from __future__ import annotations

from typing import Any

from cookie_racho.extract.jsonld import collect_objects, extract_json_ld_objects, has_type
from cookie_racho.models.search import LinkResult
from cookie_racho.url import get_host, host_matches_suffix, normalize_url, resolve_url


def extract_item_list_results(
    html: str, base_url: str, allowed_host_suffixes: list[str] | tuple[str, ...] | None = None
) -> list[LinkResult]:
    """Every ``itemListElement`` URL of every ItemList, deduplicated in page order.

    Elements may be bare URL strings, ``ListItem`` objects with ``url`` or
    ``@id``, or ``ListItem`` objects wrapping an ``item``.
    """
    base = normalize_url(base_url)
    found: list[LinkResult] = []
    for obj in collect_objects(extract_json_ld_objects(html)):
        if has_type(obj, "ItemList"):
            _collect_elements(obj.get("itemListElement"), base, found)

    results: list[LinkResult] = []
    seen: set[str] = set()
    for result in found:
        if result.url in seen:
            continue
        if allowed_host_suffixes is not None and not host_matches_suffix(
            get_host(result.url), allowed_host_suffixes
        ):
            continue
        seen.add(result.url)
        results.append(result)
    return results


def _collect_elements(value: Any, base_url: str, out: list[LinkResult]) -> None:
    stack: list[Any] = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, str):
            url = resolve_url(current, base_url)
            if url:
                out.append(LinkResult(url=url))
        elif isinstance(current, dict):
            result = _element_result(current, base_url)
            if result is not None:
                out.append(result)


def _element_result(value: dict[str, Any], base_url: str) -> LinkResult | None:
    item = value.get("item")
    name = _string(value.get("name"))
    if name is None and isinstance(item, dict):
        name = _string(item.get("name"))

    candidate = _string(value.get("url")) or _string(value.get("@id")) or _item_url(item)
    url = resolve_url(candidate, base_url) if candidate else None
    return LinkResult(url=url, name=name) if url else None


def _item_url(item: Any) -> str | None:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        return _string(item.get("@id")) or _string(item.get("url"))
    return None


def _string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
