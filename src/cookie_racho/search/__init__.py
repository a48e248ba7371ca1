from __future__ import annotations

from cookie_racho.search.aggregator import fallback_name_from_url, search_recipes
from cookie_racho.search.duckduckgo import build_duckduckgo_search_url, extract_duckduckgo_results
from cookie_racho.search.item_list import extract_item_list_results

__all__ = [
    "search_recipes",
    "fallback_name_from_url",
    "extract_item_list_results",
    "extract_duckduckgo_results",
    "build_duckduckgo_search_url",
]
