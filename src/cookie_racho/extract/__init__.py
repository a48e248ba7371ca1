from __future__ import annotations

from cookie_racho.extract.html_meta import extract_canonical_url, extract_html_title
from cookie_racho.extract.jsonld import (
    collect_objects,
    extract_json_ld_objects,
    extract_recipe_json_ld,
    find_first_node,
    has_type,
    normalize_type,
)
from cookie_racho.extract.microdata import extract_recipe_microdata
from cookie_racho.extract.recipe_node import extract_merged_recipe_node, merge_recipe_nodes

__all__ = [
    # json-ld
    "extract_json_ld_objects",
    "collect_objects",
    "normalize_type",
    "has_type",
    "find_first_node",
    "extract_recipe_json_ld",
    # microdata
    "extract_recipe_microdata",
    # merge
    "merge_recipe_nodes",
    "extract_merged_recipe_node",
    # page meta
    "extract_canonical_url",
    "extract_html_title",
]
