"""Unit tests for JSON-LD/microdata merging and page metadata."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from cookie_racho.extract.html_meta import extract_canonical_url, extract_html_title
from cookie_racho.extract.recipe_node import extract_merged_recipe_node, merge_recipe_nodes

# ---------------------------------------------------------------------------
# merge_recipe_nodes
# ---------------------------------------------------------------------------


class TestMergeRecipeNodes:
    def test_both_absent(self) -> None:
        assert merge_recipe_nodes(None, None) is None

    def test_one_side_absent_returned_unchanged(self) -> None:
        node = {"name": "A", "recipeIngredient": "x"}
        assert merge_recipe_nodes(node, None) is node
        assert merge_recipe_nodes(None, node) is node

    def test_scalar_primary_first(self) -> None:
        merged = merge_recipe_nodes({"name": " Tarte "}, {"name": "Autre"})
        assert merged is not None
        assert merged["name"] == "Tarte"

    def test_blank_primary_scalar_falls_back(self) -> None:
        merged = merge_recipe_nodes(
            {"name": "  ", "totalTime": "PT10M"}, {"name": "Quiche", "prepTime": "PT5M"}
        )
        assert merged is not None
        assert merged["name"] == "Quiche"
        assert merged["totalTime"] == "PT10M"
        assert merged["prepTime"] == "PT5M"

    def test_ingredients_prefer_side_with_two_or_more(self) -> None:
        merged = merge_recipe_nodes(
            {"recipeIngredient": ["tout en une ligne"]},
            {"recipeIngredient": ["200 g de farine", "2 oeufs"]},
        )
        assert merged is not None
        assert merged["recipeIngredient"] == ["200 g de farine", "2 oeufs"]

    def test_ingredients_primary_wins_tie(self) -> None:
        merged = merge_recipe_nodes(
            {"recipeIngredient": ["a", "b"]}, {"recipeIngredient": ["c", "d", "e"]}
        )
        assert merged is not None
        assert merged["recipeIngredient"] == ["a", "b"]

    def test_ingredients_bare_string_counts_as_list(self) -> None:
        merged = merge_recipe_nodes({"recipeIngredient": "sel"}, {"name": "x"})
        assert merged is not None
        assert merged["recipeIngredient"] == ["sel"]

    def test_ingredients_default_empty(self) -> None:
        merged = merge_recipe_nodes({"name": "a"}, {"name": "b"})
        assert merged is not None
        assert merged["recipeIngredient"] == []
        assert merged["recipeInstructions"] == []

    def test_instructions_bare_string_kept(self) -> None:
        merged = merge_recipe_nodes({"recipeInstructions": "Mélanger. Cuire."}, {"name": "b"})
        assert merged is not None
        assert merged["recipeInstructions"] == "Mélanger. Cuire."

    def test_instructions_prefer_longer_fallback_list(self) -> None:
        merged = merge_recipe_nodes(
            {"recipeInstructions": "Tout faire."},
            {"recipeInstructions": ["Mélanger.", "Cuire."]},
        )
        assert merged is not None
        assert merged["recipeInstructions"] == ["Mélanger.", "Cuire."]

    def test_inputs_not_mutated(self) -> None:
        primary: dict[str, Any] = {"name": " A ", "recipeIngredient": ["x"]}
        fallback: dict[str, Any] = {"recipeIngredient": ["y", "z"]}
        merge_recipe_nodes(primary, fallback)
        assert primary == {"name": " A ", "recipeIngredient": ["x"]}
        assert fallback == {"recipeIngredient": ["y", "z"]}


class TestExtractMergedRecipeNode:
    def test_microdata_fills_gaps(self, render: Callable[..., str]) -> None:
        body = (
            '<div itemscope itemtype="http://schema.org/Recipe">'
            '<span itemprop="recipeIngredient">200 g de farine</span>'
            '<span itemprop="recipeIngredient">2 oeufs</span>'
            "</div>"
        )
        page = render({"@type": "Recipe", "name": "Crêpes", "recipeIngredient": []}, body=body)
        node = extract_merged_recipe_node(page)
        assert node is not None
        assert node["name"] == "Crêpes"
        assert node["recipeIngredient"] == ["200 g de farine", "2 oeufs"]

    def test_no_structured_data(self, render: Callable[..., str]) -> None:
        assert extract_merged_recipe_node(render(None, body="<p>Rien</p>")) is None


# ---------------------------------------------------------------------------
# Page metadata
# ---------------------------------------------------------------------------


class TestHtmlMeta:
    def test_canonical_link(self) -> None:
        html = '<link rel="canonical" href=" https://www.750g.com/tarte.htm ">'
        assert extract_canonical_url(html) == "https://www.750g.com/tarte.htm"

    def test_og_url_fallback(self) -> None:
        html = '<meta property="og:url" content="https://www.750g.com/og.htm">'
        assert extract_canonical_url(html) == "https://www.750g.com/og.htm"

    def test_canonical_preferred_over_og_url(self) -> None:
        html = (
            '<meta property="og:url" content="https://a.fr/og">'
            '<link rel="canonical" href="https://a.fr/canonical">'
        )
        assert extract_canonical_url(html) == "https://a.fr/canonical"

    def test_no_canonical(self) -> None:
        assert extract_canonical_url('<link rel="stylesheet" href="x.css">') is None

    def test_title(self) -> None:
        assert extract_html_title("<title>  Crêpes faciles </title>") == "Crêpes faciles"

    def test_missing_or_blank_title(self) -> None:
        assert extract_html_title("<p>x</p>") is None
        assert extract_html_title("<title> </title>") is None
