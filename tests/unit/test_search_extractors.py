"""Unit tests for search result extraction (DuckDuckGo HTML and JSON-LD ItemList)."""

from __future__ import annotations

from collections.abc import Callable

from cookie_racho.search.aggregator import fallback_name_from_url
from cookie_racho.search.duckduckgo import (
    build_duckduckgo_search_url,
    extract_duckduckgo_results,
    is_duckduckgo_host,
)
from cookie_racho.search.item_list import extract_item_list_results

DDG_BASE = "https://duckduckgo.com/html/?q=site%3Aptitchef.com%20recette%20tarte"

# ---------------------------------------------------------------------------
# DuckDuckGo
# ---------------------------------------------------------------------------


class TestDuckDuckGo:
    def test_build_search_url(self) -> None:
        url = build_duckduckgo_search_url("site:750g.com recette tarte")
        assert url == "https://duckduckgo.com/html/?q=site%3A750g.com%20recette%20tarte"

    def test_is_duckduckgo_host(self) -> None:
        assert is_duckduckgo_host("duckduckgo.com")
        assert is_duckduckgo_host("html.duckduckgo.com")
        assert not is_duckduckgo_host("notduckduckgo.com")

    def test_redirect_links_unwrapped(self) -> None:
        html = (
            '<a class="result__a" href="//duckduckgo.com/l/?uddg='
            'https%3A%2F%2Fwww.ptitchef.com%2Frecettes%2Ftarte.html&amp;rut=abc">'
            "<b>Tarte</b> aux   pommes</a>"
        )
        results = extract_duckduckgo_results(html, DDG_BASE)
        assert len(results) == 1
        assert results[0].url == "https://www.ptitchef.com/recettes/tarte.html"
        assert results[0].name == "Tarte aux pommes"

    def test_target_decoded_only_once(self) -> None:
        # The target's own query carries an escaped space (%20 -> %2520 once wrapped)
        html = (
            '<a class="result__a" href="https://duckduckgo.com/l/?uddg='
            'https%3A%2F%2Fwww.ptitchef.com%2Fsearch%3Fq%3Da%2520b">x</a>'
        )
        results = extract_duckduckgo_results(html, DDG_BASE)
        assert results[0].url == "https://www.ptitchef.com/search?q=a%20b"

    def test_direct_links_kept(self) -> None:
        html = '<a class="result__a" href="https://www.ptitchef.com/recettes/quiche.html">Q</a>'
        results = extract_duckduckgo_results(html, DDG_BASE)
        assert [r.url for r in results] == ["https://www.ptitchef.com/recettes/quiche.html"]

    def test_non_result_anchors_ignored(self) -> None:
        html = (
            '<a class="result__url" href="https://www.ptitchef.com/a">a</a>'
            '<a href="https://www.ptitchef.com/b">b</a>'
        )
        assert extract_duckduckgo_results(html, DDG_BASE) == []

    def test_redirect_without_target_skipped(self) -> None:
        html = '<a class="result__a" href="https://duckduckgo.com/l/?rut=abc">x</a>'
        assert extract_duckduckgo_results(html, DDG_BASE) == []

    def test_host_filter_and_dedup(self) -> None:
        html = (
            '<a class="result__a" href="https://www.ptitchef.com/a#x">A</a>'
            '<a class="result__a" href="https://pub.example.com/ad">Ad</a>'
            '<a class="result__a" href="https://www.ptitchef.com/a">A again</a>'
        )
        results = extract_duckduckgo_results(html, DDG_BASE, ["ptitchef.com"])
        assert [(r.url, r.name) for r in results] == [("https://www.ptitchef.com/a", "A")]

    def test_empty_name_is_none(self) -> None:
        html = '<a class="result__a" href="https://www.ptitchef.com/a"> </a>'
        assert extract_duckduckgo_results(html, DDG_BASE)[0].name is None


# ---------------------------------------------------------------------------
# ItemList
# ---------------------------------------------------------------------------

MARMITON_BASE = "https://www.marmiton.org/recettes/recherche.aspx?aqt=tarte"


class TestItemList:
    def test_list_items_with_url_and_name(self, render: Callable[..., str]) -> None:
        page = render(
            {
                "@type": "ItemList",
                "itemListElement": [
                    {"@type": "ListItem", "position": 1, "url": "/recettes/tarte-1.aspx",
                     "name": " Tarte fine "},
                    {"@type": "ListItem", "position": 2, "url": "/recettes/tarte-2.aspx"},
                ],
            }
        )
        results = extract_item_list_results(page, MARMITON_BASE)
        assert [(r.url, r.name) for r in results] == [
            ("https://www.marmiton.org/recettes/tarte-1.aspx", "Tarte fine"),
            ("https://www.marmiton.org/recettes/tarte-2.aspx", None),
        ]

    def test_nested_item_and_bare_strings(self, render: Callable[..., str]) -> None:
        page = render(
            {
                "@graph": [
                    {
                        "@type": "ItemList",
                        "itemListElement": [
                            {"@type": "ListItem", "item": {"@id": "/a.aspx", "name": "A"}},
                            {"@type": "ListItem", "item": "/b.aspx"},
                            "https://www.marmiton.org/c.aspx",
                        ],
                    }
                ]
            }
        )
        results = extract_item_list_results(page, MARMITON_BASE)
        assert [(r.url, r.name) for r in results] == [
            ("https://www.marmiton.org/a.aspx", "A"),
            ("https://www.marmiton.org/b.aspx", None),
            ("https://www.marmiton.org/c.aspx", None),
        ]

    def test_host_filter_and_dedup(self, render: Callable[..., str]) -> None:
        page = render(
            {
                "@type": "ItemList",
                "itemListElement": [
                    {"url": "https://www.marmiton.org/a.aspx#top"},
                    {"url": "https://ads.example.com/promo"},
                    {"url": "https://www.marmiton.org/a.aspx"},
                ],
            }
        )
        results = extract_item_list_results(page, MARMITON_BASE, ("marmiton.org",))
        assert [r.url for r in results] == ["https://www.marmiton.org/a.aspx"]

    def test_other_types_ignored(self, render: Callable[..., str]) -> None:
        page = render({"@type": "BreadcrumbList", "itemListElement": [{"url": "/x"}]})
        assert extract_item_list_results(page, MARMITON_BASE) == []


# ---------------------------------------------------------------------------
# fallback_name_from_url
# ---------------------------------------------------------------------------


class TestFallbackNameFromUrl:
    def test_last_segment(self) -> None:
        url = "https://www.marmiton.org/recettes/tarte-aux_pommes.aspx"
        assert fallback_name_from_url(url) == "Tarte aux pommes"

    def test_percent_encoded_segment(self) -> None:
        url = "https://www.750g.com/cr%C3%AApes-faciles"
        assert fallback_name_from_url(url) == "Crêpes faciles"

    def test_root_path_uses_host(self) -> None:
        assert fallback_name_from_url("https://www.750g.com/") == "www.750g.com"
