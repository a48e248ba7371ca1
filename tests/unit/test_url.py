"""Unit tests for cookie_racho.url."""

from __future__ import annotations

import pytest

from cookie_racho.errors import ErrorCode, InvalidUrlError, UnsupportedSchemeError
from cookie_racho.url import get_host, host_matches_suffix, normalize_url, resolve_url

# ---------------------------------------------------------------------------
# normalize_url
# ---------------------------------------------------------------------------


class TestNormalizeUrl:
    def test_adds_https_when_scheme_missing(self) -> None:
        assert normalize_url("www.marmiton.org/recettes") == "https://www.marmiton.org/recettes"

    def test_trims_whitespace(self) -> None:
        assert normalize_url("  https://example.com/a  ") == "https://example.com/a"

    def test_lowercases_scheme_and_host(self) -> None:
        assert normalize_url("HTTPS://WWW.Marmiton.ORG/Recettes") == (
            "https://www.marmiton.org/Recettes"
        )

    def test_strips_fragment(self) -> None:
        assert normalize_url("https://example.com/a?x=1#comments") == "https://example.com/a?x=1"

    def test_drops_default_port(self) -> None:
        assert normalize_url("https://example.com:443/a") == "https://example.com/a"
        assert normalize_url("http://example.com:80/a") == "http://example.com/a"

    def test_keeps_non_default_port(self) -> None:
        assert normalize_url("http://example.com:8080/a") == "http://example.com:8080/a"

    def test_empty_path_becomes_slash(self) -> None:
        assert normalize_url("https://example.com") == "https://example.com/"

    def test_equivalent_urls_collapse(self) -> None:
        a = normalize_url("HTTPS://Example.com:443/recette#top")
        b = normalize_url("example.com/recette")
        assert a == b

    def test_idempotent(self) -> None:
        once = normalize_url("example.com/tarte aux pommes?q=é")
        assert normalize_url(once) == once

    def test_empty_raises(self) -> None:
        with pytest.raises(InvalidUrlError) as exc_info:
            normalize_url("   ")
        assert exc_info.value.code == ErrorCode.INVALID_URL

    def test_unsupported_scheme(self) -> None:
        with pytest.raises(UnsupportedSchemeError) as exc_info:
            normalize_url("ftp://example.com/file")
        assert exc_info.value.code == ErrorCode.UNSUPPORTED_SCHEME
        assert "ftp" in exc_info.value.message

    def test_missing_host(self) -> None:
        with pytest.raises(InvalidUrlError):
            normalize_url("https:///path-only")


# ---------------------------------------------------------------------------
# get_host / resolve_url / host_matches_suffix
# ---------------------------------------------------------------------------


class TestGetHost:
    def test_lowercased_host(self) -> None:
        assert get_host("HTTPS://WWW.750G.COM/recette") == "www.750g.com"

    def test_host_without_scheme(self) -> None:
        assert get_host("cuisineaz.com") == "cuisineaz.com"


class TestResolveUrl:
    def test_relative_path(self) -> None:
        resolved = resolve_url("/recettes/tarte.aspx", "https://www.marmiton.org/recherche")
        assert resolved == "https://www.marmiton.org/recettes/tarte.aspx"

    def test_absolute_candidate_wins(self) -> None:
        resolved = resolve_url("https://other.fr/a#frag", "https://www.marmiton.org/")
        assert resolved == "https://other.fr/a"

    def test_blank_candidate(self) -> None:
        assert resolve_url("  ", "https://www.marmiton.org/") is None

    def test_unsupported_scheme_returns_none(self) -> None:
        assert resolve_url("mailto:chef@example.com", "https://www.marmiton.org/") is None


class TestHostMatchesSuffix:
    def test_exact(self) -> None:
        assert host_matches_suffix("marmiton.org", ["marmiton.org"])

    def test_subdomain(self) -> None:
        assert host_matches_suffix("www.marmiton.org", ["marmiton.org"])

    def test_lookalike_rejected(self) -> None:
        assert not host_matches_suffix("notmarmiton.org", ["marmiton.org"])
