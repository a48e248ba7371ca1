"""Result extraction from DuckDuckGo's HTML endpoint.

Result anchors carry the class ``result__a`` and point either straight at
the target or at a ``duckduckgo.com/l/?uddg=<target>`` redirect.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urljoin, urlsplit

from cookie_racho.errors import InvalidUrlError, UnsupportedSchemeError
from cookie_racho.extract.jsonld import parse_html
from cookie_racho.models.search import LinkResult
from cookie_racho.sites import DUCKDUCKGO_HTML_URL, encode_query_component
from cookie_racho.text import normalize_whitespace
from cookie_racho.url import get_host, host_matches_suffix, normalize_url

DUCKDUCKGO_DOMAIN = "duckduckgo.com"


def build_duckduckgo_search_url(query: str) -> str:
    return DUCKDUCKGO_HTML_URL.format(query=encode_query_component(query))


def is_duckduckgo_host(host: str) -> bool:
    return host_matches_suffix(host, (DUCKDUCKGO_DOMAIN,))


def extract_duckduckgo_results(
    html: str, base_url: str, allowed_host_suffixes: list[str] | tuple[str, ...] | None = None
) -> list[LinkResult]:
    base = normalize_url(base_url)
    results: list[LinkResult] = []
    seen: set[str] = set()

    for anchor in parse_html(html).find_all("a", class_="result__a"):
        href = anchor.get("href")
        if not isinstance(href, str) or not href.strip():
            continue

        url = _resolve_target(href.strip(), base)
        if url is None or url in seen:
            continue
        if allowed_host_suffixes is not None and not host_matches_suffix(
            get_host(url), allowed_host_suffixes
        ):
            continue

        seen.add(url)
        name = normalize_whitespace(anchor.get_text(" "))
        results.append(LinkResult(url=url, name=name or None))

    return results


def _resolve_target(href: str, base_url: str) -> str | None:
    try:
        absolute = urljoin(base_url, href)
        parts = urlsplit(absolute)
        if is_duckduckgo_host(parts.hostname or ""):
            # parse_qs already percent-decodes; a second unquote would corrupt
            # targets whose own query strings contain %xx sequences
            targets = parse_qs(parts.query).get("uddg")
            if not targets or not targets[0]:
                return None
            return normalize_url(targets[0])
        return normalize_url(absolute)
    except (InvalidUrlError, UnsupportedSchemeError, ValueError):
        return None
