"""Page-level metadata: canonical URL and ``<title>``."""

from __future__ import annotations

from cookie_racho.extract.jsonld import parse_html


def extract_canonical_url(html: str) -> str | None:
    """``<link rel="canonical">`` href, falling back to the ``og:url`` meta tag."""
    soup = parse_html(html)

    for link in soup.find_all("link"):
        rel = link.get("rel")
        rel_value = " ".join(rel) if isinstance(rel, list) else str(rel or "")
        if rel_value.strip().lower() != "canonical":
            continue
        href = str(link.get("href") or "").strip()
        if href:
            return href

    for meta in soup.find_all("meta"):
        prop = meta.get("property") or meta.get("name")
        if not prop or str(prop).strip().lower() != "og:url":
            continue
        content = str(meta.get("content") or "").strip()
        if content:
            return content

    return None


def extract_html_title(html: str) -> str | None:
    title = parse_html(html).find("title")
    if title is None:
        return None
    text = title.get_text().strip()
    return text or None
