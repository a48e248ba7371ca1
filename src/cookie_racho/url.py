"""URL canonicalization.

Every URL used as a cache key or a dedup key goes through
:func:`normalize_url` first so that equivalent spellings collapse to one
entry.
"""

from __future__ import annotations

import re
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from cookie_racho.errors import InvalidUrlError, UnsupportedSchemeError

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters left untouched when re-quoting; '%' keeps existing escapes intact.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = "/?%:@!$&'()*+,;=-._~[]{}|^`\\"


def normalize_url(spec: str) -> str:
    """Return the canonical absolute form of *spec*.

    A missing scheme defaults to ``https``. Only ``http`` and ``https`` are
    accepted. The fragment is dropped, scheme and host are lowercased and
    default ports are removed.

    Raises:
        InvalidUrlError: *spec* is blank or has no host.
        UnsupportedSchemeError: the scheme is neither http nor https.
    """
    raw = spec.strip()
    if not raw:
        raise InvalidUrlError("URL is required")

    with_scheme = raw if _SCHEME_RE.match(raw) else f"https://{raw}"
    try:
        parts = urlsplit(with_scheme)
        scheme = parts.scheme.lower()
        if scheme not in _DEFAULT_PORTS:
            raise UnsupportedSchemeError(scheme)
        host = parts.hostname
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {raw}") from exc

    if not host:
        raise InvalidUrlError(f"Invalid URL: {raw}")

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = quote(parts.path or "/", safe=_PATH_SAFE)
    query = quote(parts.query, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, ""))


def get_host(spec: str) -> str:
    """Lowercased hostname of the normalized form of *spec*."""
    host = urlsplit(normalize_url(spec)).hostname
    return host or ""


def resolve_url(candidate: str, base_url: str) -> str | None:
    """Resolve a possibly-relative *candidate* against *base_url*.

    Returns ``None`` when the result is not a usable http(s) URL.
    """
    candidate = candidate.strip()
    if not candidate:
        return None
    try:
        return normalize_url(urljoin(base_url, candidate))
    except (InvalidUrlError, UnsupportedSchemeError, ValueError):
        return None


def host_matches_suffix(host: str, suffixes: list[str] | tuple[str, ...]) -> bool:
    """True when *host* equals one of *suffixes* or is a subdomain of one."""
    h = host.lower()
    return any(h == s.lower() or h.endswith(f".{s.lower()}") for s in suffixes)
