"""French-aware text folding and keyword matching.

Keyword rules throughout the normalizer match on whole tokens with a naive
singular/plural fold (trailing ``s`` or ``x``), never on substrings, so
"lait" matches "laits" but not "laitue".
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Sequence

_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_diacritics(value: str) -> str:
    return _COMBINING_MARKS_RE.sub("", unicodedata.normalize("NFD", value))


def to_ascii_lower(value: str) -> str:
    """Strip accents, fold the œ/æ ligatures and lowercase."""
    folded = strip_diacritics(value)
    folded = folded.replace("Œ", "oe").replace("œ", "oe")
    folded = folded.replace("Æ", "ae").replace("æ", "ae")
    return folded.lower()


def normalize_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def tokenize(value: str) -> list[str]:
    normalized = _NON_ALNUM_RE.sub(" ", to_ascii_lower(value)).strip()
    return normalized.split() if normalized else []


def includes_keyword(tokens: Sequence[str], keyword: str) -> bool:
    """True when *keyword* (a word or a phrase) occurs in *tokens*.

    Single words compare token by token. Phrases must appear as a contiguous
    token sequence; the last word may additionally carry a plural ``s``/``x``.
    """
    needle = tokenize(keyword)
    if not needle:
        return False

    if len(needle) == 1:
        return any(_token_matches(t, needle[0]) for t in tokens)

    if _contains_sequence(tokens, needle):
        return True

    last = needle[-1]
    for suffix in ("s", "x"):
        if _contains_sequence(tokens, [*needle[:-1], f"{last}{suffix}"]):
            return True
    return False


def matches_any(tokens: Sequence[str], keywords: Iterable[str]) -> bool:
    return any(includes_keyword(tokens, k) for k in keywords)


def _token_matches(token: str, needle: str) -> bool:
    if token == needle:
        return True
    if token in (f"{needle}s", f"{needle}x"):
        return True
    return needle.endswith(("s", "x")) and token == needle[:-1]


def _contains_sequence(haystack: Sequence[str], needle: Sequence[str]) -> bool:
    if len(needle) > len(haystack):
        return False
    for i in range(len(haystack) - len(needle) + 1):
        if all(_token_matches(haystack[i + j], n) for j, n in enumerate(needle)):
            return True
    return False
