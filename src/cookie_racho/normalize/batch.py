"""Batch-cooking friendliness.

Unlike the other rule tables this one matches on plain substrings of the
accent-folded text, since the keywords are multi-word idioms that rarely
survive tokenization intact ("a l'avance").
"""

from __future__ import annotations

from collections.abc import Sequence

from cookie_racho.models.recipe import ScrapedStep
from cookie_racho.text import to_ascii_lower

BATCH_KEYWORDS: tuple[str, ...] = (
    "batch cooking",
    "meal prep",
    "se conserve",
    "se garde",
    "a l'avance",
    "la veille",
    "preparer a l'avance",
    "congeler",
    "congelation",
    "congelateur",
    "se congele",
    "rechauffer",
    "se rechauffe",
)


def infer_batch_friendly(name: str, description: str, steps: Sequence[ScrapedStep]) -> bool:
    text = " \n ".join([name, description, *(s.description for s in steps)])
    haystack = to_ascii_lower(text).replace("\u2019", "'")
    if not haystack.strip():
        return False
    return any(keyword in haystack for keyword in BATCH_KEYWORDS)
