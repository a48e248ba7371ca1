"""Turn ``recipeInstructions`` in any of its published shapes into ordered steps."""

from __future__ import annotations

import re
from typing import Any

from cookie_racho.extract.jsonld import has_type
from cookie_racho.models.recipe import ScrapedStep
from cookie_racho.text import normalize_whitespace

_LINE_SPLIT_RE = re.compile(r"\n+")
_SENTENCE_SPLIT_RE = re.compile(r"(?:\.|;)(?:\s+|$)")
_STEP_INDEX_RE = re.compile(r"^\s*(?:[ée]tape|step)?\s*\d+\s*[\).:\-]\s*", re.IGNORECASE)

_HOURS_MINUTES_RE = re.compile(
    r"(\d+)\s*(?:h|heures?)\s*(\d+)\s*(?:min|minutes?)?", re.IGNORECASE | re.ASCII
)
_HOURS_RE = re.compile(r"(\d+)\s*(?:h|heures?)\b", re.IGNORECASE | re.ASCII)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:min|minutes?)\b", re.IGNORECASE | re.ASCII)


def normalize_instructions_to_steps(instructions: Any) -> list[ScrapedStep]:
    steps: list[ScrapedStep] = []
    for raw in _extract_texts(instructions):
        description = strip_step_index(normalize_whitespace(raw))
        if not description:
            continue
        steps.append(ScrapedStep(description=description, minutes=extract_minutes(description)))
    return steps


def _extract_texts(value: Any) -> list[str]:
    texts: list[str] = []
    # Explicit stack so deeply nested page data cannot exhaust the recursion limit
    stack: list[Any] = [value]
    while stack:
        current = stack.pop()
        if not current:
            continue
        if isinstance(current, str):
            texts.extend(split_instruction_text(current))
        elif isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, dict):
            text = current.get("text")
            name = current.get("name")
            if isinstance(text, str):
                texts.append(text)
            elif current.get("itemListElement"):
                stack.append(current["itemListElement"])
            elif current.get("steps"):
                stack.append(current["steps"])
            elif isinstance(name, str) and has_type(current, "HowToStep"):
                texts.append(name)
    return texts


def split_instruction_text(value: str) -> list[str]:
    """Split a single instruction blob by lines, then by sentences."""
    raw = value.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not raw:
        return []

    lines = [normalize_whitespace(line) for line in _LINE_SPLIT_RE.split(raw)]
    lines = [line for line in lines if line]
    if len(lines) >= 2:
        return lines

    normalized = normalize_whitespace(raw)
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(normalized)]
    sentences = [s for s in sentences if s]
    return sentences if len(sentences) >= 2 else [normalized]


def strip_step_index(description: str) -> str:
    """``1. Mélanger`` / ``Étape 2 : Cuire`` -> the bare instruction."""
    return _STEP_INDEX_RE.sub("", description, count=1).strip()


def extract_minutes(description: str) -> int | None:
    """Duration hint in a step, ``1 h 30`` before ``2 h`` before ``10 min``."""
    try:
        match = _HOURS_MINUTES_RE.search(description)
        if match:
            total = int(match.group(1)) * 60 + int(match.group(2))
            return total or None

        match = _HOURS_RE.search(description)
        if match:
            return int(match.group(1)) * 60 or None

        match = _MINUTES_RE.search(description)
        if match:
            return int(match.group(1)) or None
    except ValueError:
        # digit run longer than int() accepts
        return None
    return None
