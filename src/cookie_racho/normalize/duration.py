"""Duration parsing: ISO-8601 recipe times and human option values."""

from __future__ import annotations

import math
import re

_ISO8601_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$", re.IGNORECASE)
_HUMAN_RE = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h|d)$", re.IGNORECASE)

_MAX_DIGITS = 18

_UNIT_MS = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_iso8601_duration_to_minutes(duration: str) -> int | None:
    """``PT1H30M`` -> 90. Seconds round up to the next minute.

    Returns ``None`` for anything unparsable and for all-zero durations,
    so callers can fall through to another field.
    """
    match = _ISO8601_RE.match(duration.strip())
    if match is None:
        return None

    try:
        days, hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    except ValueError:
        # more digits than int() accepts
        return None
    if days == hours == minutes == seconds == 0:
        return None

    return days * 24 * 60 + hours * 60 + minutes + (seconds + 59) // 60


def parse_duration_to_ms(value: str) -> int | None:
    """``7d``, ``12h``, ``30s``, ``250ms``; a bare integer is taken as milliseconds."""
    raw = value.strip()
    if not raw:
        return None
    if raw.isascii() and raw.isdigit():
        return int(raw) if len(raw) <= _MAX_DIGITS else None

    match = _HUMAN_RE.match(raw)
    if match is None:
        return None
    ms = float(match.group(1)) * _UNIT_MS[match.group(2).lower()]
    return round(ms) if math.isfinite(ms) else None
