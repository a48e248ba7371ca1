"""Error taxonomy for cookie-racho.

Every failure that crosses a public function boundary is a
:class:`CookieRachoError` carrying a machine-readable :class:`ErrorCode` and a
``recoverable`` flag. Recoverable errors may succeed if the caller retries
later (timeouts, 5xx); nothing inside the package retries on its own.

Batch operations (multi-URL scraping, multi-site search) catch
``CookieRachoError`` per item and record it instead of aborting.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cookie_racho.models.recipe import FieldViolation


class ErrorCode(StrEnum):
    INVALID_URL = "INVALID_URL"
    UNSUPPORTED_SCHEME = "UNSUPPORTED_SCHEME"
    REQUEST_TIMED_OUT = "REQUEST_TIMED_OUT"
    REQUEST_FAILED = "REQUEST_FAILED"
    NO_RECIPE_DATA = "NO_RECIPE_DATA"
    MISSING_NAME = "MISSING_NAME"
    INVALID_INGREDIENTS = "INVALID_INGREDIENTS"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EMPTY_QUERY = "EMPTY_QUERY"
    UNKNOWN_SITE = "UNKNOWN_SITE"


class CookieRachoError(Exception):
    """Base error with a stable code and a retry hint."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# URL / fetch
# ---------------------------------------------------------------------------


class InvalidUrlError(CookieRachoError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_URL, message)


class UnsupportedSchemeError(CookieRachoError):
    def __init__(self, scheme: str) -> None:
        super().__init__(ErrorCode.UNSUPPORTED_SCHEME, f"Unsupported URL protocol: {scheme}:")
        self.scheme = scheme


class RequestTimedOutError(CookieRachoError):
    def __init__(self, timeout_ms: int) -> None:
        super().__init__(
            ErrorCode.REQUEST_TIMED_OUT,
            f"Request timed out after {timeout_ms}ms",
            recoverable=True,
        )
        self.timeout_ms = timeout_ms


class RequestFailedError(CookieRachoError):
    """Non-2xx response, or a transport failure when ``status`` is ``None``."""

    def __init__(self, status: int | None, reason: str) -> None:
        prefix = f"Request failed: {status}" if status is not None else "Request failed:"
        recoverable = status is None or status >= 500 or status == 429
        super().__init__(
            ErrorCode.REQUEST_FAILED, f"{prefix} {reason}".strip(), recoverable=recoverable
        )
        self.status = status
        self.reason = reason


# ---------------------------------------------------------------------------
# Extraction / normalization
# ---------------------------------------------------------------------------


class NoRecipeDataError(CookieRachoError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.NO_RECIPE_DATA, "No recipe data found (JSON-LD or microdata)")


class MissingNameError(CookieRachoError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.MISSING_NAME, "Unable to derive recipe name")


class InvalidIngredientsError(CookieRachoError):
    def __init__(self, kind: str) -> None:
        super().__init__(
            ErrorCode.INVALID_INGREDIENTS,
            f"recipeIngredient must be a string or a list of strings, got {kind}",
        )


class InsufficientDataError(CookieRachoError):
    def __init__(self, what: str, found: int) -> None:
        super().__init__(
            ErrorCode.INSUFFICIENT_DATA,
            f"Not enough {what} extracted (found {found}, need at least 2)",
        )
        self.what = what
        self.found = found


class RecipeValidationError(CookieRachoError):
    def __init__(self, violations: list[FieldViolation]) -> None:
        details = "; ".join(f"{v.field}: {v.message}" for v in violations)
        super().__init__(ErrorCode.VALIDATION_FAILED, f"Invalid recipe record: {details}")
        self.violations = violations


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class EmptyQueryError(CookieRachoError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EMPTY_QUERY, "Query is required")


class UnknownSiteError(CookieRachoError):
    def __init__(self, site_id: str) -> None:
        super().__init__(ErrorCode.UNKNOWN_SITE, f"Unknown site id: {site_id}")
        self.site_id = site_id
