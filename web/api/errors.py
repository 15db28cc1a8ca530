"""API errors and validation helpers."""

from app.errors import NotFoundError, ScenarioError, StoreUnavailable, ValidationError
from app.models import Locale, parse_locale
from settings import DEFAULT_LOCALE

# Stable messages for failures whose details stay in the logs
STORE_FAILURE_MESSAGE = "Failed to search scenarios"


def validate_locale(locale: str | None) -> Locale:
    """Validate locale is supported; missing means the default locale."""
    return parse_locale(locale or DEFAULT_LOCALE)


def status_for(exc: ScenarioError) -> int:
    """HTTP status for a domain error."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, StoreUnavailable):
        return 500
    return 500


def error_body(exc: ScenarioError) -> dict:
    """Response body for a domain error."""
    if isinstance(exc, StoreUnavailable):
        return {"error": STORE_FAILURE_MESSAGE}
    return {"error": exc.message}
