"""Supported locales - every table and query is partitioned by one of these."""

from enum import StrEnum

from app.errors import ValidationError


class Locale(StrEnum):
    """Supported site locale."""

    EN = "en"
    PL = "pl"
    ES = "es"


def parse_locale(value: str | None) -> Locale:
    """Parse a locale code, rejecting anything outside the supported set."""
    try:
        return Locale((value or "").strip().lower())
    except ValueError:
        supported = ", ".join(loc.value for loc in Locale)
        raise ValidationError(f"Unsupported locale: {value!r}. Must be one of {supported}") from None
