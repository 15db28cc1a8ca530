"""Query parameter parsing for scenario search.

Optional numeric filters are parsed permissively: anything that does not
parse is treated as absent. Only page/limit/locale can be rejected.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from app.errors import ValidationError
from app.models import FilterRequest, Locale, SortBy, in_int_range
from settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from web.api.errors import validate_locale

RawParams = Mapping[str, str | list[str] | None]


@dataclass(frozen=True)
class SearchQuery:
    """Parsed search request."""

    locale: Locale
    page: int
    filters: FilterRequest

    @property
    def limit(self) -> int:
        return self.filters.limit


def _first(raw: RawParams, name: str) -> str | None:
    value = raw.get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return None
    value = value.strip()
    return value or None


def _all(raw: RawParams, name: str) -> list[str]:
    value = raw.get(name)
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: str | None) -> int | None:
    """Integers outside the INTEGER column range are treated as absent."""
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if in_int_range(number) else None


def parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    return {"true": True, "1": True, "false": False, "0": False}.get(value.lower())


def parse_categories(values: list[str]) -> frozenset[str]:
    """Comma separated and/or repeated ``category`` parameters."""
    return frozenset(part.strip() for value in values for part in value.split(",") if part.strip())


def parse_filter_params(raw: RawParams) -> SearchQuery:
    """Build a validated SearchQuery from raw query parameters."""
    locale = validate_locale(_first(raw, "locale"))

    page = parse_int(_first(raw, "page"))
    page = 1 if page is None else page
    if page < 1:
        raise ValidationError(f"Invalid page: {page}. Must be at least 1")

    limit = parse_int(_first(raw, "limit"))
    limit = DEFAULT_PAGE_SIZE if limit is None else limit
    if limit < 1:
        raise ValidationError(f"Invalid limit: {limit}. Must be at least 1")
    limit = min(limit, MAX_PAGE_SIZE)

    filters = FilterRequest(
        search=_first(raw, "search"),
        category=parse_categories(_all(raw, "category")),
        min_amount=parse_float(_first(raw, "minAmount")),
        max_amount=parse_float(_first(raw, "maxAmount")),
        min_time_horizon=parse_int(_first(raw, "minTimeHorizon")),
        max_time_horizon=parse_int(_first(raw, "maxTimeHorizon")),
        min_return=parse_float(_first(raw, "minReturn")),
        max_return=parse_float(_first(raw, "maxReturn")),
        is_predefined=parse_bool(_first(raw, "isPredefined")),
        sort_by=SortBy.parse(_first(raw, "sortBy")),
        limit=limit,
        offset=(page - 1) * limit,
    )
    return SearchQuery(locale=locale, page=page, filters=filters)
