"""Canonical cache keys for search requests."""

import hashlib
import json

from app.models import FilterRequest, Locale

# Absent and empty values both serialize to this, so "omitted" and
# "explicitly empty" requests share an entry.
EMPTY = ""


def _field(value) -> str | float | int | bool | list:
    if value is None:
        return EMPTY
    if isinstance(value, (set, frozenset)):
        return sorted(value) or EMPTY
    return value


def canonical_filters(locale: Locale | str, filters: FilterRequest) -> str:
    """JSON list of locale and every filter field in a fixed order."""
    parts = [
        str(locale),
        _field(filters.search),
        _field(filters.category),
        _field(filters.min_amount),
        _field(filters.max_amount),
        _field(filters.min_time_horizon),
        _field(filters.max_time_horizon),
        _field(filters.min_return),
        _field(filters.max_return),
        _field(filters.is_predefined),
        filters.sort_by.value,
        filters.limit,
        filters.offset,
    ]
    return json.dumps(parts, ensure_ascii=False, separators=(",", ":"))


def search_cache_key(locale: Locale | str, filters: FilterRequest) -> str:
    """Cache key for one search page: ``scenarios:search:<locale>:<sha256>``."""
    digest = hashlib.sha256(canonical_filters(locale, filters).encode()).hexdigest()
    return f"scenarios:search:{locale}:{digest}"
