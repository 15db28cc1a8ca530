"""Search models - filter request and sort order."""

from app.models.search.filters import INT_MAX, INT_MIN, FilterRequest, SortBy, in_int_range

__all__ = [
    "FilterRequest",
    "SortBy",
    "INT_MIN",
    "INT_MAX",
    "in_int_range",
]
