"""Search filter value type - built once per request at the API boundary."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from app.errors import ValidationError
from settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class SortBy(StrEnum):
    """Result ordering. Ties are always broken by id ascending."""

    NEWEST = "newest"
    POPULAR = "popular"
    RETURN = "return"
    AMOUNT = "amount"

    @classmethod
    def parse(cls, value: str | None) -> "SortBy":
        """Unknown or missing values fall back to NEWEST."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NEWEST


def _as_float(value: float | None) -> float | None:
    if value is None:
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


# Range of the INTEGER columns
INT_MIN, INT_MAX = -(2**31), 2**31 - 1


def in_int_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def _as_int(value: int | None) -> int | None:
    """Out-of-range bounds are treated as absent."""
    if value is None:
        return None
    value = int(value)
    return value if in_int_range(value) else None


@dataclass(frozen=True)
class FilterRequest:
    """Validated, immutable search filters.

    ``None`` always means "unconstrained" for optional fields; an empty
    ``category`` set means no category filter. Numeric bounds are inclusive.
    """

    search: str | None = None
    category: frozenset[str] = field(default_factory=frozenset)
    min_amount: float | None = None
    max_amount: float | None = None
    min_time_horizon: int | None = None
    max_time_horizon: int | None = None
    min_return: float | None = None
    max_return: float | None = None
    is_predefined: bool | None = None
    sort_by: SortBy = SortBy.NEWEST
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    def __post_init__(self):
        set_ = object.__setattr__

        search = (self.search or "").strip()
        set_(self, "search", search or None)
        set_(self, "category", _normalize_categories(self.category))

        for name in ("min_amount", "max_amount", "min_return", "max_return"):
            set_(self, name, _as_float(getattr(self, name)))
        for name in ("min_time_horizon", "max_time_horizon"):
            set_(self, name, _as_int(getattr(self, name)))

        if not isinstance(self.sort_by, SortBy):
            set_(self, "sort_by", SortBy.parse(self.sort_by))

        if self.offset < 0:
            raise ValidationError(f"Invalid offset: {self.offset}. Must not be negative")
        if self.limit < 1:
            raise ValidationError(f"Invalid limit: {self.limit}. Must be at least 1")
        set_(self, "limit", min(int(self.limit), MAX_PAGE_SIZE))
        set_(self, "offset", int(self.offset))


def _normalize_categories(values: Iterable[str] | str | None) -> frozenset[str]:
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(v.strip() for v in values if v and v.strip())
