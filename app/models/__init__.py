"""Models package - DDL and entities for all domains."""

from app.models.common import BaseEntity, CacheEntry, CacheTag, Locale, parse_locale, utcnow
from app.models.scenario import (
    CATEGORY_COUNTS_DDL,
    SCENARIO_COLUMNS,
    SCENARIO_DDL,
    SCENARIO_INDEXES,
    TRENDING_DDL,
    CategoryCount,
    ScenarioRecord,
    SearchPage,
    SnapshotTable,
    TrendingEntry,
)
from app.models.search import INT_MAX, INT_MIN, FilterRequest, SortBy, in_int_range

ALL_DDL = [
    # Source
    SCENARIO_DDL,
    *SCENARIO_INDEXES,
    # Snapshots
    TRENDING_DDL,
    CATEGORY_COUNTS_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "utcnow",
    "CacheEntry",
    "CacheTag",
    "Locale",
    "parse_locale",
    # Scenario
    "SCENARIO_DDL",
    "SCENARIO_INDEXES",
    "SCENARIO_COLUMNS",
    "TRENDING_DDL",
    "CATEGORY_COUNTS_DDL",
    "SnapshotTable",
    "ScenarioRecord",
    "TrendingEntry",
    "CategoryCount",
    "SearchPage",
    # Search
    "FilterRequest",
    "SortBy",
    "INT_MIN",
    "INT_MAX",
    "in_int_range",
    # All DDL
    "ALL_DDL",
]
