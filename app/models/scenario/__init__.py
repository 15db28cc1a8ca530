"""Scenario domain models - source table, snapshot tables and entities."""

from app.models.scenario.entities import CategoryCount, ScenarioRecord, SearchPage, TrendingEntry
from app.models.scenario.scenario import SCENARIO_COLUMNS, SCENARIO_DDL, SCENARIO_INDEXES
from app.models.scenario.snapshot import CATEGORY_COUNTS_DDL, TRENDING_DDL, SnapshotTable

__all__ = [
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
]
