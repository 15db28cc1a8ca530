"""Snapshot tables - derived per-locale aggregates rebuilt by the refresher.

No primary keys: each (locale, table) slice is deleted and re-inserted in one
transaction, and uniqueness of ranks is checked by etl.validation instead.
"""

from enum import StrEnum

TRENDING_DDL = """
CREATE TABLE IF NOT EXISTS scenario_trending_snapshot (
    locale VARCHAR NOT NULL,
    slug VARCHAR NOT NULL,
    rank INTEGER NOT NULL,
    view_count INTEGER NOT NULL
)
"""

CATEGORY_COUNTS_DDL = """
CREATE TABLE IF NOT EXISTS scenario_category_counts (
    locale VARCHAR NOT NULL,
    category VARCHAR NOT NULL,
    count INTEGER NOT NULL
)
"""


class SnapshotTable(StrEnum):
    """Snapshot tables and the columns inserted into them."""

    TRENDING = "scenario_trending_snapshot"
    CATEGORIES = "scenario_category_counts"

    @property
    def columns(self) -> tuple[str, ...]:
        if self is SnapshotTable.TRENDING:
            return ("locale", "slug", "rank", "view_count")
        return ("locale", "category", "count")

    @property
    def stage(self) -> str:
        """Short name used in logs and refresh reports."""
        return "trending" if self is SnapshotTable.TRENDING else "categories"
