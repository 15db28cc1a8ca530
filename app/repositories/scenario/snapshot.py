"""Snapshot repository - read side of the trending and category tables."""

from app.models import CategoryCount, TrendingEntry
from app.repositories.base import BaseRepository


class SnapshotRepository(BaseRepository):
    """Reads the last committed snapshot state; never writes."""

    def trending(self, locale: str, limit: int | None = None) -> list[TrendingEntry]:
        """Trending entries for a locale, best rank first."""
        query = """
            SELECT locale, slug, rank, view_count
            FROM scenario_trending_snapshot
            WHERE locale = ?
            ORDER BY rank
        """
        params: list = [str(locale)]
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        return [TrendingEntry(*r) for r in self.fetchall(query, params)]

    def categories(self, locale: str) -> list[CategoryCount]:
        """Category counts for a locale, largest first."""
        rows = self.fetchall(
            """
            SELECT locale, category, count
            FROM scenario_category_counts
            WHERE locale = ?
            ORDER BY count DESC, category
            """,
            [str(locale)],
        )
        return [CategoryCount(*r) for r in rows]
