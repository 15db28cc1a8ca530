"""Trending service - reads of the snapshot tables."""

from app.models import CategoryCount, Locale, TrendingEntry
from app.repositories.scenario import SnapshotRepository
from settings import TRENDING_LIMIT_PER_LOCALE


class TrendingService:
    """Trending scenarios and category counts from the last refresh."""

    def __init__(self, repo: SnapshotRepository):
        self._repo = repo

    def trending(self, locale: Locale, limit: int = TRENDING_LIMIT_PER_LOCALE) -> list[TrendingEntry]:
        return self._repo.trending(locale, limit=max(1, min(limit, TRENDING_LIMIT_PER_LOCALE)))

    def categories(self, locale: Locale) -> list[CategoryCount]:
        return self._repo.categories(locale)
