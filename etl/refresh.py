"""Snapshot refresh orchestration.

Each (table, locale) stage is deleted and re-inserted in its own
transaction. A failed stage is logged and reported but does not stop the
others; readers keep seeing the last committed state of that slice.
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

import polars as pl
from loguru import logger

from app.errors import RefreshPartialFailure
from app.models import Locale, SnapshotTable, utcnow
from app.repositories.db import Database
from etl.categories import build_category_counts
from etl.helpers import replace_snapshot
from etl.trending import build_trending
from helpers.timing import timed
from settings import DB_PATH, TRENDING_LIMIT_PER_LOCALE, TRENDING_WINDOW_DAYS


@dataclass
class StageResult:
    """Outcome of one (locale, table) replace."""

    locale: str
    stage: str
    rows: int = 0
    duration_ms: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshReport:
    """Outcome of one refresher run."""

    started_at: datetime
    results: list[StageResult] = field(default_factory=list)

    @property
    def failures(self) -> list[StageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise RefreshPartialFailure([(r.locale, r.stage, r.error) for r in self.failures])


class SnapshotRefresher:
    """Rebuilds the trending and category snapshots for every locale.

    Not safe to run concurrently with itself; the scheduler is expected to
    prevent overlapping runs.
    """

    def __init__(
        self,
        db: Database,
        limit_per_locale: int = TRENDING_LIMIT_PER_LOCALE,
        window_days: int = TRENDING_WINDOW_DAYS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._db = db
        self._limit = limit_per_locale
        self._window_days = window_days
        self._clock = clock

    def run(self, locales: Iterable[str] | None = None, now: datetime | None = None) -> RefreshReport:
        """Refresh both tables for ``locales`` (default: all supported)."""
        now = now or self._clock()
        targets = [Locale(loc) for loc in locales] if locales else list(Locale)
        report = RefreshReport(started_at=now)

        logger.info("Refreshing snapshots for {} (limit={}/locale)", [t.value for t in targets], self._limit)
        with timed("snapshots:all"):
            for table in SnapshotTable:
                for locale in targets:
                    report.results.append(self._refresh_stage(table, locale, now))

        if report.failures:
            logger.warning("Snapshot refresh finished with {} failed stage(s)", len(report.failures))
        else:
            logger.info("All snapshots refreshed")
        return report

    def _build(self, table: SnapshotTable, locale: Locale, now: datetime) -> pl.DataFrame:
        conn = self._db.cursor()
        if table is SnapshotTable.TRENDING:
            return build_trending(conn, locale, now, limit=self._limit, window_days=self._window_days)
        return build_category_counts(conn, locale)

    def _refresh_stage(self, table: SnapshotTable, locale: Locale, now: datetime) -> StageResult:
        label = f"{table.stage}:{locale}"
        start = time.perf_counter()
        try:
            with timed(label):
                rows = self._build(table, locale, now)
                count = replace_snapshot(self._db, table, locale, rows)
        except Exception as e:
            logger.error("Snapshot stage {} failed: {}", label, e)
            return StageResult(locale.value, table.stage, 0, _elapsed_ms(start), str(e))
        return StageResult(locale.value, table.stage, count, _elapsed_ms(start))


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)


def refresh_snapshots(
    locales: Iterable[str] | None = None,
    limit_per_locale: int = TRENDING_LIMIT_PER_LOCALE,
    db_path: str = DB_PATH,
) -> RefreshReport:
    """Main refresh entry point: open the database, refresh, close."""
    db = Database(db_path).connect()
    try:
        return SnapshotRefresher(db, limit_per_locale=limit_per_locale).run(locales)
    finally:
        db.close()
