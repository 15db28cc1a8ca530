"""Transaction handling in the Database wrapper."""

import duckdb
import polars as pl
import pytest

from app.errors import StoreUnavailable, TransactionConflict
from app.models import FilterRequest, SnapshotTable
from etl.helpers import replace_snapshot


class FailingCommit:
    """Cursor wrapper whose next ``failures`` COMMITs raise ``exc``."""

    def __init__(self, conn, exc: Exception, failures: int = 1):
        self._conn = conn
        self._exc = exc
        self.failures = failures

    def execute(self, query, *args):
        if query == "COMMIT" and self.failures:
            self.failures -= 1
            raise self._exc
        return self._conn.execute(query, *args)

    def __getattr__(self, name):
        return getattr(self._conn, name)


@pytest.fixture
def failing_commit(db, monkeypatch):
    def install(exc: Exception, failures: int = 1) -> FailingCommit:
        wrapper = FailingCommit(db.cursor(), exc, failures)
        monkeypatch.setattr(db, "cursor", lambda: wrapper)
        return wrapper

    return install


class TestTransaction:
    def test_commit_error_is_store_failure(self, db, failing_commit):
        failing_commit(duckdb.IOException("disk full"))
        with pytest.raises(StoreUnavailable):
            with db.transaction() as conn:
                conn.execute("SELECT 1")

    def test_commit_conflict(self, db, failing_commit):
        failing_commit(duckdb.TransactionException("write-write conflict"))
        with pytest.raises(TransactionConflict):
            with db.transaction():
                pass

    def test_search_commit_failure(self, db, repo, failing_commit):
        failing_commit(duckdb.IOException("disk full"))
        with pytest.raises(StoreUnavailable):
            repo.search("en", FilterRequest())

    def test_usable_after_failed_commit(self, db, repo, failing_commit):
        failing_commit(duckdb.IOException("disk full"))
        with pytest.raises(StoreUnavailable):
            repo.search("en", FilterRequest())
        assert repo.search("en", FilterRequest()).total == 0

    def test_block_error_rolls_back(self, db, snapshots):
        with pytest.raises(RuntimeError):
            with db.transaction() as conn:
                conn.execute("INSERT INTO scenario_category_counts VALUES ('en', 'x', 1)")
                raise RuntimeError("abort")
        assert snapshots.categories("en") == []


class TestReplaceRetry:
    def test_conflict_is_retried(self, db, snapshots, failing_commit):
        wrapper = failing_commit(duckdb.TransactionException("write-write conflict"))
        rows = pl.DataFrame(
            {"locale": ["en"], "category": ["retirement"], "count": [3]},
            schema={"locale": pl.Utf8, "category": pl.Utf8, "count": pl.Int32},
        )

        assert replace_snapshot(db, SnapshotTable.CATEGORIES, "en", rows) == 1
        assert wrapper.failures == 0
        assert [(c.category, c.count) for c in snapshots.categories("en")] == [("retirement", 3)]

    def test_persistent_conflict_gives_up(self, db, failing_commit):
        failing_commit(duckdb.TransactionException("write-write conflict"), failures=10)
        rows = pl.DataFrame({"locale": ["en"], "category": ["x"], "count": [1]})
        with pytest.raises(TransactionConflict):
            replace_snapshot(db, SnapshotTable.CATEGORIES, "en", rows)
