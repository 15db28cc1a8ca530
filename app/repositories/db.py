"""DuckDB connection management."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import duckdb
from loguru import logger

from app.errors import QueryTimeout, StoreUnavailable, TransactionConflict
from app.models import ALL_DDL
from settings import DB_PATH


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return path == ":memory:" or Path(path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.debug("DB tables initialized")


class Database:
    """One DuckDB database per process, one cursor per thread.

    Constructed at startup and closed at shutdown; repositories, the search
    cache and the snapshot refresher all receive the same instance.
    """

    def __init__(self, path: str = DB_PATH, read_only: bool = False):
        self.path = path
        self.read_only = read_only
        self._root: duckdb.DuckDBPyConnection | None = None
        self._local = threading.local()
        self._cursors: list[duckdb.DuckDBPyConnection] = []
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._root is not None

    def connect(self) -> "Database":
        """Open the root connection and create tables if needed."""
        with self._lock:
            if self._root is not None:
                return self
            if not db_exists(self.path):
                logger.warning("DB not found: {}. Creating empty DB.", self.path)
            try:
                self._root = duckdb.connect(self.path, read_only=self.read_only)
                if not self.read_only:
                    init_tables(self._root)
            except duckdb.Error as e:
                raise StoreUnavailable(f"Cannot open {self.path}: {e}") from e
        logger.info("DB connected: {} (read_only={})", self.path, self.read_only)
        return self

    def cursor(self) -> duckdb.DuckDBPyConnection:
        """Get this thread's cursor on the root connection."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            return conn

        with self._lock:
            if self._root is None:
                raise StoreUnavailable("Database is not connected")
            conn = self._root.cursor()
            self._cursors.append(conn)
        self._local.conn = conn
        return conn

    def close(self) -> None:
        """Close every cursor and the root connection."""
        with self._lock:
            for conn in self._cursors:
                conn.close()
            self._cursors.clear()
            if self._root is not None:
                self._root.close()
                self._root = None
            self._local = threading.local()
        logger.debug("DB connection closed")

    def fetchall(self, query: str, params: list | None = None, timeout: float | None = None) -> list:
        """Execute and fetch all rows, interrupting the query after ``timeout`` seconds."""
        conn = self.cursor()
        timer = None
        if timeout:
            timer = threading.Timer(timeout, conn.interrupt)
            timer.daemon = True
            timer.start()
        try:
            return (conn.execute(query, params) if params else conn.execute(query)).fetchall()
        except duckdb.InterruptException as e:
            logger.warning("Query interrupted after {}s", timeout)
            raise QueryTimeout(f"Query exceeded {timeout}s") from e
        except duckdb.Error as e:
            logger.error("Query failed: {}", e)
            raise StoreUnavailable(str(e)) from e
        finally:
            if timer is not None:
                timer.cancel()

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute a statement on this thread's cursor."""
        conn = self.cursor()
        try:
            return conn.execute(query, params) if params else conn.execute(query)
        except duckdb.ConstraintException:
            raise
        except duckdb.Error as e:
            raise StoreUnavailable(str(e)) from e

    @contextmanager
    def transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Run the block in one transaction; readers see all of it or none of it."""
        conn = self.cursor()
        try:
            conn.execute("BEGIN TRANSACTION")
        except duckdb.Error as e:
            raise StoreUnavailable(str(e)) from e
        try:
            yield conn
        except BaseException as exc:
            self._rollback(conn)
            if isinstance(exc, duckdb.TransactionException):
                raise TransactionConflict(str(exc)) from exc
            raise

        try:
            conn.execute("COMMIT")
        except duckdb.Error as e:
            self._rollback(conn)
            if isinstance(e, duckdb.TransactionException):
                raise TransactionConflict(str(e)) from e
            raise StoreUnavailable(f"Commit failed: {e}") from e

    @staticmethod
    def _rollback(conn: duckdb.DuckDBPyConnection) -> None:
        try:
            conn.execute("ROLLBACK")
        except duckdb.Error as e:
            logger.warning("Rollback failed: {}", e)
