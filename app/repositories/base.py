"""Base repository class."""

from typing import Any

from loguru import logger

from app.repositories.db import Database


class BaseRepository:
    """Base repository over an injected Database."""

    def __init__(self, db: Database):
        self._db = db
        logger.debug("{} initialized", self.__class__.__name__)

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL statement."""
        return self._db.execute(query, params)

    def fetchall(self, query: str, params: list | None = None, timeout: float | None = None) -> list:
        """Execute and fetch all rows."""
        return self._db.fetchall(query, params, timeout=timeout)

    def fetchone(self, query: str, params: list | None = None, timeout: float | None = None) -> Any:
        """Execute and fetch one row."""
        rows = self._db.fetchall(query, params, timeout=timeout)
        return rows[0] if rows else None
