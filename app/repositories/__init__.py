"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheBackend, MemoryCacheBackend
from app.repositories.db import Database, db_exists, init_tables
from app.repositories.scenario import ScenarioRepository, SnapshotRepository

__all__ = [
    # DB
    "Database",
    "db_exists",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "CacheBackend",
    "MemoryCacheBackend",
    # Scenario
    "ScenarioRepository",
    "SnapshotRepository",
]
