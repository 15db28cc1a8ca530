"""Dependency Injection container - built at app startup, closed at shutdown."""

from loguru import logger

from app.repositories.common import MemoryCacheBackend
from app.repositories.db import Database
from app.repositories.scenario import ScenarioRepository, SnapshotRepository
from app.services.scenario import ScenarioService
from app.services.search import SearchCache, SearchService
from app.services.trending import TrendingService
from settings import (
    CACHE_MAX_ENTRIES,
    DB_PATH,
    QUERY_TIMEOUT,
    SEARCH_EXPIRE_SECONDS,
    SEARCH_REVALIDATE_SECONDS,
)


class Container:
    """Application container - owns the database, cache and services."""

    def __init__(
        self,
        db_path: str = DB_PATH,
        revalidate_after: float = SEARCH_REVALIDATE_SECONDS,
        expire_after: float = SEARCH_EXPIRE_SECONDS,
        query_timeout: float | None = QUERY_TIMEOUT,
    ):
        self._db_path = db_path
        self._revalidate_after = revalidate_after
        self._expire_after = expire_after
        self._query_timeout = query_timeout
        self._initialized = False

    def init(self) -> "Container":
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return self

        self.db = Database(self._db_path).connect()

        # Repositories
        self._scenario_repo = ScenarioRepository(self.db)
        self._snapshot_repo = SnapshotRepository(self.db)

        # Cache
        self.cache_backend = MemoryCacheBackend(max_entries=CACHE_MAX_ENTRIES)
        self.search_cache = SearchCache(
            self.cache_backend,
            revalidate_after=self._revalidate_after,
            expire_after=self._expire_after,
        )

        # Services (with injected repos)
        self.search = SearchService(
            repo=self._scenario_repo,
            cache=self.search_cache,
            query_timeout=self._query_timeout,
        )
        self.scenarios = ScenarioService(
            repo=self._scenario_repo,
            search_cache=self.search_cache,
        )
        self.trending = TrendingService(repo=self._snapshot_repo)

        self._initialized = True
        logger.info("Container initialized ({})", self._db_path)
        return self

    def close(self) -> None:
        """Tear down cache workers and the database."""
        if not self._initialized:
            return
        self.search_cache.close()
        self.db.close()
        self._initialized = False
        logger.info("Container closed")
