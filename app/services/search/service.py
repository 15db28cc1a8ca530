"""Search service - cached filter queries over the scenario store."""

from loguru import logger

from app.models import CacheTag, FilterRequest, Locale, SearchPage
from app.repositories.scenario import ScenarioRepository
from app.services.search.cache import SearchCache
from app.services.search.keys import search_cache_key
from settings import QUERY_TIMEOUT


class SearchService:
    """Scenario search with origin caching."""

    def __init__(self, repo: ScenarioRepository, cache: SearchCache, query_timeout: float | None = QUERY_TIMEOUT):
        self._repo = repo
        self._cache = cache
        self._timeout = query_timeout
        logger.debug("SearchService initialized")

    def search(self, locale: Locale, filters: FilterRequest) -> SearchPage:
        """Page of public scenarios matching ``filters`` in ``locale``."""
        key = search_cache_key(locale, filters)
        return self._cache.get_or_compute(
            key,
            lambda: self._repo.search(locale, filters, timeout=self._timeout),
            tags=[CacheTag.search(locale)],
        )
