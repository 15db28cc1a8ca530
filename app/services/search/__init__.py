"""Search services - filter engine caching and keys."""

from app.services.search.cache import SearchCache
from app.services.search.keys import canonical_filters, search_cache_key
from app.services.search.service import SearchService

__all__ = [
    "SearchCache",
    "SearchService",
    "canonical_filters",
    "search_cache_key",
]
