"""Common repositories - cache storage."""

from app.repositories.common.cache import CacheBackend, MemoryCacheBackend

__all__ = [
    "CacheBackend",
    "MemoryCacheBackend",
]
