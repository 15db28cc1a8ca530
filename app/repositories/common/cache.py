"""Cache backend - key/value storage with hard expiry and tag invalidation."""

import threading
import time
from collections import OrderedDict, defaultdict
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from loguru import logger

from app.models import CacheEntry, CacheTag
from settings import CACHE_MAX_ENTRIES


class CacheBackend(Protocol):
    """What the search cache needs from a backend."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, value: Any, ttl: float, tags: Iterable[CacheTag] = ()) -> CacheEntry: ...

    def invalidate_by_tag(self, tag: CacheTag) -> int: ...

    def generation(self, tags: Iterable[CacheTag]) -> tuple[int, ...]: ...


class MemoryCacheBackend:
    """Thread-safe in-process backend, bounded by entry count.

    Entries past their hard expiry are dropped on read. When full, the
    oldest write is evicted first.
    """

    def __init__(self, max_entries: int = CACHE_MAX_ENTRIES, clock: Callable[[], float] = time.monotonic):
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._by_tag: dict[CacheTag, set[str]] = defaultdict(set)
        self._generations: dict[CacheTag, int] = defaultdict(int)
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> CacheEntry | None:
        """Get an unexpired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(self._clock()):
                self._remove(key)
                self._misses += 1
                logger.debug("Cache expired: {}", key)
                return None
            self._hits += 1
            return entry

    def set(self, key: str, value: Any, ttl: float, tags: Iterable[CacheTag] = ()) -> CacheEntry:
        """Store a value for ``ttl`` seconds under the given tags."""
        now = self._clock()
        entry = CacheEntry(value=value, stored_at=now, expires_at=now + ttl, tags=frozenset(tags))
        with self._lock:
            if key in self._entries:
                self._remove(key)
            while len(self._entries) >= self._max_entries:
                oldest = next(iter(self._entries))
                self._remove(oldest)
                logger.debug("Cache evicted: {}", oldest)
            self._entries[key] = entry
            for tag in entry.tags:
                self._by_tag[tag].add(key)
        return entry

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            self._remove(key)
            return True

    def invalidate_by_tag(self, tag: CacheTag) -> int:
        """Drop every entry carrying ``tag``. Returns the number removed."""
        with self._lock:
            self._generations[tag] += 1
            keys = list(self._by_tag.pop(tag, ()))
            for key in keys:
                self._remove(key)
        logger.info("Cache invalidated: {} ({} entries)", tag, len(keys))
        return len(keys)

    def generation(self, tags: Iterable[CacheTag]) -> tuple[int, ...]:
        """Invalidation counters for ``tags``; changes whenever one of them is invalidated."""
        with self._lock:
            return tuple(self._generations[t] for t in sorted(tags, key=str))

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._by_tag.clear()
        logger.info("All cache cleared ({} entries)", count)
        return count

    def stats(self) -> dict:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "entries": len(self._entries),
                "max_entries": self._max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
            }

    def __len__(self) -> int:
        return len(self._entries)

    def _remove(self, key: str) -> None:
        # caller holds the lock
        entry = self._entries.pop(key)
        for tag in entry.tags:
            keys = self._by_tag.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._by_tag[tag]
