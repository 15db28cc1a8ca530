"""Search cache - stale-while-revalidate with one computation per key."""

import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from loguru import logger

from app.models import CacheTag, Locale
from app.repositories.common import CacheBackend
from settings import CACHE_REVALIDATE_WORKERS, SEARCH_EXPIRE_SECONDS, SEARCH_REVALIDATE_SECONDS


class SearchCache:
    """Wraps a backend with freshness windows and single-flight computation.

    * younger than ``revalidate_after``: served as is
    * older, but not past the backend's hard expiry: served stale while one
      background recomputation runs
    * missing or expired: computed once; concurrent callers for the same key
      wait on that computation
    """

    def __init__(
        self,
        backend: CacheBackend,
        revalidate_after: float = SEARCH_REVALIDATE_SECONDS,
        expire_after: float = SEARCH_EXPIRE_SECONDS,
        workers: int = CACHE_REVALIDATE_WORKERS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if expire_after < revalidate_after:
            raise ValueError("expire_after must not be shorter than revalidate_after")
        self._backend = backend
        self._revalidate_after = revalidate_after
        self._expire_after = expire_after
        self._clock = clock
        self._inflight: dict[str, Future] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="search-revalidate")

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    def get_or_compute(self, key: str, compute: Callable[[], Any], tags: Iterable[CacheTag] = ()) -> Any:
        """Return the cached value for ``key``, computing it when needed."""
        tags = frozenset(tags)
        entry = self._backend.get(key)
        if entry is not None:
            if entry.age(self._clock()) < self._revalidate_after:
                return entry.value
            self._revalidate_in_background(key, compute, tags)
            logger.debug("Serving stale: {}", key)
            return entry.value

        with self._lock:
            future = self._inflight.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._inflight[key] = future

        if not owner:
            logger.debug("Waiting on in-flight computation: {}", key)
            return future.result()

        logger.debug("Cache miss: {}", key)
        return self._compute(key, compute, tags, future)

    def invalidate(self, locale: Locale | str) -> int:
        """Drop every cached search page of a locale."""
        return self._backend.invalidate_by_tag(CacheTag.search(locale))

    def close(self) -> None:
        """Stop background revalidation."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("SearchCache closed")

    def _compute(self, key: str, compute: Callable[[], Any], tags: frozenset[CacheTag], future: Future) -> Any:
        generation = self._backend.generation(tags)
        try:
            value = compute()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            # an invalidation that raced the computation wins
            if self._backend.generation(tags) == generation:
                self._backend.set(key, value, ttl=self._expire_after, tags=tags)
            else:
                logger.debug("Not caching {}: invalidated during computation", key)
            future.set_result(value)
            return value
        finally:
            with self._lock:
                self._inflight.pop(key, None)

    def _revalidate_in_background(self, key: str, compute: Callable[[], Any], tags: frozenset[CacheTag]) -> None:
        with self._lock:
            if key in self._inflight:
                return
            future = Future()
            self._inflight[key] = future

        try:
            self._executor.submit(self._revalidate, key, compute, tags, future)
        except RuntimeError:
            # executor already shut down
            with self._lock:
                self._inflight.pop(key, None)
            future.cancel()

    def _revalidate(self, key: str, compute: Callable[[], Any], tags: frozenset[CacheTag], future: Future) -> None:
        try:
            self._compute(key, compute, tags, future)
            logger.debug("Revalidated: {}", key)
        except Exception as e:
            logger.warning("Background revalidation failed for {}: {}", key, e)
