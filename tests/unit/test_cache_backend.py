"""Tests for the in-memory cache backend."""

from app.models import CacheTag
from app.repositories.common import MemoryCacheBackend


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestMemoryCacheBackend:
    def test_set_get(self):
        backend = MemoryCacheBackend(clock=FakeClock())
        backend.set("k", 1, ttl=10)
        assert backend.get("k").value == 1
        assert backend.get("missing") is None

    def test_hard_expiry(self):
        clock = FakeClock()
        backend = MemoryCacheBackend(clock=clock)
        backend.set("k", 1, ttl=10)
        clock.now = 9.9
        assert backend.get("k") is not None
        clock.now = 10
        assert backend.get("k") is None
        assert len(backend) == 0

    def test_invalidate_by_tag_is_locale_scoped(self):
        backend = MemoryCacheBackend(clock=FakeClock())
        backend.set("en-1", 1, ttl=10, tags=[CacheTag.search("en")])
        backend.set("en-2", 2, ttl=10, tags=[CacheTag.search("en")])
        backend.set("pl-1", 3, ttl=10, tags=[CacheTag.search("pl")])

        assert backend.invalidate_by_tag(CacheTag.search("en")) == 2
        assert backend.get("en-1") is None
        assert backend.get("en-2") is None
        assert backend.get("pl-1").value == 3

    def test_generation_bumps_on_invalidate(self):
        backend = MemoryCacheBackend(clock=FakeClock())
        tags = [CacheTag.search("en")]
        before = backend.generation(tags)
        backend.invalidate_by_tag(CacheTag.search("pl"))
        assert backend.generation(tags) == before
        backend.invalidate_by_tag(CacheTag.search("en"))
        assert backend.generation(tags) != before

    def test_evicts_oldest(self):
        backend = MemoryCacheBackend(max_entries=2, clock=FakeClock())
        backend.set("a", 1, ttl=10)
        backend.set("b", 2, ttl=10)
        backend.set("c", 3, ttl=10)
        assert backend.get("a") is None
        assert backend.get("b").value == 2
        assert backend.get("c").value == 3

    def test_overwrite_replaces_tags(self):
        backend = MemoryCacheBackend(clock=FakeClock())
        backend.set("k", 1, ttl=10, tags=[CacheTag.search("en")])
        backend.set("k", 2, ttl=10, tags=[CacheTag.search("pl")])
        assert backend.invalidate_by_tag(CacheTag.search("en")) == 0
        assert backend.get("k").value == 2

    def test_stats(self):
        backend = MemoryCacheBackend(clock=FakeClock())
        backend.set("k", 1, ttl=10)
        backend.get("k")
        backend.get("nope")
        stats = backend.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5

    def test_tag_string_form(self):
        assert str(CacheTag.search("es")) == "scenarios:search:es"
