"""Cache entries and typed invalidation tags."""

from dataclasses import dataclass, field
from typing import Any

from app.models.common.locale import Locale


@dataclass(frozen=True)
class CacheTag:
    """Invalidation tag scoped to one locale.

    Build tags through the constructors below so the writer and the
    invalidator can never disagree on the string form.
    """

    namespace: str
    locale: Locale

    @classmethod
    def search(cls, locale: Locale | str) -> "CacheTag":
        return cls("search", Locale(locale))

    def __str__(self) -> str:
        return f"scenarios:{self.namespace}:{self.locale.value}"


@dataclass
class CacheEntry:
    """Cached value with its tags and timestamps (monotonic seconds)."""

    value: Any
    stored_at: float
    expires_at: float
    tags: frozenset[CacheTag] = field(default_factory=frozenset)

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
