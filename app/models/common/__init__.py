"""Common models - base classes, locales and cache types."""

from app.models.common.base import BaseEntity, utcnow
from app.models.common.cache import CacheEntry, CacheTag
from app.models.common.locale import Locale, parse_locale

__all__ = [
    "BaseEntity",
    "utcnow",
    "CacheEntry",
    "CacheTag",
    "Locale",
    "parse_locale",
]
