"""Trending services."""

from app.services.trending.service import TrendingService

__all__ = ["TrendingService"]
