"""Scenario service - detail view, view counting and creation."""

from loguru import logger

from app.errors import NotFoundError
from app.models import Locale, ScenarioRecord
from app.repositories.scenario import ScenarioRepository
from app.services.search.cache import SearchCache
from helpers import formulas
from helpers.slugs import scenario_slug, slugify


class ScenarioService:
    """Single-scenario business logic."""

    def __init__(self, repo: ScenarioRepository, search_cache: SearchCache):
        self._repo = repo
        self._search_cache = search_cache

    def get_detail(self, locale: Locale, slug: str, count_view: bool = True) -> dict:
        """Public scenario with its projection."""
        record = self._repo.get_by_slug(locale, slug)
        if record is None:
            raise NotFoundError(f"Scenario not found: {locale}/{slug}")

        if count_view:
            views = self._repo.increment_views(locale, slug)
            if views is not None:
                record.view_count = views

        projection = formulas.project(
            record.initial_amount,
            record.monthly_contribution,
            record.annual_return,
            record.time_horizon,
        )
        return {"scenario": record, "projection": projection}

    def create(
        self,
        locale: Locale,
        name: str,
        initial_amount: float,
        monthly_contribution: float,
        annual_return: float,
        time_horizon: int,
        slug: str | None = None,
        **fields,
    ) -> ScenarioRecord:
        """Create a scenario and drop the locale's cached search pages."""
        if slug:
            slug = slugify(slug)
        if not slug:
            slug = scenario_slug(initial_amount, monthly_contribution, annual_return, time_horizon)
        record = self._repo.create(
            locale=locale,
            slug=slug,
            name=name,
            initial_amount=initial_amount,
            monthly_contribution=monthly_contribution,
            annual_return=annual_return,
            time_horizon=time_horizon,
            **fields,
        )
        removed = self._search_cache.invalidate(locale)
        logger.info("Created {}/{}; invalidated {} search pages", locale, slug, removed)
        return record
