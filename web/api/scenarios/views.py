"""Scenario API views - thin layer over services."""

import math

from app.container import Container
from app.errors import ValidationError
from app.models import ScenarioRecord
from settings import TRENDING_LIMIT_PER_LOCALE
from web.api.errors import validate_locale

from .params import RawParams, parse_filter_params
from .schemas import (
    CategoriesResponse,
    CategoryItem,
    CreateScenarioRequest,
    CreateScenarioResponse,
    Projection,
    ScenarioDetailResponse,
    ScenarioItem,
    SearchResponse,
    TrendingItem,
    TrendingResponse,
)


def to_item(record: ScenarioRecord) -> ScenarioItem:
    return ScenarioItem(
        id=record.id,
        slug=record.slug,
        locale=record.locale,
        name=record.name,
        description=record.description,
        tags=record.tags,
        initial_amount=record.initial_amount,
        monthly_contribution=record.monthly_contribution,
        annual_return=record.annual_return,
        time_horizon=record.time_horizon,
        is_predefined=record.is_predefined,
        view_count=record.view_count,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def search_scenarios(container: Container, params: RawParams) -> SearchResponse:
    """Search public scenarios."""
    query = parse_filter_params(params)
    page = container.search.search(query.locale, query.filters)

    return SearchResponse(
        scenarios=[to_item(r) for r in page.scenarios],
        total=page.total,
        page=query.page,
        total_pages=math.ceil(page.total / query.limit),
    )


def get_trending(container: Container, locale: str | None, limit: int = TRENDING_LIMIT_PER_LOCALE) -> TrendingResponse:
    """Get trending scenarios from the last snapshot; limit is clamped to the snapshot size."""
    loc = validate_locale(locale)
    if limit < 1:
        raise ValidationError(f"Invalid limit: {limit}. Must be at least 1")
    data = container.trending.trending(loc, limit)

    items = [TrendingItem(slug=t.slug, rank=t.rank, view_count=t.view_count) for t in data]
    return TrendingResponse(locale=loc.value, items=items)


def get_categories(container: Container, locale: str | None) -> CategoriesResponse:
    """Get category counts from the last snapshot."""
    loc = validate_locale(locale)
    data = container.trending.categories(loc)

    items = [CategoryItem(category=c.category, count=c.count) for c in data]
    return CategoriesResponse(locale=loc.value, items=items)


def get_scenario(container: Container, locale: str | None, slug: str) -> ScenarioDetailResponse:
    """Get one public scenario; counts as a view."""
    loc = validate_locale(locale)
    data = container.scenarios.get_detail(loc, slug)

    return ScenarioDetailResponse(
        scenario=to_item(data["scenario"]),
        projection=Projection(**data["projection"]),
    )


def create_scenario(container: Container, body: CreateScenarioRequest) -> CreateScenarioResponse:
    """Create a scenario."""
    loc = validate_locale(body.locale)
    record = container.scenarios.create(
        loc,
        name=body.name,
        initial_amount=body.initial_amount,
        monthly_contribution=body.monthly_contribution,
        annual_return=body.annual_return,
        time_horizon=body.time_horizon,
        slug=body.slug,
        description=body.description,
        tags=body.tags,
        is_public=body.is_public,
        created_by="user",
    )

    return CreateScenarioResponse(
        id=record.id,
        slug=record.slug,
        name=record.name,
        url=f"/{loc.value}/scenario/{record.slug}",
    )
