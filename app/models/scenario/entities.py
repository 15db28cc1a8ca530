"""Scenario domain entities - records, snapshot rows and search pages."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class ScenarioRecord(BaseEntity):
    """One investment scenario in one locale."""

    id: str
    slug: str
    locale: str
    name: str
    description: str | None
    tags: list[str]
    initial_amount: float
    monthly_contribution: float
    annual_return: float
    time_horizon: int
    is_public: bool
    is_predefined: bool
    created_by: str
    view_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple) -> "ScenarioRecord":
        """Build from a row selected in SCENARIO_COLUMNS order."""
        (id_, slug, locale, name, description, tags, initial, monthly, ret, horizon,
         is_public, is_predefined, created_by, views, created_at, updated_at) = row
        return cls(
            id=id_,
            slug=slug,
            locale=locale,
            name=name,
            description=description,
            tags=list(tags or []),
            initial_amount=float(initial),
            monthly_contribution=float(monthly),
            annual_return=float(ret),
            time_horizon=int(horizon),
            is_public=bool(is_public),
            is_predefined=bool(is_predefined),
            created_by=created_by,
            view_count=int(views),
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass
class TrendingEntry(BaseEntity):
    """Row of the trending snapshot."""

    locale: str
    slug: str
    rank: int
    view_count: int


@dataclass
class CategoryCount(BaseEntity):
    """Row of the category counts snapshot."""

    locale: str
    category: str
    count: int


@dataclass
class SearchPage(BaseEntity):
    """One page of search results plus the unpaginated match count."""

    scenarios: list[ScenarioRecord] = field(default_factory=list)
    total: int = 0
