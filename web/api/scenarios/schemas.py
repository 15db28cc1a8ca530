"""Scenario API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)


class ScenarioItem(ApiModel):
    """Scenario as listed in search results."""

    id: str
    slug: str
    locale: str
    name: str
    description: str | None = None
    tags: list[str] = []
    initial_amount: float = Field(alias="initialAmount")
    monthly_contribution: float = Field(alias="monthlyContribution")
    annual_return: float = Field(alias="annualReturn")
    time_horizon: int = Field(alias="timeHorizon")
    is_predefined: bool = Field(alias="isPredefined")
    view_count: int = Field(alias="viewCount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class SearchResponse(ApiModel):
    """Search response."""

    scenarios: list[ScenarioItem]
    total: int
    page: int
    total_pages: int = Field(alias="totalPages")


class TrendingItem(ApiModel):
    """Trending snapshot entry."""

    slug: str
    rank: int
    view_count: int = Field(alias="viewCount")


class TrendingResponse(ApiModel):
    """Trending response."""

    locale: str
    items: list[TrendingItem]


class CategoryItem(ApiModel):
    """Category with its public scenario count."""

    category: str
    count: int


class CategoriesResponse(ApiModel):
    """Category counts response."""

    locale: str
    items: list[CategoryItem]


class Projection(ApiModel):
    """Compound interest projection."""

    future_value: float = Field(alias="futureValue")
    total_contributions: float = Field(alias="totalContributions")
    total_gains: float = Field(alias="totalGains")
    yearly_balances: list[float] = Field(alias="yearlyBalances")


class ScenarioDetailResponse(ApiModel):
    """Single scenario with its projection."""

    scenario: ScenarioItem
    projection: Projection


class CreateScenarioRequest(ApiModel):
    """Body of a scenario creation request."""

    locale: str = "en"
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    slug: str | None = Field(default=None, max_length=100)
    initial_amount: float = Field(alias="initialAmount", ge=0, le=10_000_000)
    monthly_contribution: float = Field(alias="monthlyContribution", ge=0, le=100_000)
    annual_return: float = Field(alias="annualReturn", ge=0, le=50)
    time_horizon: int = Field(alias="timeHorizon", ge=1, le=100)
    tags: list[str] = []
    is_public: bool = Field(default=True, alias="isPublic")


class CreateScenarioResponse(ApiModel):
    """Created scenario reference."""

    id: str
    slug: str
    name: str
    url: str
