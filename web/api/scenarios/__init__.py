"""Scenario API."""

from web.api.scenarios.params import SearchQuery, parse_filter_params
from web.api.scenarios.views import (
    create_scenario,
    get_categories,
    get_scenario,
    get_trending,
    search_scenarios,
)

__all__ = [
    "SearchQuery",
    "parse_filter_params",
    "search_scenarios",
    "get_trending",
    "get_categories",
    "get_scenario",
    "create_scenario",
]
