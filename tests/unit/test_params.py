"""Tests for search query parameter parsing."""

import pytest

from app.errors import ValidationError
from app.models import Locale, SortBy
from web.api.scenarios.params import parse_bool, parse_categories, parse_filter_params, parse_float, parse_int


class TestParseFilterParams:
    def test_defaults(self):
        query = parse_filter_params({})
        assert query.locale is Locale.EN
        assert query.page == 1
        assert query.filters.limit == 12
        assert query.filters.offset == 0
        assert query.filters.sort_by is SortBy.NEWEST

    def test_offset_from_page(self):
        query = parse_filter_params({"page": "3", "limit": "5"})
        assert query.filters.offset == 10
        assert query.limit == 5

    def test_camel_case_filters(self):
        query = parse_filter_params(
            {
                "locale": "pl",
                "search": " dom ",
                "minAmount": "1000",
                "maxAmount": "5000.5",
                "minTimeHorizon": "10",
                "maxReturn": "8",
                "isPredefined": "true",
                "sortBy": "popular",
            }
        )
        f = query.filters
        assert query.locale is Locale.PL
        assert f.search == "dom"
        assert (f.min_amount, f.max_amount) == (1000.0, 5000.5)
        assert f.min_time_horizon == 10
        assert f.max_return == 8.0
        assert f.is_predefined is True
        assert f.sort_by is SortBy.POPULAR

    def test_malformed_optional_values_are_absent(self):
        f = parse_filter_params({"minAmount": "lots", "minTimeHorizon": "1.5", "isPredefined": "maybe"}).filters
        assert f.min_amount is None
        assert f.min_time_horizon is None
        assert f.is_predefined is None

    def test_unknown_sort_falls_back(self):
        assert parse_filter_params({"sortBy": "random"}).filters.sort_by is SortBy.NEWEST

    def test_list_values(self):
        query = parse_filter_params({"category": ["retirement,house", "car"], "page": ["2"]})
        assert query.filters.category == frozenset({"retirement", "house", "car"})
        assert query.page == 2

    def test_limit_clamped(self):
        assert parse_filter_params({"limit": "500"}).limit == 100

    def test_unknown_locale(self):
        with pytest.raises(ValidationError):
            parse_filter_params({"locale": "de"})

    @pytest.mark.parametrize("params", [{"page": "0"}, {"page": "-2"}, {"limit": "0"}, {"limit": "-1"}])
    def test_out_of_range_paging(self, params):
        with pytest.raises(ValidationError):
            parse_filter_params(params)


class TestParsers:
    def test_parse_float_rejects_non_finite(self):
        assert parse_float("inf") is None
        assert parse_float("nan") is None
        assert parse_float("2.5") == 2.5

    def test_parse_bool(self):
        assert parse_bool("1") is True
        assert parse_bool("FALSE") is False
        assert parse_bool("yes") is None

    def test_parse_categories_drops_blanks(self):
        assert parse_categories(["a,,b", " "]) == frozenset({"a", "b"})

    def test_parse_int_outside_column_range(self):
        assert parse_int("2147483647") == 2147483647
        assert parse_int("2147483648") is None
        assert parse_int("-2147483649") is None
        assert parse_int("1" + "0" * 40) is None


class TestOversizedValues:
    def test_huge_horizon_is_absent(self):
        f = parse_filter_params({"minTimeHorizon": "1" + "0" * 40, "maxTimeHorizon": "3000000000"}).filters
        assert f.min_time_horizon is None
        assert f.max_time_horizon is None

    def test_huge_page_and_limit_fall_back_to_defaults(self):
        query = parse_filter_params({"page": "9" * 30, "limit": "9" * 30})
        assert query.page == 1
        assert query.limit == 12
        assert query.filters.offset == 0

    def test_huge_amount_is_absent(self):
        assert parse_filter_params({"minAmount": "1e400"}).filters.min_amount is None
