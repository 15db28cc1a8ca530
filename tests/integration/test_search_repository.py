"""Search queries against an in-memory DuckDB."""

import math

import pytest

from app.errors import QueryTimeout, StoreUnavailable, ValidationError
from app.models import FilterRequest, SortBy
from app.repositories.scenario.scenario import remaining


def slugs(page) -> list[str]:
    return [s.slug for s in page.scenarios]


class TestSearchFilters:
    def test_retirement_popular_long_horizon(self, repo, add_scenario):
        add_scenario(slug="r10", tags=["retirement"], time_horizon=10, view_count=5)
        add_scenario(slug="r20", tags=["retirement"], time_horizon=20, view_count=50)
        add_scenario(slug="r30", tags=["retirement"], time_horizon=30, view_count=20)
        add_scenario(slug="house", tags=["house"], time_horizon=25, view_count=99)

        filters = FilterRequest(category=["retirement"], min_time_horizon=20, sort_by=SortBy.POPULAR, limit=2)
        page = repo.search("en", filters)

        assert slugs(page) == ["r20", "r30"]
        assert page.total == 2
        assert math.ceil(page.total / filters.limit) == 1

    def test_private_never_returned(self, repo, add_scenario):
        add_scenario(slug="visible", name="Retirement plan")
        add_scenario(slug="hidden", name="Retirement plan", is_public=False)

        for filters in (FilterRequest(), FilterRequest(search="retire"), FilterRequest(is_predefined=False)):
            page = repo.search("en", filters)
            assert slugs(page) == ["visible"]
            assert page.total == 1

    def test_locale_partition(self, repo, add_scenario):
        add_scenario(slug="en-one")
        add_scenario(slug="pl-one", locale="pl")
        assert slugs(repo.search("pl", FilterRequest())) == ["pl-one"]

    def test_search_is_case_insensitive_substring(self, repo, add_scenario):
        add_scenario(slug="a", name="Early RETIREMENT")
        add_scenario(slug="b", description="for my retirement years")
        add_scenario(slug="retire-c")
        add_scenario(slug="d", name="House deposit")

        page = repo.search("en", FilterRequest(search="Retire"))
        assert sorted(slugs(page)) == ["a", "b", "retire-c"]

    def test_search_is_literal(self, repo, add_scenario):
        add_scenario(slug="a", name="100% stocks")
        add_scenario(slug="b", name="1000 bonds")
        assert slugs(repo.search("en", FilterRequest(search="100%"))) == ["a"]

    def test_category_matches_any(self, repo, add_scenario):
        add_scenario(slug="a", tags=["retirement", "long-term"])
        add_scenario(slug="b", tags=["house"])
        add_scenario(slug="c", tags=["car"])
        add_scenario(slug="d", tags=None)

        page = repo.search("en", FilterRequest(category=["house", "retirement"]))
        assert sorted(slugs(page)) == ["a", "b"]

    def test_null_tags_read_as_empty(self, repo, add_scenario):
        add_scenario(slug="a", tags=None)
        assert repo.search("en", FilterRequest()).scenarios[0].tags == []

    def test_bounds_are_inclusive(self, repo, add_scenario):
        add_scenario(slug="low", initial_amount=1000, annual_return=5, time_horizon=5)
        add_scenario(slug="mid", initial_amount=5000, annual_return=7.5, time_horizon=15)
        add_scenario(slug="high", initial_amount=9000, annual_return=10, time_horizon=30)

        assert sorted(slugs(repo.search("en", FilterRequest(min_amount=5000, max_amount=9000)))) == ["high", "mid"]
        assert slugs(repo.search("en", FilterRequest(min_return=7.5, max_return=7.5))) == ["mid"]
        assert sorted(slugs(repo.search("en", FilterRequest(max_time_horizon=15)))) == ["low", "mid"]

    def test_is_predefined(self, repo, add_scenario):
        add_scenario(slug="preset", is_predefined=True)
        add_scenario(slug="custom", is_predefined=False)
        assert slugs(repo.search("en", FilterRequest(is_predefined=True))) == ["preset"]
        assert slugs(repo.search("en", FilterRequest(is_predefined=False))) == ["custom"]


class TestSearchOrdering:
    @pytest.fixture
    def rows(self, add_scenario):
        add_scenario(id="c", slug="c", view_count=10, annual_return=6, initial_amount=500)
        add_scenario(id="a", slug="a", view_count=10, annual_return=9, initial_amount=500)
        add_scenario(id="b", slug="b", view_count=30, annual_return=6, initial_amount=2000)

    @pytest.mark.parametrize(
        "sort_by,expected",
        [
            (SortBy.POPULAR, ["b", "a", "c"]),
            (SortBy.RETURN, ["a", "b", "c"]),
            (SortBy.AMOUNT, ["b", "a", "c"]),
            # created_at follows insertion order in the fixture
            (SortBy.NEWEST, ["b", "a", "c"]),
        ],
    )
    def test_sort(self, repo, rows, sort_by, expected):
        assert slugs(repo.search("en", FilterRequest(sort_by=sort_by))) == expected

    def test_identical_requests_identical_pages(self, repo, rows):
        f = FilterRequest(sort_by=SortBy.POPULAR, limit=2)
        assert slugs(repo.search("en", f)) == slugs(repo.search("en", f))


class TestPagination:
    def test_pages_cover_results_once(self, repo, add_scenario):
        for i in range(5):
            add_scenario(id=f"id{i}", slug=f"s{i}", view_count=i)

        seen = []
        for offset in (0, 2, 4):
            page = repo.search("en", FilterRequest(sort_by=SortBy.POPULAR, limit=2, offset=offset))
            assert page.total == 5
            assert len(page.scenarios) <= 2
            seen.extend(slugs(page))
        assert seen == ["s4", "s3", "s2", "s1", "s0"]

    def test_offset_past_end(self, repo, add_scenario):
        add_scenario()
        page = repo.search("en", FilterRequest(offset=10))
        assert page.scenarios == []
        assert page.total == 1

    def test_empty(self, repo):
        page = repo.search("es", FilterRequest())
        assert page.scenarios == []
        assert page.total == 0


class TestScenarioWrites:
    def test_create_and_get(self, repo):
        record = repo.create("en", "my-plan", "My plan", 1000, 100, 7, 10, tags=["b", "a", "a"])
        assert record.tags == ["a", "b"]
        loaded = repo.get_by_slug("en", "my-plan")
        assert loaded.id == record.id
        assert loaded.tags == ["a", "b"]

    def test_duplicate_slug_rejected(self, repo):
        repo.create("en", "dup", "One", 1000, 100, 7, 10)
        with pytest.raises(ValidationError):
            repo.create("en", "dup", "Two", 1000, 100, 7, 10)
        # same slug in another locale is a different scenario
        repo.create("pl", "dup", "Trzy", 1000, 100, 7, 10)

    def test_private_hidden_from_detail(self, repo, add_scenario):
        add_scenario(slug="secret", is_public=False)
        assert repo.get_by_slug("en", "secret") is None
        assert repo.get_by_slug("en", "secret", public_only=False) is not None

    def test_increment_views(self, repo, add_scenario):
        add_scenario(slug="popular", view_count=41)
        assert repo.increment_views("en", "popular") == 42
        assert repo.increment_views("en", "missing") is None


class TestStoreFailure:
    def test_closed_database(self, db, repo):
        db.close()
        with pytest.raises(StoreUnavailable):
            repo.search("en", FilterRequest())


def bulk_insert(db, count: int) -> None:
    db.execute(
        f"""
        INSERT INTO scenario (id, slug, locale, name, description, tags, initial_amount,
            monthly_contribution, annual_return, time_horizon, is_public, is_predefined,
            created_by, view_count, created_at, updated_at)
        SELECT 'id' || i::VARCHAR, 'slug-' || i::VARCHAR, 'en', 'Scenario ' || i::VARCHAR,
            'generated row ' || i::VARCHAR, ['bulk'],
            1000 + i, 100, 7, 10, TRUE, FALSE, 'system', i % 1000,
            TIMESTAMP '2026-01-01', TIMESTAMP '2026-01-02'
        FROM range({count}) t(i)
        """
    )


class TestQueryTimeout:
    def test_slow_search_times_out_and_cursor_recovers(self, db, repo):
        bulk_insert(db, 2_000_000)
        slow = FilterRequest(search="no such text", category=["bulk"], sort_by=SortBy.POPULAR)

        with pytest.raises(QueryTimeout):
            repo.search("en", slow, timeout=0.001)

        page = repo.search("en", FilterRequest(limit=1))
        assert page.total == 2_000_000
        assert len(page.scenarios) == 1

    def test_timeout_is_a_store_failure(self):
        assert issubclass(QueryTimeout, StoreUnavailable)


class TestQueryBudget:
    def test_page_query_gets_remaining_time(self, db, repo, add_scenario, monkeypatch):
        add_scenario()
        timeouts = []
        fetchall = db.fetchall

        def recording(query, params=None, timeout=None):
            timeouts.append(timeout)
            return fetchall(query, params, timeout=timeout)

        monkeypatch.setattr(db, "fetchall", recording)
        repo.search("en", FilterRequest(), timeout=5.0)

        assert len(timeouts) == 2
        assert timeouts[0] == 5.0
        assert 0 < timeouts[1] < 5.0

    def test_exhausted_budget(self):
        assert remaining(None) is None
        with pytest.raises(QueryTimeout):
            remaining(0.0)
