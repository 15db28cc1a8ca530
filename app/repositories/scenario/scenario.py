"""Scenario repository - filter queries and writes on the scenario table."""

import time
import uuid

import duckdb
from loguru import logger

from app.errors import QueryTimeout, ValidationError
from app.models import SCENARIO_COLUMNS, FilterRequest, ScenarioRecord, SearchPage, SortBy, utcnow
from app.repositories.base import BaseRepository

SELECT_COLUMNS = ", ".join(SCENARIO_COLUMNS)

# Every ordering ends with id ASC so identical inputs give identical pages
SORT_ORDER = {
    SortBy.NEWEST: "created_at DESC, id ASC",
    SortBy.POPULAR: "view_count DESC, id ASC",
    SortBy.RETURN: "annual_return DESC, id ASC",
    SortBy.AMOUNT: "initial_amount DESC, id ASC",
}

# (column, operator, FilterRequest attribute)
RANGE_FILTERS = [
    ("initial_amount", ">=", "min_amount"),
    ("initial_amount", "<=", "max_amount"),
    ("time_horizon", ">=", "min_time_horizon"),
    ("time_horizon", "<=", "max_time_horizon"),
    ("annual_return", ">=", "min_return"),
    ("annual_return", "<=", "max_return"),
]


def remaining(deadline: float | None) -> float | None:
    """Seconds left before ``deadline``; both queries of a search share one budget."""
    if deadline is None:
        return None
    left = deadline - time.monotonic()
    if left <= 0:
        raise QueryTimeout("Query budget exhausted")
    return left


def build_where(locale: str, filters: FilterRequest) -> tuple[str, list]:
    """Translate filters into a WHERE clause. Visibility is always enforced."""
    clauses = ["locale = ?", "is_public = TRUE"]
    params: list = [str(locale)]

    if filters.search:
        clauses.append(
            "(contains(lower(name), lower(?))"
            " OR contains(lower(coalesce(description, '')), lower(?))"
            " OR contains(lower(slug), lower(?)))"
        )
        params.extend([filters.search] * 3)

    if filters.category:
        clauses.append("list_has_any(tags, ?)")
        params.append(sorted(filters.category))

    for column, op, attr in RANGE_FILTERS:
        value = getattr(filters, attr)
        if value is not None:
            clauses.append(f"{column} {op} ?")
            params.append(value)

    if filters.is_predefined is not None:
        clauses.append("is_predefined = ?")
        params.append(filters.is_predefined)

    return " AND ".join(clauses), params


class ScenarioRepository(BaseRepository):
    """Repository for scenario data access."""

    def search(self, locale: str, filters: FilterRequest, timeout: float | None = None) -> SearchPage:
        """One sorted page of public scenarios plus the total match count."""
        where, params = build_where(locale, filters)
        order = SORT_ORDER.get(filters.sort_by, SORT_ORDER[SortBy.NEWEST])
        deadline = None if timeout is None else time.monotonic() + timeout

        with self._db.transaction():
            total = self.fetchone(f"SELECT COUNT(*) FROM scenario WHERE {where}", params, timeout=timeout)[0]
            rows = []
            if filters.offset < total:
                rows = self.fetchall(
                    f"""
                    SELECT {SELECT_COLUMNS} FROM scenario
                    WHERE {where}
                    ORDER BY {order}
                    LIMIT ? OFFSET ?
                    """,
                    [*params, filters.limit, filters.offset],
                    timeout=remaining(deadline),
                )

        logger.debug("search({}, sort={}): {} of {}", locale, filters.sort_by, len(rows), total)
        return SearchPage(scenarios=[ScenarioRecord.from_row(r) for r in rows], total=int(total))

    def get_by_slug(self, locale: str, slug: str, public_only: bool = True) -> ScenarioRecord | None:
        """Get one scenario by its (locale, slug) identity."""
        query = f"SELECT {SELECT_COLUMNS} FROM scenario WHERE locale = ? AND slug = ?"
        if public_only:
            query += " AND is_public = TRUE"
        row = self.fetchone(query, [str(locale), slug])
        return ScenarioRecord.from_row(row) if row else None

    def create(
        self,
        locale: str,
        slug: str,
        name: str,
        initial_amount: float,
        monthly_contribution: float,
        annual_return: float,
        time_horizon: int,
        description: str | None = None,
        tags: list[str] | None = None,
        is_public: bool = True,
        is_predefined: bool = False,
        created_by: str = "system",
    ) -> ScenarioRecord:
        """Insert a new scenario; (locale, slug) must be free."""
        now = utcnow()
        record = ScenarioRecord(
            id=str(uuid.uuid4()),
            slug=slug,
            locale=str(locale),
            name=name,
            description=description,
            tags=sorted(set(tags or [])),
            initial_amount=float(initial_amount),
            monthly_contribution=float(monthly_contribution),
            annual_return=float(annual_return),
            time_horizon=int(time_horizon),
            is_public=is_public,
            is_predefined=is_predefined,
            created_by=created_by,
            view_count=0,
            created_at=now,
            updated_at=now,
        )
        placeholders = ", ".join("?" for _ in SCENARIO_COLUMNS)
        try:
            self.execute(
                f"INSERT INTO scenario ({SELECT_COLUMNS}) VALUES ({placeholders})",
                [getattr(record, c) for c in SCENARIO_COLUMNS],
            )
        except duckdb.ConstraintException as e:
            raise ValidationError(f"Scenario {locale}/{slug} already exists") from e

        logger.info("Scenario created: {}/{}", locale, slug)
        return record

    def increment_views(self, locale: str, slug: str) -> int | None:
        """Bump view_count and updated_at; returns the new count."""
        row = self.execute(
            """
            UPDATE scenario
            SET view_count = view_count + 1, updated_at = ?
            WHERE locale = ? AND slug = ?
            RETURNING view_count
            """,
            [utcnow(), str(locale), slug],
        ).fetchone()
        return int(row[0]) if row else None

    def count(self, locale: str | None = None) -> int:
        """Count scenarios, optionally in one locale."""
        if locale:
            return self.fetchone("SELECT COUNT(*) FROM scenario WHERE locale = ?", [str(locale)])[0]
        return self.fetchone("SELECT COUNT(*) FROM scenario")[0]
