"""Shared fixtures: in-memory database and scenario rows."""

import itertools
from datetime import datetime, timedelta

import pytest

from app.models import SCENARIO_COLUMNS
from app.repositories import Database, ScenarioRepository, SnapshotRepository

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def db():
    database = Database(":memory:").connect()
    yield database
    database.close()


@pytest.fixture
def repo(db):
    return ScenarioRepository(db)


@pytest.fixture
def snapshots(db):
    return SnapshotRepository(db)


def insert_scenario(db: Database, **row) -> None:
    columns = ", ".join(SCENARIO_COLUMNS)
    placeholders = ", ".join("?" for _ in SCENARIO_COLUMNS)
    db.execute(f"INSERT INTO scenario ({columns}) VALUES ({placeholders})", [row[c] for c in SCENARIO_COLUMNS])


@pytest.fixture
def add_scenario(db):
    """Insert a public `en` scenario updated yesterday; override any column."""
    counter = itertools.count(1)

    def add(**overrides) -> dict:
        n = next(counter)
        row = {
            "id": f"s{n:03d}",
            "slug": f"scenario-{n}",
            "locale": "en",
            "name": f"Scenario {n}",
            "description": None,
            "tags": [],
            "initial_amount": 1000.0,
            "monthly_contribution": 100.0,
            "annual_return": 7.0,
            "time_horizon": 10,
            "is_public": True,
            "is_predefined": False,
            "created_by": "system",
            "view_count": 0,
            "created_at": NOW - timedelta(days=30) + timedelta(minutes=n),
            "updated_at": NOW - timedelta(days=1),
        }
        row.update(overrides)
        insert_scenario(db, **row)
        return row

    return add
