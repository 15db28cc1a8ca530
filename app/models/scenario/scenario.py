"""Scenario model - source of truth, one row per (locale, slug)."""

SCENARIO_DDL = """
CREATE TABLE IF NOT EXISTS scenario (
    id VARCHAR PRIMARY KEY,
    slug VARCHAR NOT NULL,
    locale VARCHAR NOT NULL,
    name VARCHAR NOT NULL,
    description VARCHAR,
    tags VARCHAR[],
    initial_amount DOUBLE NOT NULL CHECK (initial_amount >= 0),
    monthly_contribution DOUBLE NOT NULL CHECK (monthly_contribution >= 0),
    annual_return DOUBLE NOT NULL CHECK (annual_return >= 0),
    time_horizon INTEGER NOT NULL CHECK (time_horizon >= 1),
    is_predefined BOOLEAN NOT NULL DEFAULT FALSE,
    is_public BOOLEAN NOT NULL DEFAULT FALSE,
    created_by VARCHAR NOT NULL DEFAULT 'system',
    view_count INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    UNIQUE (locale, slug)
)
"""

SCENARIO_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_scenario_locale ON scenario(locale)",
]

# Column order used by every SELECT that maps rows to ScenarioRecord
SCENARIO_COLUMNS = (
    "id",
    "slug",
    "locale",
    "name",
    "description",
    "tags",
    "initial_amount",
    "monthly_contribution",
    "annual_return",
    "time_horizon",
    "is_public",
    "is_predefined",
    "created_by",
    "view_count",
    "created_at",
    "updated_at",
)
