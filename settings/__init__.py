"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("SCENARIO_DB_PATH", "scenarios.duckdb")

# Logging
LOG_DIR = Path(os.getenv("SCENARIO_LOG_DIR", "logs"))

# Locales
DEFAULT_LOCALE = "en"

# Search
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
QUERY_TIMEOUT = float(os.getenv("SCENARIO_QUERY_TIMEOUT", "5.0"))

# Origin cache (seconds)
SEARCH_REVALIDATE_SECONDS = int(os.getenv("SCENARIO_SEARCH_REVALIDATE", "300"))
SEARCH_EXPIRE_SECONDS = int(os.getenv("SCENARIO_SEARCH_EXPIRE", "3600"))
CACHE_MAX_ENTRIES = 2000
CACHE_REVALIDATE_WORKERS = 4

# Edge cache (Cache-Control sent to clients)
SEARCH_CACHE_CONTROL = "public, max-age=30, s-maxage=120, stale-while-revalidate=300"
SNAPSHOT_CACHE_CONTROL = "public, max-age=60, s-maxage=300"

# Snapshots
TRENDING_WINDOW_DAYS = int(os.getenv("SCENARIO_TRENDING_WINDOW_DAYS", "7"))
TRENDING_LIMIT_PER_LOCALE = int(os.getenv("SCENARIO_TRENDING_LIMIT", "50"))
REFRESH_ATTEMPTS = 3

# In-process refresh for single-process deployments (seconds, 0 = scheduler only)
SNAPSHOT_REFRESH_INTERVAL = float(os.getenv("SCENARIO_SNAPSHOT_REFRESH_INTERVAL", "0"))

# HTTP
API_HOST = os.getenv("SCENARIO_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("SCENARIO_API_PORT", "8000"))
