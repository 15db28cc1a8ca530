"""Trending snapshot - most viewed recently updated public scenarios."""

from datetime import datetime, timedelta

import duckdb
import polars as pl

from settings import TRENDING_LIMIT_PER_LOCALE, TRENDING_WINDOW_DAYS

SOURCE_SCHEMA = {"id": pl.Utf8, "slug": pl.Utf8, "view_count": pl.Int64}


def build_trending(
    conn: duckdb.DuckDBPyConnection,
    locale: str,
    now: datetime,
    limit: int = TRENDING_LIMIT_PER_LOCALE,
    window_days: int = TRENDING_WINDOW_DAYS,
) -> pl.DataFrame:
    """Ranks 1..k (k <= limit) by view_count desc, ties by id; no padding."""
    since = now - timedelta(days=window_days)
    rows = conn.execute(
        """
        SELECT id, slug, view_count FROM scenario
        WHERE locale = ? AND is_public = TRUE AND updated_at > ?
        """,
        [str(locale), since],
    ).fetchall()

    return (
        pl.DataFrame(rows, schema=SOURCE_SCHEMA, orient="row")
        .sort(["view_count", "id"], descending=[True, False])
        .head(limit)
        .with_row_index("rank", offset=1)
        .with_columns(
            pl.lit(str(locale)).alias("locale"),
            pl.col("rank").cast(pl.Int32),
            pl.col("view_count").cast(pl.Int32),
        )
        .select("locale", "slug", "rank", "view_count")
    )
