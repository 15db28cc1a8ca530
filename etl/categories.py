"""Category counts snapshot - public scenarios per tag."""

import duckdb
import polars as pl


def build_category_counts(conn: duckdb.DuckDBPyConnection, locale: str) -> pl.DataFrame:
    """One row per tag with a positive count; tags are expanded element-wise."""
    rows = conn.execute(
        "SELECT tags FROM scenario WHERE locale = ? AND is_public = TRUE",
        [str(locale)],
    ).fetchall()

    tags = pl.DataFrame({"category": [list(r[0] or []) for r in rows]}, schema={"category": pl.List(pl.Utf8)})
    return (
        tags.with_columns(pl.col("category").list.unique())
        .explode("category")
        .drop_nulls("category")
        .filter(pl.col("category") != "")
        .group_by("category")
        .agg(pl.len().cast(pl.Int32).alias("count"))
        .with_columns(pl.lit(str(locale)).alias("locale"))
        .sort("category")
        .select("locale", "category", "count")
    )
