"""Snapshot validation functions."""

import duckdb

from settings import TRENDING_LIMIT_PER_LOCALE


def validate_snapshots(
    conn: duckdb.DuckDBPyConnection,
    locale: str,
    limit_per_locale: int = TRENDING_LIMIT_PER_LOCALE,
) -> dict:
    """Validate snapshot integrity for a locale."""
    issues = []
    stats = {}

    rank_check = conn.execute(
        """
        SELECT COUNT(*), COUNT(DISTINCT rank), MIN(rank), MAX(rank)
        FROM scenario_trending_snapshot WHERE locale = ?
        """,
        [str(locale)],
    ).fetchone()
    total, distinct, min_rank, max_rank = rank_check
    stats["trending"] = total
    if total:
        if distinct != total:
            issues.append(f"{total - distinct} duplicate trending ranks")
        if min_rank != 1 or max_rank != total:
            issues.append(f"Trending ranks not contiguous: {min_rank}..{max_rank} for {total} rows")
    if total > limit_per_locale:
        issues.append(f"{total} trending rows exceed limit {limit_per_locale}")

    orphaned = conn.execute(
        """
        SELECT COUNT(*) FROM scenario_trending_snapshot t
        LEFT JOIN scenario s ON s.locale = t.locale AND s.slug = t.slug
        WHERE t.locale = ? AND (s.id IS NULL OR NOT s.is_public)
        """,
        [str(locale)],
    ).fetchone()[0]
    stats["trending_orphaned"] = orphaned
    if orphaned:
        issues.append(f"{orphaned} trending rows point at missing or private scenarios")

    category_check = conn.execute(
        """
        SELECT
            COUNT(*) as total,
            COUNT(DISTINCT category) as distinct_categories,
            SUM(CASE WHEN count <= 0 THEN 1 ELSE 0 END) as non_positive
        FROM scenario_category_counts WHERE locale = ?
        """,
        [str(locale)],
    ).fetchone()
    stats["categories"] = category_check[0]
    if category_check[0] != category_check[1]:
        issues.append(f"{category_check[0] - category_check[1]} duplicate categories")
    if category_check[2]:
        issues.append(f"{category_check[2]} categories with non-positive count")

    public = conn.execute(
        "SELECT COUNT(*) FROM scenario WHERE locale = ? AND is_public = TRUE",
        [str(locale)],
    ).fetchone()[0]
    stats["public_scenarios"] = public

    return {
        "locale": str(locale),
        "valid": len(issues) == 0,
        "stats": stats,
        "issues": issues,
    }
