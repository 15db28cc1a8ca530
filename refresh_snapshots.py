#!/usr/bin/env python3
"""
Refresh trending and category snapshots from the scenario table.

Meant to be run by an external scheduler (cron, CI job). Overlapping runs
must be prevented by the scheduler.

Usage:
    python refresh_snapshots.py              # Refresh all locales
    python refresh_snapshots.py en pl        # Refresh specific locales
    python refresh_snapshots.py --limit 20   # Trending rows per locale
    python refresh_snapshots.py --validate   # Check snapshot integrity only
"""

import sys

from app.errors import RefreshPartialFailure
from app.models import Locale
from app.repositories.db import Database
from etl import refresh_snapshots, validate_snapshots
from settings import DB_PATH, TRENDING_LIMIT_PER_LOCALE
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def run_validation(locales: list[str], limit: int) -> bool:
    """Validate snapshots in database."""
    db = Database(DB_PATH, read_only=True).connect()
    conn = db.cursor()

    print("\n" + "=" * 60)
    print("SNAPSHOT VALIDATION REPORT")
    print("=" * 60)

    all_valid = True
    for locale in locales:
        result = validate_snapshots(conn, locale, limit)
        status = "OK" if result["valid"] else "FAILED"
        print(f"\nLocale {locale} [{status}]")
        print(f"  Public scenarios: {result['stats']['public_scenarios']:,}")
        print(f"  Trending rows: {result['stats']['trending']:,}")
        print(f"  Categories: {result['stats']['categories']:,}")
        for issue in result["issues"]:
            all_valid = False
            print(f"  ! {issue}")

    print("\n" + "=" * 60)
    print("All snapshots valid" if all_valid else "Some issues found. Run refresh again to fix.")
    print("=" * 60 + "\n")

    db.close()
    return all_valid


def parse_limit(args: list[str]) -> int:
    if "--limit" not in args:
        return TRENDING_LIMIT_PER_LOCALE
    idx = args.index("--limit")
    if idx + 1 >= len(args) or not args[idx + 1].isdigit():
        print(__doc__)
        sys.exit(2)
    return int(args[idx + 1])


def main() -> int:
    args = sys.argv[1:]
    limit = parse_limit(args)

    supported = [loc.value for loc in Locale]
    locales = [a for a in args if a in supported] or supported
    unknown = [a for a in args if not a.startswith("--") and not a.isdigit() and a not in supported]
    if unknown:
        print(f"Unknown locale(s): {', '.join(unknown)}")
        print(__doc__)
        return 2

    if "--validate" in args:
        return 0 if run_validation(locales, limit) else 1

    logger.info("Refreshing locales {} (limit {})", locales, limit)
    report = refresh_snapshots(locales, limit_per_locale=limit)
    for r in report.results:
        logger.info("{}:{} rows={} {}ms {}", r.stage, r.locale, r.rows, r.duration_ms, r.error or "")

    try:
        report.raise_for_failures()
    except RefreshPartialFailure as e:
        logger.error("{}", e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
