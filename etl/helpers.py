"""ETL helper functions."""

import polars as pl
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.errors import TransactionConflict
from app.models import SnapshotTable
from app.repositories.db import Database
from settings import REFRESH_ATTEMPTS


@retry(
    stop=stop_after_attempt(REFRESH_ATTEMPTS),
    wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
    retry=retry_if_exception_type(TransactionConflict),
    reraise=True,
)
def replace_snapshot(db: Database, table: SnapshotTable, locale: str, rows: pl.DataFrame) -> int:
    """Replace one locale's slice of a snapshot table in a single transaction."""
    columns = ", ".join(table.columns)
    # the view is registered outside the transaction
    cursor = db.cursor()
    if rows.height:
        cursor.register("snapshot_df", rows.select(table.columns))
    try:
        with db.transaction() as conn:
            conn.execute(f"DELETE FROM {table} WHERE locale = ?", [str(locale)])
            if rows.height:
                conn.execute(f"INSERT INTO {table} ({columns}) SELECT {columns} FROM snapshot_df")
    finally:
        if rows.height:
            cursor.unregister("snapshot_df")
    logger.debug("{} [{}]: {} rows", table, locale, rows.height)
    return rows.height
