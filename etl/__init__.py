"""ETL package - snapshot refresh from the scenario table."""

from etl.refresh import RefreshReport, SnapshotRefresher, StageResult, refresh_snapshots
from etl.validation import validate_snapshots

__all__ = [
    "RefreshReport",
    "SnapshotRefresher",
    "StageResult",
    "refresh_snapshots",
    "validate_snapshots",
]
