"""Scenario repositories."""

from app.repositories.scenario.scenario import ScenarioRepository
from app.repositories.scenario.snapshot import SnapshotRepository

__all__ = [
    "ScenarioRepository",
    "SnapshotRepository",
]
