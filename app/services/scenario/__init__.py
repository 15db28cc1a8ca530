"""Scenario services."""

from app.services.scenario.service import ScenarioService

__all__ = ["ScenarioService"]
