"""Scenario configuration and scenario/sensitivity runs."""

from analyst.scenarios.config import ScenarioConfig
from analyst.scenarios.runner import build_sensitivity_grid
from analyst.scenarios.runner import run_scenarios_and_sensitivity

__all__ = [
  'ScenarioConfig',
  'build_sensitivity_grid',
  'run_scenarios_and_sensitivity',
]
