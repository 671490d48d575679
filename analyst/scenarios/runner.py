"""
Scenario and sensitivity runs on top of the DCF engine.

Builds base/bull/bear valuations and a WACC x terminal growth grid of value
per share. The grid is exhaustive enumeration: one DCF per cell, outer loop
over WACC, inner loop over terminal growth.
"""

import logging
from typing import Optional

from analyst.domain.types import DcfResult
from analyst.domain.types import ScenarioSensitivity
from analyst.domain.types import SensitivityGrid
from analyst.domain.types import UserInputs
from analyst.engine.dcf import run_fcff_dcf
from analyst.scenarios.config import ScenarioConfig

logger = logging.getLogger(__name__)


def build_sensitivity_grid(
    fcf0: float,
    base_wacc: float,
    inputs: UserInputs,
    net_debt: float,
    shares: float,
    config: ScenarioConfig,
) -> SensitivityGrid:
  """
  Value per share across WACC x terminal growth.

  Growth during the forecast stays at the base rate and no spot price is
  used.

  Args:
    fcf0: Seed FCF
    base_wacc: WACC at the grid centre
    inputs: Base inputs (terminal_g is the grid centre)
    net_debt: Debt less cash
    shares: Shares outstanding
    config: Grid offsets

  Returns:
    SensitivityGrid with matrix[wacc_index][g_index]
  """
  wacc_values = config.wacc_grid(base_wacc)
  g_values = config.g_grid(inputs.terminal_g)

  logger.debug('Building sensitivity grid: %d x %d', len(wacc_values),
               len(g_values))

  rows = []
  for w in wacc_values:
    row = []
    for g in g_values:
      result = run_fcff_dcf(
          fcf0=fcf0,
          wacc=w,
          terminal_g=g,
          years=inputs.forecast_years,
          growth_rate=inputs.fcf_growth,
          net_debt=net_debt,
          shares=shares,
          spot_price=None,
      )
      row.append(result.value_per_share)
    rows.append(tuple(row))

  return SensitivityGrid(
      wacc_values=tuple(wacc_values),
      g_values=tuple(g_values),
      value_per_share_matrix=tuple(rows),
  )


def _run_case(
    fcf0: float,
    wacc: float,
    growth: float,
    inputs: UserInputs,
    net_debt: float,
    shares: float,
    spot_price: Optional[float],
) -> DcfResult:
  return run_fcff_dcf(
      fcf0=fcf0,
      wacc=wacc,
      terminal_g=inputs.terminal_g,
      years=inputs.forecast_years,
      growth_rate=growth,
      net_debt=net_debt,
      shares=shares,
      spot_price=spot_price,
  )


def run_scenarios_and_sensitivity(
    fcf0: float,
    base_wacc: float,
    inputs: UserInputs,
    net_debt: float,
    shares: float,
    spot_price: Optional[float],
    config: Optional[ScenarioConfig] = None,
) -> ScenarioSensitivity:
  """
  Run base, bull and bear cases plus the sensitivity grid.

  Bull lowers WACC (never below config.wacc_floor) and raises growth; bear
  does the opposite. Terminal growth is unchanged across scenarios.

  Args:
    fcf0: Seed FCF
    base_wacc: Base-case WACC
    inputs: Base inputs (growth, terminal growth, horizon)
    net_debt: Debt less cash
    shares: Shares outstanding
    spot_price: Market price used for scenario upside
    config: Shifts and grid offsets (default: ScenarioConfig.default())

  Returns:
    ScenarioSensitivity
  """
  if config is None:
    config = ScenarioConfig.default()

  base = _run_case(fcf0, base_wacc, inputs.fcf_growth, inputs, net_debt,
                   shares, spot_price)
  bull = _run_case(fcf0, max(config.wacc_floor, base_wacc - config.wacc_shift),
                   inputs.fcf_growth + config.growth_shift, inputs, net_debt,
                   shares, spot_price)
  bear = _run_case(fcf0, base_wacc + config.wacc_shift,
                   inputs.fcf_growth - config.growth_shift, inputs, net_debt,
                   shares, spot_price)

  logger.debug('Scenario value per share: bear=%.2f base=%.2f bull=%.2f',
               bear.value_per_share, base.value_per_share,
               bull.value_per_share)

  grid = build_sensitivity_grid(fcf0, base_wacc, inputs, net_debt, shares,
                                config)

  return ScenarioSensitivity(
      base=base,
      bull=bull,
      bear=bear,
      sensitivity=grid,
      warnings=(),
      limitations=(),
  )
