"""
FCFF-DCF engine.

Pure functions over numbers: no pandas, no I/O.

Key functions:
  run_fcff_dcf: Main entry point, values the firm and one share
  compute_pv_forecast: PV of the explicit forecast period
  compute_terminal_value: Gordon growth terminal value with the rate floor
"""

import logging
from typing import Optional

from analyst.domain.types import DcfAssumptions
from analyst.domain.types import DcfResult

logger = logging.getLogger(__name__)

DCF_METHOD = 'FCFF_DCF'
# Minimum spread of the terminal discount rate over terminal growth.
TERMINAL_SPREAD_FLOOR = 0.005

WACC_ADJUSTED_WARNING = ('WACC was adjusted to be higher than terminal '
                         'growth for stability')
TWO_STAGE_LIMITATION = 'Standard 2-stage growth model'


def compute_pv_forecast(
    fcf0: float,
    growth_rate: float,
    discount_rate: float,
    years: int,
) -> tuple[float, float]:
  """
  Compute present value of the explicit forecast period.

  FCF compounds each period (FCF_t = FCF_{t-1} * (1 + g)) and each period
  is discounted individually.

  Args:
    fcf0: Seed FCF (period 0)
    growth_rate: Per-period FCF growth rate
    discount_rate: Discount rate (WACC)
    years: Number of forecast periods

  Returns:
    Tuple of (pv_forecast, final_fcf)
  """
  pv = 0.0
  fcf = fcf0

  for t in range(1, years + 1):
    fcf *= (1.0 + growth_rate)
    pv += fcf / ((1.0 + discount_rate)**t)

  return pv, fcf


def compute_terminal_value(
    final_fcf: float,
    terminal_g: float,
    discount_rate: float,
    final_year: int,
) -> tuple[float, float]:
  """
  Compute discounted terminal value using the Gordon Growth Model.

  The rate in the denominator is floored at terminal_g + 0.005; discounting
  back to today still uses the unmodified discount rate.

  Args:
    final_fcf: FCF in the final explicit year
    terminal_g: Terminal (perpetual) growth rate
    discount_rate: Discount rate (WACC)
    final_year: Number of years to discount back

  Returns:
    Tuple of (pv_terminal, effective_rate)
  """
  effective_rate = max(discount_rate, terminal_g + TERMINAL_SPREAD_FLOOR)
  tv = (final_fcf * (1.0 + terminal_g)) / (effective_rate - terminal_g)
  pv_terminal = tv / ((1.0 + discount_rate)**final_year)
  return pv_terminal, effective_rate


def run_fcff_dcf(
    fcf0: float,
    wacc: float,
    terminal_g: float,
    years: int,
    growth_rate: float,
    net_debt: float,
    shares: float,
    spot_price: Optional[float] = None,
) -> DcfResult:
  """
  Value the firm with a two-stage FCFF DCF.

  Stage 1: explicit forecast with constant growth
  Stage 2: terminal value using the Gordon Growth Model

  Args:
    fcf0: Seed FCF
    wacc: Discount rate
    terminal_g: Perpetual terminal growth rate
    years: Explicit forecast years
    growth_rate: Per-year FCF growth during the forecast
    net_debt: Debt less cash, bridges EV to equity value
    shares: Shares outstanding
    spot_price: Market price for the upside figure (optional)

  Returns:
    DcfResult; valuation figures are unrounded, the wacc echoed in the
    assumptions is rounded to 4dp
  """
  pv_forecast, final_fcf = compute_pv_forecast(fcf0, growth_rate, wacc, years)
  pv_terminal, effective_rate = compute_terminal_value(final_fcf, terminal_g,
                                                       wacc, years)

  warnings = []
  if wacc <= terminal_g:
    logger.warning('WACC %.4f <= terminal g %.4f, terminal rate floored at %.4f',
                   wacc, terminal_g, effective_rate)
    warnings.append(WACC_ADJUSTED_WARNING)

  ev = pv_forecast + pv_terminal
  equity_value = ev - net_debt
  value_per_share = equity_value / shares

  upside = None
  if spot_price:
    upside = (value_per_share - spot_price) / spot_price

  return DcfResult(
      assumptions=DcfAssumptions(
          method=DCF_METHOD,
          wacc=round(wacc, 4),
          terminal_g=terminal_g,
          forecast_years=years,
          fcf_growth=growth_rate,
      ),
      pv_forecast=pv_forecast,
      pv_terminal=pv_terminal,
      enterprise_value_ev=ev,
      equity_value=equity_value,
      value_per_share=value_per_share,
      upside_vs_spot=upside,
      warnings=tuple(warnings),
      limitations=(TWO_STAGE_LIMITATION,),
  )
