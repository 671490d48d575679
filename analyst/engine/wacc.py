"""
WACC estimation.

Cost of equity comes from CAPM, cost of debt from interest expense over
book debt, and the weights from the capital structure's E and D only.

Key functions:
  estimate_wacc: Main entry point, returns a rounded WaccResult
  compute_cost_of_equity: CAPM
  compute_cost_of_debt: Interest/debt proxy with the 1% -> 4% fallback
"""

import logging
from typing import Optional

from analyst.domain.types import CapitalStructure
from analyst.domain.types import CapitalWeights
from analyst.domain.types import FinancialSnapshot
from analyst.domain.types import UserInputs
from analyst.domain.types import WaccResult

logger = logging.getLogger(__name__)

KD_FLOOR = 0.01
KD_FALLBACK = 0.04

BETA_OVERRIDE_WARNING = 'User provided Beta override'
KD_FALLBACK_WARNING = (f'Kd proxy below {KD_FLOOR:.0%}; replaced with '
                       f'{KD_FALLBACK:.0%} fallback')
KD_PROXY_LIMITATION = 'Kd estimated via Interest Expense / Book Debt proxy'


def compute_cost_of_equity(rf: float, beta: float, erp: float) -> float:
  """CAPM: ke = rf + beta * erp."""
  return rf + beta * erp


def compute_effective_tax_rate(snapshot: FinancialSnapshot) -> float:
  """Income tax / pre-tax income."""
  return snapshot.income_tax / snapshot.pre_tax_income


def compute_cost_of_debt(
    interest_expense: float,
    debt: float,
    kd_override: Optional[float] = None,
) -> tuple[float, bool]:
  """
  Pre-tax cost of debt.

  Args:
    interest_expense: Annual interest expense
    debt: Book value of debt
    kd_override: Used instead of the proxy when set

  Returns:
    Tuple of (kd, fallback_used). Any kd below KD_FLOOR, including an
    override, is replaced by exactly KD_FALLBACK.
  """
  if kd_override is not None:
    kd = kd_override
  else:
    kd = interest_expense / debt

  if kd < KD_FLOOR:
    return KD_FALLBACK, True
  return kd, False


def compute_weights(equity: float, debt: float) -> CapitalWeights:
  """w_e = E / (E + D), w_d = D / (E + D). Unrounded."""
  total = equity + debt
  return CapitalWeights(w_e=equity / total, w_d=debt / total)


def estimate_wacc(
    capital_structure: CapitalStructure,
    inputs: UserInputs,
    snapshot: FinancialSnapshot,
) -> WaccResult:
  """
  Estimate WACC = ke * w_e + kd * (1 - T) * w_d.

  Args:
    capital_structure: Source of E, D and the default beta
    inputs: rf, erp and optional beta/kd overrides
    snapshot: Source of tax and interest figures

  Returns:
    WaccResult with ke and wacc rounded to 5dp and tax rate, kd and
    weights rounded to 4dp
  """
  beta = (inputs.beta_override
          if inputs.beta_override is not None else capital_structure.beta)

  ke = compute_cost_of_equity(inputs.rf, beta, inputs.erp)
  tax_rate = compute_effective_tax_rate(snapshot)

  kd, fallback_used = compute_cost_of_debt(
      snapshot.interest_expense,
      capital_structure.debt_book_value,
      inputs.kd_override,
  )
  kd_after_tax = kd * (1.0 - tax_rate)

  weights = compute_weights(capital_structure.equity_market_value,
                            capital_structure.debt_book_value)

  wacc = ke * weights.w_e + kd_after_tax * weights.w_d

  warnings = []
  if inputs.beta_override is not None:
    warnings.append(BETA_OVERRIDE_WARNING)
  if fallback_used:
    logger.warning('%s: Kd proxy below %.2f, using %.2f fallback',
                   capital_structure.ticker, KD_FLOOR, KD_FALLBACK)
    warnings.append(KD_FALLBACK_WARNING)

  logger.debug('%s: ke=%.5f kd=%.4f T=%.4f w_e=%.4f wacc=%.5f',
               capital_structure.ticker, ke, kd, tax_rate, weights.w_e, wacc)

  return WaccResult(
      rf=inputs.rf,
      erp=inputs.erp,
      beta_used=beta,
      cost_of_equity_ke=round(ke, 5),
      tax_rate_effective=round(tax_rate, 4),
      cost_of_debt_kd=round(kd, 4),
      weights=CapitalWeights(w_e=round(weights.w_e, 4),
                             w_d=round(weights.w_d, 4)),
      wacc=round(wacc, 5),
      equity_market_value=capital_structure.equity_market_value,
      debt_book_value=capital_structure.debt_book_value,
      warnings=tuple(warnings),
      limitations=(KD_PROXY_LIMITATION,),
  )
