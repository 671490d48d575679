'''
Analyst context assembly.

Merges metadata, echoed inputs and every component result into the single
AnalystContext handed to the memo writer.
'''

from datetime import datetime, timezone
from typing import Optional

from analyst.domain.types import AnalystContext
from analyst.domain.types import CapitalStructure
from analyst.domain.types import ContextInputs
from analyst.domain.types import ContextMeta
from analyst.domain.types import Disclosure
from analyst.domain.types import FcfData
from analyst.domain.types import ScenarioSensitivity
from analyst.domain.types import UserInputs
from analyst.domain.types import WaccResult


def utc_now_iso() -> str:
  return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def build_context(
    inputs: UserInputs,
    capital_structure: CapitalStructure,
    wacc: WaccResult,
    fcf: FcfData,
    sensitivity: ScenarioSensitivity,
    source: str,
    cache_used: bool,
    generated_at_utc: Optional[str] = None,
) -> AnalystContext:
  '''
  Assemble the analyst context.

  limitations concatenates capital structure, WACC, FCF and base valuation
  limitations; warnings concatenates capital structure and WACC warnings.
  Order is kept and duplicates are not removed.

  Args:
    inputs: User inputs to echo
    capital_structure: Capital structure result
    wacc: WACC result
    fcf: FCF proxy result
    sensitivity: Scenario and sensitivity result (base case is echoed as
      the valuation)
    source: Data source label
    cache_used: Whether the data came from a cache
    generated_at_utc: Timestamp override (default: now, UTC)

  Returns:
    AnalystContext
  '''
  ticker = capital_structure.ticker
  base = sensitivity.base

  limitation_sources = (
      ('capital_structure', capital_structure.limitations),
      ('wacc', wacc.limitations),
      ('fcf', fcf.limitations),
      ('valuation', base.limitations),
  )
  warning_sources = (
      ('capital_structure', capital_structure.warnings),
      ('wacc', wacc.warnings),
  )

  disclosure_log = tuple(
      Disclosure(source=name, kind='limitation', message=message)
      for name, messages in limitation_sources
      for message in messages) + tuple(
          Disclosure(source=name, kind='warning', message=message)
          for name, messages in warning_sources
          for message in messages)

  return AnalystContext(
      meta=ContextMeta(
          ticker=ticker,
          source=source,
          generated_at_utc=generated_at_utc or utc_now_iso(),
          cache_used=cache_used,
      ),
      inputs=ContextInputs(
          ticker=ticker,
          rf=inputs.rf,
          erp=inputs.erp,
          forecast_years=inputs.forecast_years,
          fcf_growth=inputs.fcf_growth,
          terminal_g=inputs.terminal_g,
      ),
      capital_structure=capital_structure,
      wacc=wacc,
      fcf=fcf,
      valuation=base,
      sensitivity=sensitivity,
      limitations=tuple(
          d.message for d in disclosure_log if d.kind == 'limitation'),
      warnings=tuple(d.message for d in disclosure_log if d.kind == 'warning'),
      disclosure_log=disclosure_log,
  )
