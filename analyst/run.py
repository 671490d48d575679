'''
Analyst context entrypoint.

This module wires the pipeline together. It:
1. Gets a snapshot from a SnapshotProvider
2. Extracts the capital structure and estimates WACC
3. Builds the FCF proxy and runs scenarios and the sensitivity grid
4. Returns the AnalystContext (optionally passed on to the memo writer)

Usage:
  from analyst.domain.types import UserInputs
  from analyst.run import run_analysis

  context = run_analysis(UserInputs.default())
  print(f"Value per share: ${context.valuation.value_per_share:.2f}")
'''

import argparse
import logging
from pathlib import Path
from typing import Optional

from analyst.context import build_context
from analyst.data_provider import JsonSnapshotProvider
from analyst.data_provider import SnapshotProvider
from analyst.data_provider import StaticSnapshotProvider
from analyst.domain.types import AnalystContext
from analyst.domain.types import UserInputs
from analyst.engine.capital import extract_capital_structure
from analyst.engine.fcf import compute_fcf_proxy
from analyst.engine.wacc import estimate_wacc
from analyst.memo.client import MemoClient
from analyst.scenarios.config import ScenarioConfig
from analyst.scenarios.runner import run_scenarios_and_sensitivity

logger = logging.getLogger(__name__)


def run_analysis(
    inputs: Optional[UserInputs] = None,
    provider: Optional[SnapshotProvider] = None,
    config: Optional[ScenarioConfig] = None,
    generated_at_utc: Optional[str] = None,
) -> AnalystContext:
  '''
  Build the analyst context for the provider's company.

  Args:
    inputs: Valuation assumptions (default: UserInputs.default())
    provider: Snapshot source (default: StaticSnapshotProvider())
    config: Scenario shifts and grid (default: ScenarioConfig.default())
    generated_at_utc: Timestamp override for reproducible output

  Returns:
    AnalystContext
  '''
  if inputs is None:
    inputs = UserInputs.default()
  if provider is None:
    provider = StaticSnapshotProvider()

  snapshot = provider.get_snapshot()
  logger.debug('Valuing %s from %s', snapshot.ticker, provider.source)

  capital_structure = extract_capital_structure(snapshot)
  wacc = estimate_wacc(capital_structure, inputs, snapshot)
  fcf = compute_fcf_proxy(snapshot.cashflow_history)

  sensitivity = run_scenarios_and_sensitivity(
      fcf0=fcf.fcf0_latest,
      base_wacc=wacc.wacc,
      inputs=inputs,
      net_debt=capital_structure.net_debt,
      shares=capital_structure.shares_outstanding,
      spot_price=snapshot.price,
      config=config,
  )

  return build_context(
      inputs=inputs,
      capital_structure=capital_structure,
      wacc=wacc,
      fcf=fcf,
      sensitivity=sensitivity,
      source=provider.source,
      cache_used=provider.cache_used,
      generated_at_utc=generated_at_utc,
  )


def log_summary(context: AnalystContext) -> None:
  '''Log a human-readable summary of the context.'''
  separator = '=' * 70
  wacc = context.wacc

  logger.info('\n%s', separator)
  logger.info('FCFF DCF - %s (%s)', context.meta.ticker, context.meta.source)
  logger.info('Generated: %s', context.meta.generated_at_utc)
  logger.info(separator)

  logger.info('\nCapital Structure:')
  logger.info('  Equity (E): $%s',
              f'{context.capital_structure.equity_market_value:,.0f}')
  logger.info('  Debt (D): $%s',
              f'{context.capital_structure.debt_book_value:,.0f}')
  logger.info('  Net Debt: $%s', f'{context.capital_structure.net_debt:,.0f}')

  logger.info('\nWACC:')
  logger.info('  Ke: %.2f%% (beta %.2f)', wacc.cost_of_equity_ke * 100,
              wacc.beta_used)
  logger.info('  Kd: %.2f%% (T %.2f%%)', wacc.cost_of_debt_kd * 100,
              wacc.tax_rate_effective * 100)
  logger.info('  Weights: E %.2f%% / D %.2f%%', wacc.weights.w_e * 100,
              wacc.weights.w_d * 100)
  logger.info('  WACC: %.2f%%', wacc.wacc * 100)

  logger.info('\nScenarios (value per share):')
  for name, result in context.sensitivity.scenarios.items():
    upside = ('n/a' if result.upside_vs_spot is None else
              f'{result.upside_vs_spot * 100:+.1f}%')
    logger.info('  %-5s $%.2f (upside %s)', name, result.value_per_share,
                upside)

  for warning in context.warnings:
    logger.warning('  %s', warning)

  logger.info('%s\n', separator)


def main() -> None:
  '''CLI entrypoint.'''
  defaults = UserInputs.default()

  parser = argparse.ArgumentParser(
      description='FCFF DCF valuation and analyst context')
  parser.add_argument('--rf',
                      type=float,
                      default=defaults.rf,
                      help='Risk-free rate (default: %(default)s)')
  parser.add_argument('--erp',
                      type=float,
                      default=defaults.erp,
                      help='Equity risk premium (default: %(default)s)')
  parser.add_argument('--years',
                      type=int,
                      default=defaults.forecast_years,
                      help='Forecast years (default: %(default)s)')
  parser.add_argument('--fcf-growth',
                      type=float,
                      default=defaults.fcf_growth,
                      help='FCF growth during forecast (default: %(default)s)')
  parser.add_argument('--terminal-g',
                      type=float,
                      default=defaults.terminal_g,
                      help='Terminal growth rate (default: %(default)s)')
  parser.add_argument('--beta-override', type=float, help='Override beta')
  parser.add_argument('--kd-override',
                      type=float,
                      help='Override pre-tax cost of debt')
  parser.add_argument('--snapshot',
                      type=Path,
                      help='Snapshot JSON to replay (default: MSFT mock)')
  parser.add_argument('--output',
                      type=Path,
                      help='Write the context JSON here (optional)')
  parser.add_argument('--memo',
                      action='store_true',
                      help='Request a memo from the text-generation model')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  try:
    inputs = UserInputs(
        rf=args.rf,
        erp=args.erp,
        forecast_years=args.years,
        fcf_growth=args.fcf_growth,
        terminal_g=args.terminal_g,
        beta_override=args.beta_override,
        kd_override=args.kd_override,
    )
  except ValueError as e:
    parser.error(str(e))

  provider: SnapshotProvider
  if args.snapshot:
    provider = JsonSnapshotProvider(args.snapshot)
  else:
    provider = StaticSnapshotProvider()

  context = run_analysis(inputs=inputs, provider=provider)
  log_summary(context)

  table = context.sensitivity.sensitivity.to_frame()
  print('\n' + '=' * 70)
  print('Value per Share ($): WACC x Terminal Growth')
  print('=' * 70)
  print(table.to_string(float_format=lambda x: f'${x:.2f}'))
  print('=' * 70 + '\n')

  if args.output:
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(context.to_json(), encoding='utf-8')
    logger.info('Saved context to: %s', args.output)

  if args.memo:
    print(MemoClient().generate_memo(context))


if __name__ == '__main__':
  main()
