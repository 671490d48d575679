'''
FCFF-DCF valuation and WACC estimate packaged as an analyst context.

The package values a single company from a financial snapshot: capital
structure, CAPM/WACC, an FCFF proxy, a two-stage DCF with base/bull/bear
scenarios and a WACC x terminal growth grid. The results are assembled into
an immutable AnalystContext that a text-generation model turns into a memo.

Usage:
  from analyst.domain.types import UserInputs
  from analyst.run import run_analysis
  from analyst.memo.client import MemoClient

  context = run_analysis(UserInputs.default())
  memo = MemoClient().generate_memo(context)
'''
