"""FCFF proxy: operating cash flow minus capital expenditure."""

from collections.abc import Sequence

import pandas as pd

from analyst.domain.types import CashFlowEntry
from analyst.domain.types import FcfData
from analyst.domain.types import FcfEntry

FCF_METHOD = 'CFO_minus_Capex_proxy_for_FCFF'
FCFF_PROXY_LIMITATION = ('FCFF approx via CFO - Capex; ignores net interest '
                         'tax shield adjustments')


def compute_fcf_proxy(history: Sequence[CashFlowEntry]) -> FcfData:
  """
  Build the FCF history and pick the latest value.

  The latest FCF is the last entry in the order supplied. The history is
  not re-sorted by period, so callers must pass it oldest first.

  Args:
    history: Cash flow history, oldest first

  Returns:
    FcfData with fcf = cfo - capex per entry

  Raises:
    ValueError: If history is empty
  """
  if not history:
    raise ValueError('Cash flow history is empty')

  frame = pd.DataFrame(
      {
          'period': [entry.period for entry in history],
          'cfo': [float(entry.cfo) for entry in history],
          'capex': [float(entry.capex) for entry in history],
      },
      columns=['period', 'cfo', 'capex'])
  frame['fcf'] = frame['cfo'] - frame['capex']

  fcf_history = tuple(
      FcfEntry(
          period=str(row.period),
          cfo=float(row.cfo),
          capex=float(row.capex),
          fcf=float(row.fcf),
      ) for row in frame.itertuples(index=False))

  return FcfData(
      method=FCF_METHOD,
      fcf_history=fcf_history,
      fcf0_latest=float(frame['fcf'].iloc[-1]),
      warnings=(),
      limitations=(FCFF_PROXY_LIMITATION,),
  )
