"""Capital structure extraction."""

from analyst.domain.types import CapitalStructure
from analyst.domain.types import FinancialSnapshot

BOOK_DEBT_NOTE = 'Book debt used as proxy for market value of debt'
BALANCE_SHEET_LIMITATION = ('Reliance on most recent reported balance sheet '
                            'data')


def extract_capital_structure(snapshot: FinancialSnapshot) -> CapitalStructure:
  """
  Derive equity, debt, cash and net debt from a snapshot.

  Equity is the market capitalization. Debt is the book value of total
  debt, used as a proxy for its market value (disclosed in notes).

  Args:
    snapshot: Financial snapshot

  Returns:
    CapitalStructure with net_debt = debt - cash (may be negative)
  """
  equity = snapshot.market_cap
  debt = snapshot.total_debt
  cash = snapshot.cash

  return CapitalStructure(
      ticker=snapshot.ticker,
      equity_market_value=equity,
      debt_book_value=debt,
      cash_and_equivalents=cash,
      net_debt=debt - cash,
      shares_outstanding=snapshot.shares_outstanding,
      beta=snapshot.beta,
      notes=(BOOK_DEBT_NOTE,),
      limitations=(BALANCE_SHEET_LIMITATION,),
      warnings=(),
  )
