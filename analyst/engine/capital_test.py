import dataclasses

import pytest

from analyst.engine.capital import BOOK_DEBT_NOTE
from analyst.engine.capital import extract_capital_structure


class TestExtractCapitalStructure:
  """Tests for extract_capital_structure."""

  def test_msft_values(self, msft_snapshot):
    """E, D, cash and net debt come straight from the snapshot."""
    cs = extract_capital_structure(msft_snapshot)

    assert cs.ticker == 'MSFT'
    assert cs.equity_market_value == 3_150_000_000_000
    assert cs.debt_book_value == 106_000_000_000
    assert cs.cash_and_equivalents == 80_000_000_000
    assert cs.net_debt == 26_000_000_000
    assert cs.shares_outstanding == 7_430_000_000
    assert cs.beta == 0.89

  def test_net_debt_invariant(self, round_snapshot):
    """net_debt == D - cash."""
    cs = extract_capital_structure(round_snapshot)

    assert cs.net_debt == pytest.approx(cs.debt_book_value -
                                        cs.cash_and_equivalents)

  def test_negative_net_debt(self, round_snapshot):
    """Cash above debt gives negative net debt."""
    snapshot = dataclasses.replace(round_snapshot, cash=250.0)

    cs = extract_capital_structure(snapshot)

    assert cs.net_debt == -150.0

  def test_disclosures(self, msft_snapshot):
    """Book debt proxy is disclosed; one limitation, no warnings."""
    cs = extract_capital_structure(msft_snapshot)

    assert cs.notes == (BOOK_DEBT_NOTE,)
    assert len(cs.limitations) == 1
    assert cs.warnings == ()
