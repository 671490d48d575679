import pytest

from analyst.data_provider import MSFT_SNAPSHOT
from analyst.domain.types import CashFlowEntry
from analyst.domain.types import FinancialSnapshot
from analyst.domain.types import UserInputs


@pytest.fixture
def msft_snapshot() -> FinancialSnapshot:
  """The fixed MSFT snapshot."""
  return MSFT_SNAPSHOT


@pytest.fixture
def round_snapshot() -> FinancialSnapshot:
  """Snapshot with round numbers for hand-checked arithmetic."""
  return FinancialSnapshot(
      ticker='TEST',
      market_cap=900.0,
      shares_outstanding=10.0,
      beta=1.2,
      price=50.0,
      total_debt=100.0,
      cash=40.0,
      interest_expense=5.0,
      pre_tax_income=200.0,
      income_tax=50.0,
      cashflow_history=(
          CashFlowEntry(period='2022', cfo=120.0, capex=30.0),
          CashFlowEntry(period='2023', cfo=130.0, capex=40.0),
          CashFlowEntry(period='2024', cfo=150.0, capex=50.0),
      ),
  )


@pytest.fixture
def default_inputs() -> UserInputs:
  """Default user inputs."""
  return UserInputs.default()


@pytest.fixture
def unit_inputs() -> UserInputs:
  """Simple inputs for scenario tests."""
  return UserInputs(
      rf=0.04,
      erp=0.05,
      forecast_years=5,
      fcf_growth=0.05,
      terminal_g=0.025,
  )
