'''
Domain types for the analyst valuation pipeline.

Every entity is a frozen dataclass: created once per run, never mutated.
Sequences are stored as tuples. to_dict() produces the JSON shape that the
memo template reads, so key names follow that schema rather than the Python
attribute names (e.g. equity_market_value -> 'equity_market_value_E').
'''

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class CashFlowEntry:
  '''
  One period of reported cash flow.

  Attributes:
    period: Period label (e.g. '2023', '2024 (TTM)')
    cfo: Operating cash flow
    capex: Capital expenditure (positive number)
  '''
  period: str
  cfo: float
  capex: float


_SNAPSHOT_FIELDS = (
    'ticker',
    'market_cap',
    'shares_outstanding',
    'beta',
    'price',
    'total_debt',
    'cash',
    'interest_expense',
    'pre_tax_income',
    'income_tax',
    'cashflow_history',
)
_CASHFLOW_FIELDS = ('period', 'cfo', 'capex')


@dataclass(frozen=True)
class FinancialSnapshot:
  '''
  Point-in-time market and financial data for a single company.

  This is the only input the valuation core reads from the outside world.

  Attributes:
    ticker: Company ticker symbol
    market_cap: Equity market capitalization
    shares_outstanding: Shares outstanding
    beta: Equity beta
    price: Spot price per share
    total_debt: Total debt (book value)
    cash: Cash and equivalents
    interest_expense: Annual interest expense
    pre_tax_income: Pre-tax income
    income_tax: Income tax expense
    cashflow_history: Ordered cash flow history, oldest first
  '''
  ticker: str
  market_cap: float
  shares_outstanding: float
  beta: float
  price: float
  total_debt: float
  cash: float
  interest_expense: float
  pre_tax_income: float
  income_tax: float
  cashflow_history: Tuple[CashFlowEntry, ...]

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> 'FinancialSnapshot':
    '''
    Construct a snapshot from a plain mapping (e.g. parsed JSON).

    Args:
      data: Mapping with one key per snapshot field; cashflow_history is a
        list of {period, cfo, capex} mappings

    Returns:
      FinancialSnapshot

    Raises:
      ValueError: If a required field, or a field of a cash flow row, is
        missing
    '''
    missing = [name for name in _SNAPSHOT_FIELDS if name not in data]
    if missing:
      raise ValueError(f'Missing required snapshot fields: {missing}')

    for i, row in enumerate(data['cashflow_history']):
      missing_row = [name for name in _CASHFLOW_FIELDS if name not in row]
      if missing_row:
        raise ValueError(
            f'Missing cash flow fields in row {i}: {missing_row}')

    history = tuple(
        CashFlowEntry(
            period=str(row['period']),
            cfo=float(row['cfo']),
            capex=float(row['capex']),
        ) for row in data['cashflow_history'])

    return cls(
        ticker=str(data['ticker']),
        market_cap=float(data['market_cap']),
        shares_outstanding=float(data['shares_outstanding']),
        beta=float(data['beta']),
        price=float(data['price']),
        total_debt=float(data['total_debt']),
        cash=float(data['cash']),
        interest_expense=float(data['interest_expense']),
        pre_tax_income=float(data['pre_tax_income']),
        income_tax=float(data['income_tax']),
        cashflow_history=history,
    )

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return asdict(self)


@dataclass(frozen=True)
class UserInputs:
  '''
  User-supplied valuation assumptions.

  Attributes:
    rf: Risk-free rate
    erp: Equity risk premium
    forecast_years: Explicit forecast horizon in years (>= 1)
    fcf_growth: Near-term annual FCF growth rate
    terminal_g: Perpetual terminal growth rate
    beta_override: Replaces the snapshot beta when set
    kd_override: Replaces the interest/debt cost of debt proxy when set
  '''
  rf: float
  erp: float
  forecast_years: int
  fcf_growth: float
  terminal_g: float
  beta_override: Optional[float] = None
  kd_override: Optional[float] = None

  def __post_init__(self):
    years = self.forecast_years
    # Whole-number floats (e.g. 5.0 from JSON) are stored as int.
    if isinstance(years, float) and years.is_integer():
      object.__setattr__(self, 'forecast_years', int(years))
    elif isinstance(years, bool) or not isinstance(years, int):
      raise ValueError(f'forecast_years must be an integer, got {years!r}')
    if self.forecast_years < 1:
      raise ValueError(
          f'forecast_years must be >= 1, got {self.forecast_years}')

  @classmethod
  def default(cls) -> 'UserInputs':
    '''
    Default assumptions.

    Uses:
      - 4.3% risk-free rate (10Y treasury approximation)
      - 5.5% equity risk premium
      - 5-year forecast at 8% FCF growth
      - 2.5% terminal growth
    '''
    return cls(
        rf=0.043,
        erp=0.055,
        forecast_years=5,
        fcf_growth=0.08,
        terminal_g=0.025,
    )

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return asdict(self)

  def to_json(self) -> str:
    '''Serialize to JSON string.'''
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'UserInputs':
    '''Create from dictionary.'''
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'UserInputs':
    '''Create from JSON string.'''
    return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True)
class CapitalStructure:
  '''
  Capital structure derived from a snapshot.

  Invariant: net_debt == debt_book_value - cash_and_equivalents.

  Attributes:
    ticker: Company ticker symbol
    equity_market_value: Equity value E (market capitalization)
    debt_book_value: Debt value D (book value, proxy for market value)
    cash_and_equivalents: Cash balance
    net_debt: D - cash (may be negative)
    shares_outstanding: Shares outstanding
    beta: Snapshot equity beta
    notes: Methodology disclosures
    limitations: Known limitations
    warnings: Warnings raised while extracting
  '''
  ticker: str
  equity_market_value: float
  debt_book_value: float
  cash_and_equivalents: float
  net_debt: float
  shares_outstanding: float
  beta: float
  notes: Tuple[str, ...] = ()
  limitations: Tuple[str, ...] = ()
  warnings: Tuple[str, ...] = ()

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'ticker': self.ticker,
        'equity_market_value_E': self.equity_market_value,
        'debt_book_value_D': self.debt_book_value,
        'cash_and_equivalents': self.cash_and_equivalents,
        'net_debt': self.net_debt,
        'shares_outstanding': self.shares_outstanding,
        'beta': self.beta,
        'notes': list(self.notes),
        'limitations': list(self.limitations),
        'warnings': list(self.warnings),
    }


@dataclass(frozen=True)
class CapitalWeights:
  '''Equity and debt weights; w_e + w_d == 1 up to rounding.'''
  w_e: float
  w_d: float


@dataclass(frozen=True)
class WaccResult:
  '''
  WACC estimate with its building blocks.

  Rates are rounded before leaving the estimator (5dp for ke and wacc,
  4dp for tax rate, kd and weights).

  Attributes:
    rf: Risk-free rate
    erp: Equity risk premium
    beta_used: Beta after applying any override
    cost_of_equity_ke: CAPM cost of equity
    tax_rate_effective: Income tax / pre-tax income
    cost_of_debt_kd: Pre-tax cost of debt
    weights: Capital weights
    wacc: Blended WACC
    equity_market_value: E used for the weights
    debt_book_value: D used for the weights
    warnings: Warnings raised while estimating
    limitations: Known limitations
  '''
  rf: float
  erp: float
  beta_used: float
  cost_of_equity_ke: float
  tax_rate_effective: float
  cost_of_debt_kd: float
  weights: CapitalWeights
  wacc: float
  equity_market_value: float
  debt_book_value: float
  warnings: Tuple[str, ...] = ()
  limitations: Tuple[str, ...] = ()

  @property
  def cost_of_debt_after_tax(self) -> float:
    '''Kd * (1 - T) on the rounded components.'''
    return self.cost_of_debt_kd * (1.0 - self.tax_rate_effective)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'rf': self.rf,
        'erp': self.erp,
        'beta_used': self.beta_used,
        'cost_of_equity_ke': self.cost_of_equity_ke,
        'tax_rate_effective': self.tax_rate_effective,
        'cost_of_debt_kd': self.cost_of_debt_kd,
        'weights': {
            'w_e': self.weights.w_e,
            'w_d': self.weights.w_d,
        },
        'wacc': self.wacc,
        'warnings': list(self.warnings),
        'limitations': list(self.limitations),
        'components': {
            'equity_market_value_E': self.equity_market_value,
            'debt_book_value_D': self.debt_book_value,
        },
    }


@dataclass(frozen=True)
class FcfEntry:
  '''One period of the FCF proxy history.'''
  period: str
  cfo: float
  capex: float
  fcf: float


@dataclass(frozen=True)
class FcfData:
  '''
  Free cash flow proxy history.

  Attributes:
    method: Method label
    fcf_history: FCF per period, in the order supplied by the caller
    fcf0_latest: FCF of the last history entry
    warnings: Warnings raised while building
    limitations: Known limitations
  '''
  method: str
  fcf_history: Tuple[FcfEntry, ...]
  fcf0_latest: float
  warnings: Tuple[str, ...] = ()
  limitations: Tuple[str, ...] = ()

  def to_frame(self) -> pd.DataFrame:
    '''History as a DataFrame indexed by period label.'''
    frame = pd.DataFrame([asdict(entry) for entry in self.fcf_history],
                         columns=['period', 'cfo', 'capex', 'fcf'])
    return frame.set_index('period')

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'method': self.method,
        'fcf_history': [asdict(entry) for entry in self.fcf_history],
        'fcf0_latest': self.fcf0_latest,
        'warnings': list(self.warnings),
        'limitations': list(self.limitations),
    }


@dataclass(frozen=True)
class DcfAssumptions:
  '''Assumption snapshot echoed with every DCF result.'''
  method: str
  wacc: float
  terminal_g: float
  forecast_years: int
  fcf_growth: float


@dataclass(frozen=True)
class DcfResult:
  '''
  FCFF-DCF valuation result for one set of assumptions.

  Attributes:
    assumptions: Assumptions used (wacc rounded to 4dp)
    pv_forecast: PV of the explicit forecast period
    pv_terminal: PV of the terminal value
    enterprise_value_ev: pv_forecast + pv_terminal
    equity_value: Enterprise value less net debt
    value_per_share: Equity value per share
    upside_vs_spot: (value_per_share - spot) / spot, None without a spot
    warnings: Warnings raised while valuing
    limitations: Known limitations
  '''
  assumptions: DcfAssumptions
  pv_forecast: float
  pv_terminal: float
  enterprise_value_ev: float
  equity_value: float
  value_per_share: float
  upside_vs_spot: Optional[float] = None
  warnings: Tuple[str, ...] = ()
  limitations: Tuple[str, ...] = ()

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'assumptions': asdict(self.assumptions),
        'pv_forecast': self.pv_forecast,
        'pv_terminal': self.pv_terminal,
        'enterprise_value_ev': self.enterprise_value_ev,
        'equity_value': self.equity_value,
        'value_per_share': self.value_per_share,
        'upside_vs_spot': self.upside_vs_spot,
        'warnings': list(self.warnings),
        'limitations': list(self.limitations),
    }


@dataclass(frozen=True)
class SensitivityGrid:
  '''
  Value per share across WACC x terminal growth.

  value_per_share_matrix is row-major: [wacc_index][g_index].
  '''
  wacc_values: Tuple[float, ...]
  g_values: Tuple[float, ...]
  value_per_share_matrix: Tuple[Tuple[float, ...], ...]

  @property
  def shape(self) -> Tuple[int, int]:
    return len(self.wacc_values), len(self.g_values)

  def to_frame(self) -> pd.DataFrame:
    '''
    Grid as a DataFrame.

    Returns:
      DataFrame with WACC labels as index, terminal growth labels as
      columns and value per share as cell values
    '''
    r_labels = [f'{r:.2%}' for r in self.wacc_values]
    g_labels = [f'{g:.2%}' for g in self.g_values]

    df = pd.DataFrame([list(row) for row in self.value_per_share_matrix],
                      index=r_labels,
                      columns=g_labels)
    df.index.name = 'WACC'
    df.columns.name = 'Terminal Growth'
    return df

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'wacc_values': list(self.wacc_values),
        'g_values': list(self.g_values),
        'value_per_share_matrix': [
            list(row) for row in self.value_per_share_matrix
        ],
    }


@dataclass(frozen=True)
class ScenarioSensitivity:
  '''Base/bull/bear scenarios plus the WACC x g sensitivity grid.'''
  base: DcfResult
  bull: DcfResult
  bear: DcfResult
  sensitivity: SensitivityGrid
  warnings: Tuple[str, ...] = ()
  limitations: Tuple[str, ...] = ()

  @property
  def scenarios(self) -> Dict[str, DcfResult]:
    return {'base': self.base, 'bull': self.bull, 'bear': self.bear}

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary.'''
    return {
        'scenarios': {
            name: result.to_dict()
            for name, result in self.scenarios.items()
        },
        'sensitivity': self.sensitivity.to_dict(),
        'warnings': list(self.warnings),
        'limitations': list(self.limitations),
    }


@dataclass(frozen=True)
class ContextMeta:
  '''Provenance of an analyst context.'''
  ticker: str
  source: str
  generated_at_utc: str
  cache_used: bool


@dataclass(frozen=True)
class ContextInputs:
  '''User inputs echoed into the analyst context.'''
  ticker: str
  rf: float
  erp: float
  forecast_years: int
  fcf_growth: float
  terminal_g: float


@dataclass(frozen=True)
class Disclosure:
  '''
  A single warning or limitation tagged with the component that raised it.

  Attributes:
    source: Component name (e.g. 'capital_structure', 'wacc')
    kind: 'limitation' or 'warning'
    message: Free-text disclosure
  '''
  source: str
  kind: str
  message: str


@dataclass(frozen=True)
class AnalystContext:
  '''
  Everything the memo writer is allowed to reference.

  limitations and warnings are plain concatenations of the upstream lists
  (no de-duplication).
  '''
  meta: ContextMeta
  inputs: ContextInputs
  capital_structure: CapitalStructure
  wacc: WaccResult
  fcf: FcfData
  valuation: DcfResult
  sensitivity: ScenarioSensitivity
  limitations: Tuple[str, ...] = ()
  warnings: Tuple[str, ...] = ()
  disclosure_log: Tuple[Disclosure, ...] = field(default=(), repr=False)

  def disclosures(self, kind: Optional[str] = None) -> List[Disclosure]:
    '''
    Disclosures tagged by source component.

    Args:
      kind: Restrict to 'limitation' or 'warning'; None returns both

    Returns:
      Disclosures in aggregation order
    '''
    if kind is None:
      return list(self.disclosure_log)
    return [d for d in self.disclosure_log if d.kind == kind]

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to dictionary (the JSON shape embedded in the memo prompt).'''
    return {
        'meta': asdict(self.meta),
        'inputs': asdict(self.inputs),
        'capital_structure': self.capital_structure.to_dict(),
        'wacc': self.wacc.to_dict(),
        'fcf': self.fcf.to_dict(),
        'valuation': self.valuation.to_dict(),
        'sensitivity': self.sensitivity.to_dict(),
        'limitations': list(self.limitations),
        'warnings': list(self.warnings),
    }

  def to_json(self) -> str:
    '''Serialize to JSON string.'''
    return json.dumps(self.to_dict(), indent=2)
