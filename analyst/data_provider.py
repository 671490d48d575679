'''
Snapshot providers for the valuation core.

The core only ever sees a FinancialSnapshot. Where it comes from (a static
fixture, a cached JSON replay, a live fetch) is hidden behind
SnapshotProvider.

Usage:
  provider = StaticSnapshotProvider()
  snapshot = provider.get_snapshot()

  # Replay a saved snapshot (loaded once, then cached)
  provider = JsonSnapshotProvider(Path('snapshots/msft.json'))
  snapshot = provider.get_snapshot()
'''

from abc import ABC
from abc import abstractmethod
import json
import logging
from pathlib import Path
from typing import Optional

from analyst.domain.types import CashFlowEntry
from analyst.domain.types import FinancialSnapshot

logger = logging.getLogger(__name__)

# Recent MSFT figures; the history is ordered oldest first.
MSFT_SNAPSHOT = FinancialSnapshot(
    ticker='MSFT',
    market_cap=3_150_000_000_000,
    shares_outstanding=7_430_000_000,
    beta=0.89,
    price=425.00,
    total_debt=106_000_000_000,
    cash=80_000_000_000,
    interest_expense=3_000_000_000,
    pre_tax_income=100_000_000_000,
    income_tax=18_000_000_000,
    cashflow_history=(
        CashFlowEntry(period='2023', cfo=87_582_000_000, capex=28_107_000_000),
        CashFlowEntry(period='2024 (TTM)',
                      cfo=110_000_000_000,
                      capex=45_000_000_000),
    ),
)


class SnapshotProvider(ABC):
  """
  Base class for snapshot providers.

  Subclasses implement get_snapshot() and describe themselves through
  `source` (label shown in the memo) and `cache_used`.
  """

  source: str = 'unknown'
  cache_used: bool = False

  @abstractmethod
  def get_snapshot(self) -> FinancialSnapshot:
    """
    Return the snapshot to value.

    Returns:
      FinancialSnapshot
    """


class StaticSnapshotProvider(SnapshotProvider):
  """
  Fixed in-memory snapshot.

  Stands in for a yfinance bundle so runs are deterministic.
  """

  def __init__(
      self,
      snapshot: FinancialSnapshot = MSFT_SNAPSHOT,
      source: str = 'yfinance (simulated)',
      cache_used: bool = True,
  ):
    """
    Initialize static provider.

    Args:
      snapshot: Snapshot to serve (default: MSFT mock data)
      source: Source label reported in the context metadata
      cache_used: Cache flag reported in the context metadata
    """
    self.snapshot = snapshot
    self.source = source
    self.cache_used = cache_used

  def get_snapshot(self) -> FinancialSnapshot:
    """Return the fixed snapshot."""
    return self.snapshot


class JsonSnapshotProvider(SnapshotProvider):
  """
  Cached replay of a snapshot saved as JSON.

  The file is read on first use and the parsed snapshot is cached, so
  repeated calls do not touch the filesystem again.
  """

  def __init__(self, path: Path, source: Optional[str] = None):
    """
    Initialize JSON provider.

    Args:
      path: Path to the snapshot JSON file
      source: Source label (default: 'json replay (<file name>)')
    """
    self.path = Path(path)
    self.source = source or f'json replay ({self.path.name})'
    self.cache_used = True

    self._snapshot: Optional[FinancialSnapshot] = None

  def get_snapshot(self) -> FinancialSnapshot:
    """
    Load and cache the snapshot.

    Returns:
      FinancialSnapshot

    Raises:
      FileNotFoundError: If the snapshot file does not exist
      ValueError: If required fields are missing
    """
    if self._snapshot is not None:
      return self._snapshot

    if not self.path.exists():
      raise FileNotFoundError(f'Snapshot not found: {self.path}')

    logger.debug('Loading snapshot from %s', self.path)
    data = json.loads(self.path.read_text(encoding='utf-8'))

    self._snapshot = FinancialSnapshot.from_dict(data)
    return self._snapshot


def write_snapshot(snapshot: FinancialSnapshot, path: Path) -> None:
  '''Save a snapshot as JSON readable by JsonSnapshotProvider.'''
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding='utf-8')
