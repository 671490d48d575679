"""
Scenario configuration for the base/bull/bear run and the sensitivity grid.

ScenarioConfig is a serializable (JSON-friendly) description of how far the
bull and bear cases move WACC and growth away from the base case, and which
offsets make up the WACC x terminal growth grid.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any


@dataclass(frozen=True)
class ScenarioConfig:
  """
  Configuration for scenario and sensitivity runs.

  Attributes:
    name: Human-readable configuration name
    wacc_shift: WACC move for bull (-) and bear (+) cases
    growth_shift: FCF growth move for bull (+) and bear (-) cases
    wacc_floor: Lowest WACC the bull case may use
    wacc_offsets: Grid offsets added to base WACC, ascending
    g_offsets: Grid offsets added to base terminal growth, ascending
  """
  name: str = 'default'
  wacc_shift: float = 0.01
  growth_shift: float = 0.02
  wacc_floor: float = 0.01
  wacc_offsets: tuple[float, ...] = field(
      default=(-0.01, -0.005, 0.0, 0.005, 0.01))
  g_offsets: tuple[float, ...] = field(default=(-0.005, 0.0, 0.005))

  def __post_init__(self):
    if not self.wacc_offsets:
      raise ValueError('wacc_offsets cannot be empty')
    if not self.g_offsets:
      raise ValueError('g_offsets cannot be empty')

  @classmethod
  def default(cls) -> 'ScenarioConfig':
    """
    Create default scenario configuration.

    Uses:
      - Bull: WACC -1pp (floored at 1%), growth +2pp
      - Bear: WACC +1pp, growth -2pp
      - 5x3 grid: WACC +/-0.5pp and +/-1pp, terminal g +/-0.5pp
    """
    return cls()

  def wacc_grid(self, base_wacc: float) -> list[float]:
    return [base_wacc + offset for offset in self.wacc_offsets]

  def g_grid(self, base_g: float) -> list[float]:
    return [base_g + offset for offset in self.g_offsets]

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    data = asdict(self)
    data['wacc_offsets'] = list(self.wacc_offsets)
    data['g_offsets'] = list(self.g_offsets)
    return data

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ScenarioConfig':
    """Create from dictionary."""
    data = dict(data)
    for key in ('wacc_offsets', 'g_offsets'):
      if key in data:
        data[key] = tuple(data[key])
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'ScenarioConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
