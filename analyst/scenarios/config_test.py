import pytest

from analyst.scenarios.config import ScenarioConfig


class TestScenarioConfig:
  """Tests for ScenarioConfig."""

  def test_default(self):
    """Default shifts and 5 x 3 grid offsets."""
    config = ScenarioConfig.default()

    assert config.wacc_shift == 0.01
    assert config.growth_shift == 0.02
    assert config.wacc_floor == 0.01
    assert config.wacc_offsets == (-0.01, -0.005, 0.0, 0.005, 0.01)
    assert config.g_offsets == (-0.005, 0.0, 0.005)

  def test_grid_values(self):
    """Grid values are base plus offsets; the centre is the base itself."""
    config = ScenarioConfig.default()

    wacc_values = config.wacc_grid(0.09)
    g_values = config.g_grid(0.025)

    assert wacc_values == pytest.approx([0.08, 0.085, 0.09, 0.095, 0.10])
    assert wacc_values[2] == 0.09
    assert g_values[1] == 0.025

  def test_json_serialization(self):
    """Config survives JSON serialization."""
    config = ScenarioConfig(name='wide', wacc_shift=0.02,
                            wacc_offsets=(-0.02, 0.0, 0.02))

    restored = ScenarioConfig.from_json(config.to_json())

    assert restored == config
    assert isinstance(restored.wacc_offsets, tuple)

  def test_empty_offsets_rejected(self):
    """Empty grid axes raise ValueError."""
    with pytest.raises(ValueError, match='wacc_offsets cannot be empty'):
      ScenarioConfig(wacc_offsets=())
    with pytest.raises(ValueError, match='g_offsets cannot be empty'):
      ScenarioConfig(g_offsets=())
