import dataclasses
import json
import sys
from unittest import mock

import pytest

from analyst.data_provider import JsonSnapshotProvider
from analyst.data_provider import StaticSnapshotProvider
from analyst.data_provider import write_snapshot
from analyst.domain.types import UserInputs
from analyst.run import main
from analyst.run import run_analysis
from analyst.scenarios.config import ScenarioConfig

FIXED_TIMESTAMP = '2024-06-30T12:00:00+00:00'


class TestRunAnalysis:
  """Tests for the end-to-end pipeline."""

  def test_default_run(self):
    """Default inputs on the MSFT mock snapshot."""
    context = run_analysis(generated_at_utc=FIXED_TIMESTAMP)

    assert context.meta.ticker == 'MSFT'
    assert context.meta.source == 'yfinance (simulated)'
    assert context.fcf.fcf0_latest == pytest.approx(65_000_000_000)
    assert context.capital_structure.net_debt == 26_000_000_000
    assert context.valuation is context.sensitivity.base
    assert context.valuation.assumptions.wacc == round(context.wacc.wacc, 4)
    assert context.valuation.upside_vs_spot is not None

  def test_wacc_feeds_grid_centre(self):
    """The rounded WACC is the base case and grid centre."""
    context = run_analysis(generated_at_utc=FIXED_TIMESTAMP)
    grid = context.sensitivity.sensitivity

    assert grid.wacc_values[2] == context.wacc.wacc
    assert (grid.value_per_share_matrix[2][1] ==
            context.valuation.value_per_share)

  def test_custom_provider_and_inputs(self, round_snapshot):
    """Provider metadata and inputs flow into the context."""
    inputs = UserInputs(rf=0.04, erp=0.05, forecast_years=3, fcf_growth=0.04,
                        terminal_g=0.02, kd_override=0.06)
    provider = StaticSnapshotProvider(round_snapshot, source='fixture',
                                      cache_used=False)

    context = run_analysis(inputs, provider, generated_at_utc=FIXED_TIMESTAMP)

    assert context.meta.ticker == 'TEST'
    assert context.meta.source == 'fixture'
    assert context.meta.cache_used is False
    assert context.wacc.cost_of_debt_kd == 0.06
    assert context.fcf.fcf0_latest == pytest.approx(100.0)
    assert context.inputs.forecast_years == 3

  def test_json_provider(self, tmp_path, msft_snapshot):
    """Replayed snapshot gives the same valuation as the static one."""
    path = tmp_path / 'msft.json'
    write_snapshot(msft_snapshot, path)

    replayed = run_analysis(provider=JsonSnapshotProvider(path),
                            generated_at_utc=FIXED_TIMESTAMP)
    static = run_analysis(generated_at_utc=FIXED_TIMESTAMP)

    assert replayed.valuation == static.valuation
    assert replayed.meta.source == 'json replay (msft.json)'

  def test_scenario_config_passed_through(self):
    """Custom grid offsets reach the sensitivity grid."""
    config = dataclasses.replace(ScenarioConfig.default(),
                                 g_offsets=(0.0,))

    context = run_analysis(config=config, generated_at_utc=FIXED_TIMESTAMP)

    assert context.sensitivity.sensitivity.shape == (5, 1)


class TestMain:
  """Tests for the CLI entrypoint."""

  def test_writes_context(self, tmp_path, capsys):
    """--output writes the context JSON and the grid is printed."""
    output = tmp_path / 'out' / 'context.json'
    argv = ['run', '--years', '3', '--beta-override', '1.0', '--output',
            str(output)]

    with mock.patch.object(sys, 'argv', argv):
      main()

    data = json.loads(output.read_text(encoding='utf-8'))
    assert data['inputs']['forecast_years'] == 3
    assert data['wacc']['beta_used'] == 1.0
    assert data['warnings'] == ['User provided Beta override']
    assert 'Value per Share' in capsys.readouterr().out

  def test_memo_flag(self, capsys):
    """--memo prints whatever the memo client returns."""
    with mock.patch.object(sys, 'argv', ['run', '--memo']):
      with mock.patch('analyst.run.MemoClient') as mock_client:
        mock_client.return_value.generate_memo.return_value = '# Memo'
        main()

    assert '# Memo' in capsys.readouterr().out

  def test_invalid_years_is_usage_error(self, capsys):
    """--years 0 exits with a usage message instead of a traceback."""
    with mock.patch.object(sys, 'argv', ['run', '--years', '0']):
      with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 2
    assert 'forecast_years must be >= 1' in capsys.readouterr().err


class TestRunAnalysisInputs:
  """Tests for inputs loaded from JSON."""

  def test_whole_float_years_run(self):
    """A 5.0 horizon from JSON runs the full pipeline."""
    inputs = UserInputs.from_json(
        json.dumps(UserInputs.default().to_dict() | {'forecast_years': 5.0}))

    context = run_analysis(inputs, generated_at_utc=FIXED_TIMESTAMP)

    assert context.inputs.forecast_years == 5
    assert context.valuation == run_analysis(
        generated_at_utc=FIXED_TIMESTAMP).valuation
