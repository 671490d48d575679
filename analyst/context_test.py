import dataclasses
import json

import pytest

from analyst.context import build_context
from analyst.engine.capital import extract_capital_structure
from analyst.engine.fcf import compute_fcf_proxy
from analyst.engine.wacc import BETA_OVERRIDE_WARNING
from analyst.engine.wacc import estimate_wacc
from analyst.engine.wacc import KD_PROXY_LIMITATION
from analyst.scenarios.runner import run_scenarios_and_sensitivity

FIXED_TIMESTAMP = '2024-06-30T12:00:00+00:00'


@pytest.fixture
def components(msft_snapshot, default_inputs):
  """Upstream results for the MSFT snapshot."""
  cs = extract_capital_structure(msft_snapshot)
  wacc = estimate_wacc(cs, default_inputs, msft_snapshot)
  fcf = compute_fcf_proxy(msft_snapshot.cashflow_history)
  sensitivity = run_scenarios_and_sensitivity(
      fcf0=fcf.fcf0_latest,
      base_wacc=wacc.wacc,
      inputs=default_inputs,
      net_debt=cs.net_debt,
      shares=cs.shares_outstanding,
      spot_price=msft_snapshot.price,
  )
  return {
      'inputs': default_inputs,
      'capital_structure': cs,
      'wacc': wacc,
      'fcf': fcf,
      'sensitivity': sensitivity,
  }


def _build(components, **overrides):
  kwargs = dict(components)
  kwargs.update(overrides)
  return build_context(source='yfinance (simulated)',
                       cache_used=True,
                       generated_at_utc=FIXED_TIMESTAMP,
                       **kwargs)


class TestBuildContext:
  """Tests for build_context."""

  def test_metadata(self, components):
    """Ticker, source, timestamp and cache flag."""
    context = _build(components)

    assert context.meta.ticker == 'MSFT'
    assert context.meta.source == 'yfinance (simulated)'
    assert context.meta.generated_at_utc == FIXED_TIMESTAMP
    assert context.meta.cache_used is True

  def test_timestamp_defaults_to_now_utc(self, components):
    """Timestamp is captured in UTC when not supplied."""
    context = build_context(source='s', cache_used=False, **components)

    assert context.meta.generated_at_utc.endswith('+00:00')

  def test_inputs_echoed(self, components, default_inputs):
    """Inputs are echoed with the ticker."""
    context = _build(components)

    assert context.inputs.ticker == 'MSFT'
    assert context.inputs.rf == default_inputs.rf
    assert context.inputs.forecast_years == default_inputs.forecast_years
    assert context.inputs.terminal_g == default_inputs.terminal_g

  def test_valuation_is_base_case(self, components):
    """The echoed valuation is the base scenario."""
    context = _build(components)

    assert context.valuation is components['sensitivity'].base
    assert context.sensitivity is components['sensitivity']

  def test_limitations_concatenated_in_order(self, components):
    """cs + wacc + fcf + base valuation limitations, in that order."""
    context = _build(components)

    expected = (components['capital_structure'].limitations +
                components['wacc'].limitations +
                components['fcf'].limitations +
                components['sensitivity'].base.limitations)
    assert context.limitations == expected
    assert len(context.limitations) == 4

  def test_duplicates_kept(self, components):
    """Duplicate strings are not removed."""
    cs = dataclasses.replace(
        components['capital_structure'],
        limitations=(KD_PROXY_LIMITATION, KD_PROXY_LIMITATION))

    context = _build(components, capital_structure=cs)

    assert len(context.limitations) == 5
    assert context.limitations.count(KD_PROXY_LIMITATION) == 3

  def test_warnings_from_cs_and_wacc_only(self, components, msft_snapshot,
                                          default_inputs):
    """Warnings come from capital structure then WACC."""
    inputs = dataclasses.replace(default_inputs, beta_override=1.1)
    wacc = estimate_wacc(components['capital_structure'], inputs,
                         msft_snapshot)
    cs = dataclasses.replace(components['capital_structure'],
                             warnings=('stale balance sheet',))

    context = _build(components, capital_structure=cs, wacc=wacc)

    assert context.warnings == ('stale balance sheet', BETA_OVERRIDE_WARNING)

  def test_disclosures_project_to_flat_lists(self, components):
    """Tagged disclosures reproduce the flat lists."""
    context = _build(components)

    limitations = context.disclosures('limitation')
    assert tuple(d.message for d in limitations) == context.limitations
    assert [d.source for d in limitations] == [
        'capital_structure', 'wacc', 'fcf', 'valuation'
    ]
    assert context.disclosures('warning') == []
    assert len(context.disclosures()) == len(context.limitations)

  def test_to_dict_is_json_serializable(self, components):
    """Context serializes with the schema's top-level keys."""
    context = _build(components)

    data = json.loads(context.to_json())

    assert set(data) == {
        'meta', 'inputs', 'capital_structure', 'wacc', 'fcf', 'valuation',
        'sensitivity', 'limitations', 'warnings'
    }
    assert set(data['sensitivity']['scenarios']) == {'base', 'bull', 'bear'}
    assert len(data['sensitivity']['sensitivity']
               ['value_per_share_matrix']) == 5
    assert data['capital_structure']['equity_market_value_E'] == 3.15e12

  def test_immutable(self, components):
    """Context cannot be modified."""
    context = _build(components)

    with pytest.raises(dataclasses.FrozenInstanceError):
      context.limitations = ()
