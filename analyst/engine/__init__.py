'''Valuation math: capital structure, WACC, FCF proxy and FCFF-DCF.'''

from analyst.engine.capital import extract_capital_structure
from analyst.engine.dcf import (
    compute_pv_forecast,
    compute_terminal_value,
    run_fcff_dcf,
)
from analyst.engine.fcf import compute_fcf_proxy
from analyst.engine.wacc import estimate_wacc

__all__ = [
    'compute_fcf_proxy',
    'compute_pv_forecast',
    'compute_terminal_value',
    'estimate_wacc',
    'extract_capital_structure',
    'run_fcff_dcf',
]
