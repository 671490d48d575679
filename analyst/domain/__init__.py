"""Domain types for the analyst valuation pipeline."""

from analyst.domain.types import AnalystContext
from analyst.domain.types import CapitalStructure
from analyst.domain.types import CapitalWeights
from analyst.domain.types import CashFlowEntry
from analyst.domain.types import ContextInputs
from analyst.domain.types import ContextMeta
from analyst.domain.types import DcfAssumptions
from analyst.domain.types import DcfResult
from analyst.domain.types import Disclosure
from analyst.domain.types import FcfData
from analyst.domain.types import FcfEntry
from analyst.domain.types import FinancialSnapshot
from analyst.domain.types import ScenarioSensitivity
from analyst.domain.types import SensitivityGrid
from analyst.domain.types import UserInputs
from analyst.domain.types import WaccResult

__all__ = [
    'AnalystContext',
    'CapitalStructure',
    'CapitalWeights',
    'CashFlowEntry',
    'ContextInputs',
    'ContextMeta',
    'DcfAssumptions',
    'DcfResult',
    'Disclosure',
    'FcfData',
    'FcfEntry',
    'FinancialSnapshot',
    'ScenarioSensitivity',
    'SensitivityGrid',
    'UserInputs',
    'WaccResult',
]
