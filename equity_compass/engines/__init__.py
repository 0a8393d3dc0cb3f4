"""Tax and vesting calculation engines."""

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.disposition import ISODispositionComparator
from equity_compass.engines.grant_status import GrantStatusTracker
from equity_compass.engines.iso_amt import AMTRoomSolver
from equity_compass.engines.progressive import ProgressiveTaxCalculator
from equity_compass.engines.rates import RateResolver
from equity_compass.engines.summary import ClientSummarizer
from equity_compass.engines.vesting import VestingScheduleGenerator

__all__ = [
    "AMTRoomSolver",
    "ClientSummarizer",
    "GrantStatusTracker",
    "ISODispositionComparator",
    "ProgressiveTaxCalculator",
    "RateResolver",
    "TaxYearConfig",
    "VestingScheduleGenerator",
    "get_tax_year_config",
]
