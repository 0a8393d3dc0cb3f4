"""Data models for Equity Compass."""

from equity_compass.models.client import Client, Grant, PlannedExercise
from equity_compass.models.enums import (
    DispositionType,
    ExerciseStrategy,
    FilingStatus,
    GrantType,
    VestingScheduleType,
)
from equity_compass.models.reports import (
    AMTRoomReport,
    CashlessExerciseEstimate,
    ClientSummary,
    DispositionComparison,
    EffectiveRates,
    GrantStatus,
    ISOScenario,
    TaxBreakdown,
    VestingEvent,
    VestingTaxBreakdown,
)

__all__ = [
    "AMTRoomReport",
    "CashlessExerciseEstimate",
    "Client",
    "ClientSummary",
    "DispositionComparison",
    "DispositionType",
    "EffectiveRates",
    "ExerciseStrategy",
    "FilingStatus",
    "Grant",
    "GrantStatus",
    "GrantType",
    "ISOScenario",
    "PlannedExercise",
    "TaxBreakdown",
    "VestingEvent",
    "VestingScheduleType",
    "VestingTaxBreakdown",
]
