"""Enumerations for Equity Compass."""

from enum import StrEnum


class GrantType(StrEnum):
    RSU = "RSU"
    ISO = "ISO"


class FilingStatus(StrEnum):
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"


class VestingScheduleType(StrEnum):
    CLIFF_4Y_1Y = "standard_4y_1y_cliff"
    QUARTERLY_4Y = "standard_4y_quarterly"


class DispositionType(StrEnum):
    QUALIFYING = "QUALIFYING"
    DISQUALIFYING = "DISQUALIFYING"


class ExerciseStrategy(StrEnum):
    BUY_HOLD = "buy_hold"
    CASHLESS = "cashless"
