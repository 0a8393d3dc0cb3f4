"""Query interface consumed by presentation layers.

``EquityEngine`` binds every calculation component to one ``TaxYearConfig``.
The module-level functions use an engine built on the default rule set.
"""

from datetime import date
from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.disposition import ISODispositionComparator
from equity_compass.engines.grant_status import GrantStatusTracker
from equity_compass.engines.iso_amt import AMTRoomSolver
from equity_compass.engines.progressive import ProgressiveTaxCalculator
from equity_compass.engines.rates import RateResolver
from equity_compass.engines.summary import ClientSummarizer
from equity_compass.engines.vesting import VestingScheduleGenerator
from equity_compass.models.client import Client, Grant, PlannedExercise
from equity_compass.models.reports import (
    AMTRoomReport,
    EffectiveRates,
    GrantStatus,
    ISOScenario,
    VestingEvent,
)


class EquityEngine:
    """All calculation components sharing one rule set."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.rates = RateResolver(self.config)
        self.regular_tax = ProgressiveTaxCalculator(self.config)
        self.vesting = VestingScheduleGenerator(self.config)
        self.tracker = GrantStatusTracker(self.config)
        self.amt = AMTRoomSolver(self.config)
        self.dispositions = ISODispositionComparator(self.config)
        self.summarizer = ClientSummarizer(self.config)

    def generate_vesting_schedule(
        self,
        grant: Grant,
        client: Client,
        simulate_sell_all: bool = False,
        as_of: date | None = None,
    ) -> list[VestingEvent]:
        return self.vesting.generate(grant, client, simulate_sell_all, as_of)

    def get_grant_status(
        self,
        grant: Grant,
        planned_exercises: list[PlannedExercise],
        as_of: date | None = None,
    ) -> GrantStatus:
        return self.tracker.status(grant, planned_exercises, as_of)

    def calculate_amt_room(self, client: Client, as_of: date | None = None) -> AMTRoomReport:
        return self.amt.solve(client, as_of)

    def calculate_iso_scenarios(
        self,
        shares: Decimal,
        strike_price: Decimal,
        fmv_at_exercise: Decimal,
        sale_price: Decimal,
        client: Client,
        is_qualified: bool,
    ) -> ISOScenario:
        return self.dispositions.scenario(
            shares, strike_price, fmv_at_exercise, sale_price, client, is_qualified
        )

    def get_effective_rates(self, client: Client) -> EffectiveRates:
        return self.rates.resolve(client)


_DEFAULT_ENGINE = EquityEngine()


def default_engine() -> EquityEngine:
    return _DEFAULT_ENGINE


def generate_vesting_schedule(
    grant: Grant,
    client: Client,
    simulate_sell_all: bool = False,
    as_of: date | None = None,
) -> list[VestingEvent]:
    return default_engine().generate_vesting_schedule(grant, client, simulate_sell_all, as_of)


def get_grant_status(
    grant: Grant,
    planned_exercises: list[PlannedExercise],
    as_of: date | None = None,
) -> GrantStatus:
    return default_engine().get_grant_status(grant, planned_exercises, as_of)


def calculate_amt_room(client: Client, as_of: date | None = None) -> AMTRoomReport:
    return default_engine().calculate_amt_room(client, as_of)


def calculate_iso_scenarios(
    shares: Decimal,
    strike_price: Decimal,
    fmv_at_exercise: Decimal,
    sale_price: Decimal,
    client: Client,
    is_qualified: bool,
) -> ISOScenario:
    return default_engine().calculate_iso_scenarios(
        shares, strike_price, fmv_at_exercise, sale_price, client, is_qualified
    )


def get_effective_rates(client: Client) -> EffectiveRates:
    return default_engine().get_effective_rates(client)
