"""Client portfolio summary."""

from datetime import date
from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.grant_status import GrantStatusTracker
from equity_compass.engines.vesting import VestingScheduleGenerator
from equity_compass.models.client import Client
from equity_compass.models.enums import GrantType
from equity_compass.models.reports import ClientSummary


class ClientSummarizer:
    """Aggregates next-12-month vesting and planned exercises for a client.

    Vesting contributes no AMT exposure; the AMT figure comes only from
    planned buy-and-hold exercises.
    """

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.vesting = VestingScheduleGenerator(self.config)
        self.tracker = GrantStatusTracker(self.config)

    def summarize(
        self,
        client: Client,
        simulate_sell_all: bool = False,
        as_of: date | None = None,
    ) -> ClientSummary:
        as_of = as_of or date.today()
        events = self.vesting.client_schedule(client, simulate_sell_all, as_of)
        upcoming = self.vesting.upcoming_events(events, as_of)

        unvested_rsu_value = Decimal("0")
        for grant in client.grants:
            if grant.type == GrantType.RSU:
                # RSUs are never exercised
                status = self.tracker.status(grant, [], as_of)
                unvested_rsu_value += status.unvested * grant.current_price

        zero = Decimal("0")
        return ClientSummary(
            grant_count=len(client.grants),
            upcoming_gross_value=sum((e.gross_value for e in upcoming), zero),
            upcoming_tax_gap=sum((e.tax_gap for e in upcoming), zero),
            upcoming_shares=sum((e.shares for e in upcoming), zero),
            upcoming_net_value=sum((e.net_value for e in upcoming), zero),
            unvested_rsu_value=unvested_rsu_value,
            planned_amt_exposure=sum(
                (p.amt_exposure for p in client.planned_exercises), zero
            ),
            planned_exercise_cost=sum(
                (p.estimated_cost for p in client.planned_exercises), zero
            ),
        )
