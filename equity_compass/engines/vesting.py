"""Vesting schedule generation.

Expands a grant's vesting variant into dated tranches and annotates each one
with its tax consequences:
  - RSU: ordinary income at vest, withholding at the elected rate, and the
    gap between actual federal + state liability and what was withheld.
  - ISO: vesting is not a taxable event. Only the informational bargain
    spread is reported; withholding, tax gap, and AMT exposure are zero.
"""

import logging
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.rates import HUNDRED, RateResolver
from equity_compass.models.client import Client, Grant
from equity_compass.models.enums import GrantType, VestingScheduleType
from equity_compass.models.reports import VestingEvent, VestingTaxBreakdown

logger = logging.getLogger(__name__)

CLIFF_MONTHS = 12
TRANCHE_MONTHS = 3
CLIFF_FRACTION = Decimal("0.25")
POST_CLIFF_TRANCHES = 12
QUARTERLY_TRANCHES = 16


def is_past(vest_date: date, as_of: date) -> bool:
    """True if the tranche is behind the evaluation instant.

    Tranches vest at the start of their day, so an event dated ``as_of`` has
    already vested by any moment during that day.
    """
    return vest_date <= as_of


class VestingScheduleGenerator:
    """Generates chronological vesting events for a grant."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.rates = RateResolver(self.config)

    def tranches(self, grant: Grant) -> list[tuple[date, Decimal]]:
        """Dated share tranches for the grant's vesting variant, in date order."""
        total = grant.total_shares
        tranches: list[tuple[date, Decimal]] = []

        if grant.vesting_schedule == VestingScheduleType.CLIFF_4Y_1Y:
            cliff_date = grant.grant_date + relativedelta(months=CLIFF_MONTHS)
            tranches.append((cliff_date, total * CLIFF_FRACTION))
            per_tranche = total * (1 - CLIFF_FRACTION) / POST_CLIFF_TRANCHES
            # Offsets are taken from the grant date so a clamped cliff
            # (Feb 29 -> Feb 28) does not drag later tranches a day early.
            for i in range(1, POST_CLIFF_TRANCHES + 1):
                months = CLIFF_MONTHS + i * TRANCHE_MONTHS
                vest_date = grant.grant_date + relativedelta(months=months)
                tranches.append((vest_date, per_tranche))
        else:
            per_tranche = total / QUARTERLY_TRANCHES
            for i in range(1, QUARTERLY_TRANCHES + 1):
                vest_date = grant.grant_date + relativedelta(months=i * TRANCHE_MONTHS)
                tranches.append((vest_date, per_tranche))

        return sorted(tranches, key=lambda t: t[0])

    def elected_withholding_rate(self, grant: Grant) -> Decimal:
        """Elected withholding percent, falling back to the rule-set default."""
        if grant.withholding_rate is not None:
            return grant.withholding_rate
        return self.config.default_withholding_rate

    def generate(
        self,
        grant: Grant,
        client: Client,
        simulate_sell_all: bool = False,
        as_of: date | None = None,
    ) -> list[VestingEvent]:
        """Build the full vesting schedule for one grant, sorted by date."""
        as_of = as_of or date.today()
        state_rate = self.rates.state_rate(client)
        fed_rate = client.tax_bracket / HUNDRED
        elected_rate = self.elected_withholding_rate(grant)

        events = [
            self._build_event(
                grant, vest_date, shares, fed_rate, state_rate,
                elected_rate, simulate_sell_all, as_of,
            )
            for vest_date, shares in self.tranches(grant)
        ]
        return sorted(events, key=lambda e: e.vest_date)

    def client_schedule(
        self,
        client: Client,
        simulate_sell_all: bool = False,
        as_of: date | None = None,
    ) -> list[VestingEvent]:
        """Merge every grant's schedule into one date-ordered list."""
        events: list[VestingEvent] = []
        for grant in client.grants:
            events.extend(self.generate(grant, client, simulate_sell_all, as_of))
        return sorted(events, key=lambda e: e.vest_date)

    @staticmethod
    def upcoming_events(
        events: list[VestingEvent], as_of: date | None = None
    ) -> list[VestingEvent]:
        """Events vesting within one year of ``as_of`` (inclusive on both ends)."""
        as_of = as_of or date.today()
        horizon = as_of + relativedelta(years=1)
        return [e for e in events if as_of <= e.vest_date <= horizon]

    def _build_event(
        self,
        grant: Grant,
        vest_date: date,
        shares: Decimal,
        fed_rate: Decimal,
        state_rate: Decimal,
        elected_rate: Decimal,
        simulate_sell_all: bool,
        as_of: date,
    ) -> VestingEvent:
        price = grant.current_price

        if grant.type == GrantType.ISO:
            return VestingEvent(
                grant_id=grant.id,
                grant_type=grant.type,
                vest_date=vest_date,
                shares=shares,
                gross_value=grant.spread_per_share * shares,
                withholding_amount=Decimal("0"),
                elected_withholding_rate=elected_rate,
                net_shares=shares,
                net_value=shares * price,
                shares_sold_to_cover=Decimal("0"),
                tax_gap=Decimal("0"),
                amt_exposure=Decimal("0"),
                tax_breakdown=VestingTaxBreakdown(),
                is_past=is_past(vest_date, as_of),
            )

        gross_value = shares * price
        withholding = gross_value * elected_rate / HUNDRED
        federal = gross_value * fed_rate
        state = gross_value * state_rate
        niit = Decimal("0")
        liability = federal + state + niit
        tax_gap = max(liability - withholding, Decimal("0"))

        shares_sold: Decimal | None
        if simulate_sell_all:
            shares_sold = shares
            net_shares = Decimal("0")
            net_value = gross_value - withholding
        elif price > 0:
            shares_sold = withholding / price
            net_shares = max(shares - shares_sold, Decimal("0"))
            net_value = net_shares * price
        else:
            logger.warning(
                "Grant %s has zero price on %s; cannot compute sell-to-cover shares",
                grant.id, vest_date,
            )
            shares_sold = None
            net_shares = shares
            net_value = Decimal("0")

        return VestingEvent(
            grant_id=grant.id,
            grant_type=grant.type,
            vest_date=vest_date,
            shares=shares,
            gross_value=gross_value,
            withholding_amount=withholding,
            elected_withholding_rate=elected_rate,
            net_shares=net_shares,
            net_value=net_value,
            shares_sold_to_cover=shares_sold,
            tax_gap=tax_gap,
            amt_exposure=Decimal("0"),
            tax_breakdown=VestingTaxBreakdown(
                federal=federal,
                state=state,
                niit=niit,
                total_liability=liability,
            ),
            is_past=is_past(vest_date, as_of),
        )
