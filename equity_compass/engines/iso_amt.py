"""ISO AMT room solver.

Estimates how much ISO bargain element a client can realize in the current
year before Tentative Minimum Tax exceeds regular tax. Models the projected
rule set's AMT mechanics per Form 6251:
  - State income tax is itemized when it beats the standard deduction (no
    SALT cap), and is added back for AMT along with personal exemptions.
  - The AMT exemption phases out at 25 cents per dollar above the threshold.
  - TMT is 26% up to the rate threshold and 28% above it.

TMT is not linear in the spread once the exemption phases out, so the
crossover is located by a bounded stepwise search.
"""

import logging
from datetime import date
from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.progressive import ProgressiveTaxCalculator
from equity_compass.engines.rates import RateResolver
from equity_compass.engines.vesting import VestingScheduleGenerator
from equity_compass.models.client import Client
from equity_compass.models.enums import FilingStatus, GrantType
from equity_compass.models.reports import AMTRoomReport

logger = logging.getLogger(__name__)

JOINT_EXEMPTION_COUNT = 2


class AMTRoomSolver:
    """Finds the ISO spread at which AMT becomes the binding tax."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.rates = RateResolver(self.config)
        self.regular = ProgressiveTaxCalculator(self.config)
        self.vesting = VestingScheduleGenerator(self.config)

    def projected_rsu_income(self, client: Client, tax_year: int, as_of: date) -> Decimal:
        """Gross RSU value vesting during ``tax_year``."""
        total = Decimal("0")
        for grant in client.grants:
            if grant.type != GrantType.RSU:
                continue
            for event in self.vesting.generate(grant, client, as_of=as_of):
                if event.vest_date.year == tax_year:
                    total += event.gross_value
        return total

    def personal_exemptions(self, filing_status: FilingStatus) -> Decimal:
        count = JOINT_EXEMPTION_COUNT if filing_status == FilingStatus.MARRIED_JOINT else 1
        return self.config.personal_exemption * count

    def amt_exemption(self, amti: Decimal, filing_status: FilingStatus) -> Decimal:
        """AMT exemption after the phase-out for ``amti``."""
        exemption = self.config.amt_exemption[filing_status]
        phaseout_start = self.config.amt_phaseout_start[filing_status]
        reduction = max(amti - phaseout_start, Decimal("0")) * self.config.amt_phaseout_rate
        return max(exemption - reduction, Decimal("0"))

    def tentative_minimum_tax(self, amti: Decimal, filing_status: FilingStatus) -> Decimal:
        """Two-tier TMT on ``amti`` after the phased-out exemption."""
        amt_base = max(amti - self.amt_exemption(amti, filing_status), Decimal("0"))
        threshold = self.config.amt_rate_threshold
        if amt_base <= threshold:
            return amt_base * self.config.amt_low_rate
        return (
            threshold * self.config.amt_low_rate
            + (amt_base - threshold) * self.config.amt_high_rate
        )

    def solve(self, client: Client, as_of: date | None = None) -> AMTRoomReport:
        """Search for the largest ISO spread that keeps TMT at or below regular tax.

        The search walks from zero in ``amt_search_step`` increments and stops
        at ``amt_search_cap``. If TMT never overtakes regular tax before the
        cap, the report is indeterminate: ``room`` is None.
        """
        as_of = as_of or date.today()
        tax_year = as_of.year
        status = client.filing_status

        # --- Income ---
        projected_rsu = self.projected_rsu_income(client, tax_year, as_of)
        base_income = (
            client.estimated_income
            if client.estimated_income is not None
            else self.config.default_base_income
        )
        total_gross = base_income + projected_rsu

        # --- Deductions: state tax itemized vs. standard ---
        estimated_state_tax = total_gross * self.rates.state_rate(client)
        std_deduction = self.config.standard_deduction[status]
        is_itemizing = estimated_state_tax > std_deduction
        effective_deduction = estimated_state_tax if is_itemizing else std_deduction
        exemptions = self.personal_exemptions(status)

        # --- Regular tax ---
        regular_taxable = max(total_gross - effective_deduction - exemptions, Decimal("0"))
        regular_tax = self.regular.compute_tax(regular_taxable, status)

        # --- Crossover search ---
        # Deductions and exemptions are added back, so AMTI is gross income plus spread.
        step = self.config.amt_search_step
        cap = self.config.amt_search_cap
        spread = Decimal("0")
        tmt = Decimal("0")
        breakeven: Decimal | None = None

        while spread < cap:
            tmt = self.tentative_minimum_tax(total_gross + spread, status)
            if tmt > regular_tax:
                breakeven = spread
                break
            spread += step

        if breakeven is None:
            logger.warning(
                "No AMT crossover below %s for client %s (regular_tax=%s); room is indeterminate",
                cap, client.id, regular_tax,
            )
            room = None
        else:
            room = max(breakeven - step, Decimal("0"))
            logger.debug(
                "AMT crossover at spread=%s for client %s (tmt=%s, regular_tax=%s)",
                breakeven, client.id, tmt, regular_tax,
            )

        return AMTRoomReport(
            tax_year=tax_year,
            room=room,
            breakeven_found=breakeven is not None,
            regular_taxable_income=regular_taxable,
            regular_tax=regular_tax,
            tentative_minimum_tax=tmt,
            projected_rsu_income=projected_rsu,
            base_income=base_income,
            total_gross_income=total_gross,
            std_deduction=std_deduction,
            personal_exemptions=exemptions,
            effective_deduction=effective_deduction,
            is_itemizing=is_itemizing,
            estimated_state_tax=estimated_state_tax,
        )

    @staticmethod
    def exceeds_room(report: AMTRoomReport, spread: Decimal) -> bool:
        """True if exercising ``spread`` of bargain element would trigger AMT."""
        if report.room is None:
            return False
        return spread > report.room
