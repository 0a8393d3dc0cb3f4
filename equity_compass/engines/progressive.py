"""Progressive federal ordinary income tax."""

from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.models.enums import FilingStatus


class ProgressiveTaxCalculator:
    """Computes regular federal tax by walking the configured brackets."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()

    def compute_tax(self, taxable_income: Decimal, filing_status: FilingStatus) -> Decimal:
        """Tax owed on ``taxable_income``. Zero for income <= 0."""
        if taxable_income <= Decimal("0"):
            return Decimal("0")

        tax = Decimal("0")
        prev_bound = Decimal("0")

        for upper_bound, rate in self.config.ordinary_brackets[filing_status]:
            if upper_bound is None or taxable_income <= upper_bound:
                tax += (taxable_income - prev_bound) * rate
                break
            tax += (upper_bound - prev_bound) * rate
            prev_bound = upper_bound

        return tax

    def marginal_rate(self, taxable_income: Decimal, filing_status: FilingStatus) -> Decimal:
        """Rate applied to the next dollar above ``taxable_income``."""
        for upper_bound, rate in self.config.ordinary_brackets[filing_status]:
            if upper_bound is None or taxable_income < upper_bound:
                return rate
        # Unreachable with a validated config: the top bracket is unbounded
        return self.config.ordinary_brackets[filing_status][-1][1]
