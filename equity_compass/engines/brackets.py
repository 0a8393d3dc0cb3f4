"""Tax rule-set configuration.

Federal brackets, deductions, AMT parameters, and the simplified state rate
table, bundled per tax year into an immutable ``TaxYearConfig``. Engines take
a config at construction; never hardcode rates in computation functions.

Only the 2026 projection is registered. It models the scheduled TCJA sunset:
pre-2018 bracket structure, reinstated personal exemptions, roughly halved
standard deductions, lower AMT exemptions, and no SALT cap.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from equity_compass.exceptions import UnsupportedTaxYearError
from equity_compass.models.enums import FilingStatus

Bracket = tuple[Decimal | None, Decimal]


class TaxYearConfig(BaseModel):
    """Versioned rule set for one projected tax year.

    Bracket lists are ordered ``(upper_bound, rate)`` pairs; an upper bound of
    None marks the unbounded top bracket. Rates are fractions unless the field
    name says percent.
    """

    model_config = ConfigDict(frozen=True)

    tax_year: int
    label: str

    # State
    state_tax_rates: dict[str, Decimal]
    fallback_state: str = "Other"

    # Federal ordinary income
    ordinary_brackets: dict[FilingStatus, list[Bracket]]
    standard_deduction: dict[FilingStatus, Decimal]
    personal_exemption: Decimal

    # Capital gains (two-tier model keyed off the client's ordinary bracket)
    ltcg_low_rate: Decimal = Decimal("0.15")
    ltcg_high_rate: Decimal = Decimal("0.20")
    ltcg_bracket_threshold: Decimal = Decimal("33")  # Percent
    niit_rate: Decimal = Decimal("0.038")

    # AMT
    amt_exemption: dict[FilingStatus, Decimal]
    amt_phaseout_start: dict[FilingStatus, Decimal]
    amt_phaseout_rate: Decimal = Decimal("0.25")
    amt_low_rate: Decimal = Decimal("0.26")
    amt_high_rate: Decimal = Decimal("0.28")
    amt_rate_threshold: Decimal
    amt_search_step: Decimal = Decimal("1000")
    amt_search_cap: Decimal = Decimal("10000000")

    # Planning defaults
    default_withholding_rate: Decimal = Decimal("22")  # Percent
    default_base_income: Decimal = Decimal("250000")

    @model_validator(mode="after")
    def _check_tables(self) -> "TaxYearConfig":
        if self.fallback_state not in self.state_tax_rates:
            raise ValueError(f"state_tax_rates must contain fallback '{self.fallback_state}'")
        for table_name in (
            "ordinary_brackets",
            "standard_deduction",
            "amt_exemption",
            "amt_phaseout_start",
        ):
            table = getattr(self, table_name)
            missing = [s.value for s in FilingStatus if s not in table]
            if missing:
                raise ValueError(f"{table_name} missing filing statuses: {missing}")
        for status, brackets in self.ordinary_brackets.items():
            if not brackets or brackets[-1][0] is not None:
                raise ValueError(f"top {status} bracket must be unbounded")
        if self.amt_search_step <= 0:
            raise ValueError("amt_search_step must be positive")
        return self


# ---------------------------------------------------------------------------
# 2026 projection (TCJA sunset scenario)
# ---------------------------------------------------------------------------
PROJECTED_2026 = TaxYearConfig(
    tax_year=2026,
    label="2026 projected (TCJA sunset)",
    state_tax_rates={
        "CA": Decimal("0.144"),
        "NY": Decimal("0.109"),
        "TX": Decimal("0.0"),
        "FL": Decimal("0.0"),
        "WA": Decimal("0.07"),
        "MA": Decimal("0.05"),
        "NJ": Decimal("0.1075"),
        "Other": Decimal("0.05"),
    },
    ordinary_brackets={
        FilingStatus.SINGLE: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.15")),
            (Decimal("114650"), Decimal("0.25")),
            (Decimal("239200"), Decimal("0.28")),
            (Decimal("519900"), Decimal("0.33")),
            (Decimal("522000"), Decimal("0.35")),
            (None, Decimal("0.396")),
        ],
        FilingStatus.MARRIED_JOINT: [
            (Decimal("23200"), Decimal("0.10")),
            (Decimal("94300"), Decimal("0.15")),
            (Decimal("190200"), Decimal("0.25")),
            (Decimal("289900"), Decimal("0.28")),
            (Decimal("519900"), Decimal("0.33")),
            (Decimal("589150"), Decimal("0.35")),
            (None, Decimal("0.396")),
        ],
    },
    standard_deduction={
        FilingStatus.SINGLE: Decimal("8300"),
        FilingStatus.MARRIED_JOINT: Decimal("16600"),
    },
    personal_exemption=Decimal("5300"),
    amt_exemption={
        FilingStatus.SINGLE: Decimal("64400"),
        FilingStatus.MARRIED_JOINT: Decimal("100500"),
    },
    amt_phaseout_start={
        FilingStatus.SINGLE: Decimal("140300"),
        FilingStatus.MARRIED_JOINT: Decimal("280600"),
    },
    amt_rate_threshold=Decimal("220700"),
)

TAX_YEAR_CONFIGS: dict[int, TaxYearConfig] = {
    PROJECTED_2026.tax_year: PROJECTED_2026,
}

DEFAULT_TAX_YEAR = 2026


def get_tax_year_config(tax_year: int = DEFAULT_TAX_YEAR) -> TaxYearConfig:
    """Look up the registered rule set for ``tax_year``."""
    try:
        return TAX_YEAR_CONFIGS[tax_year]
    except KeyError:
        raise UnsupportedTaxYearError(tax_year, sorted(TAX_YEAR_CONFIGS)) from None
