"""Derived report models produced by the calculation engines."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from equity_compass.models.enums import DispositionType, GrantType


class EffectiveRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    state_rate: Decimal
    fed_ltcg_rate: Decimal


class VestingTaxBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    federal: Decimal = Decimal("0")
    state: Decimal = Decimal("0")
    niit: Decimal = Decimal("0")
    total_liability: Decimal = Decimal("0")


class VestingEvent(BaseModel):
    """One vesting tranche. Regenerated on every query, never persisted."""

    model_config = ConfigDict(frozen=True)

    grant_id: str
    grant_type: GrantType
    vest_date: date
    shares: Decimal
    gross_value: Decimal
    withholding_amount: Decimal
    elected_withholding_rate: Decimal  # Percent
    net_shares: Decimal
    net_value: Decimal
    shares_sold_to_cover: Decimal | None  # None when the price is zero
    tax_gap: Decimal
    amt_exposure: Decimal
    tax_breakdown: VestingTaxBreakdown
    is_past: bool


class GrantStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Decimal
    vested_total: Decimal
    unvested: Decimal
    exercised: Decimal
    available: Decimal


class TaxBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    fed_rate: Decimal
    fed_amount: Decimal
    niit_rate: Decimal
    niit_amount: Decimal
    state_rate: Decimal
    state_amount: Decimal
    total_tax: Decimal


class ISOScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    disposition: DispositionType
    shares: Decimal
    strike_price: Decimal
    fmv_at_exercise: Decimal
    sale_price: Decimal
    exercise_cost: Decimal
    sale_proceeds: Decimal
    bargain_element: Decimal
    ordinary_income: Decimal
    capital_gain: Decimal
    amt_preference: Decimal
    taxes: TaxBreakdown
    net_profit: Decimal


class DispositionComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    qualified: ISOScenario
    disqualified: ISOScenario

    @property
    def net_difference(self) -> Decimal:
        """Extra net profit from holding for a qualifying disposition."""
        return self.qualified.net_profit - self.disqualified.net_profit


class CashlessExerciseEstimate(BaseModel):
    """Exercise-and-sell-immediately estimate; always a disqualifying disposition."""

    model_config = ConfigDict(frozen=True)

    shares: Decimal
    total_proceeds: Decimal
    total_cost: Decimal
    gross_profit: Decimal
    estimated_tax_rate: Decimal
    estimated_taxes: Decimal
    net_cash: Decimal


class AMTRoomReport(BaseModel):
    """Result of the AMT crossover search.

    ``room`` is None when no crossover was found below the search cap; the
    client can realize an effectively unbounded spread under the model.
    """

    model_config = ConfigDict(frozen=True)

    tax_year: int
    room: Decimal | None
    breakeven_found: bool
    regular_taxable_income: Decimal
    regular_tax: Decimal
    tentative_minimum_tax: Decimal
    projected_rsu_income: Decimal
    base_income: Decimal
    total_gross_income: Decimal
    std_deduction: Decimal
    personal_exemptions: Decimal
    effective_deduction: Decimal
    is_itemizing: bool
    estimated_state_tax: Decimal

    @property
    def is_indeterminate(self) -> bool:
        return not self.breakeven_found


class ClientSummary(BaseModel):
    """Portfolio overview across all of a client's grants."""

    model_config = ConfigDict(frozen=True)

    grant_count: int
    upcoming_gross_value: Decimal
    upcoming_tax_gap: Decimal
    upcoming_shares: Decimal
    upcoming_net_value: Decimal
    unvested_rsu_value: Decimal
    planned_amt_exposure: Decimal
    planned_exercise_cost: Decimal
