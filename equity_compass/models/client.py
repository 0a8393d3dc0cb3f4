"""Client, grant, and planned exercise models."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from equity_compass.models.enums import (
    ExerciseStrategy,
    FilingStatus,
    GrantType,
    VestingScheduleType,
)


def _new_id() -> str:
    return str(uuid4())


class Grant(BaseModel):
    """An equity award held by a client.

    ``strike_price`` is required for ISO grants and ignored for RSUs.
    ``withholding_rate`` is the elected withholding percent for RSUs; when
    absent the rule set's default (22%) applies.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    type: GrantType
    ticker: str = ""  # Empty for private companies
    company_name: str = ""
    current_price: Decimal = Field(ge=0)
    strike_price: Decimal | None = Field(default=None, ge=0)
    grant_date: date
    total_shares: Decimal = Field(gt=0)
    vesting_schedule: VestingScheduleType = VestingScheduleType.CLIFF_4Y_1Y
    withholding_rate: Decimal | None = Field(default=None, ge=0, le=100)

    @model_validator(mode="after")
    def _check_strike(self) -> "Grant":
        if self.type == GrantType.ISO and self.strike_price is None:
            raise ValueError("strike_price is required for ISO grants")
        return self

    @property
    def is_iso(self) -> bool:
        return self.type == GrantType.ISO

    @property
    def spread_per_share(self) -> Decimal:
        """Current bargain element per share; zero for RSUs and underwater options."""
        if not self.is_iso or self.strike_price is None:
            return Decimal("0")
        return max(self.current_price - self.strike_price, Decimal("0"))

    @property
    def display_name(self) -> str:
        return self.ticker or self.company_name or self.id


class PlannedExercise(BaseModel):
    """A recorded decision to exercise shares of an ISO grant."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    grant_id: str
    grant_ticker: str = ""
    shares: Decimal = Field(gt=0)
    exercise_date: date
    exercise_price: Decimal = Field(ge=0)  # Strike
    fmv_at_exercise: Decimal = Field(ge=0)
    estimated_cost: Decimal = Field(ge=0)
    amt_exposure: Decimal = Field(ge=0)
    strategy: ExerciseStrategy = ExerciseStrategy.BUY_HOLD

    @property
    def bargain_element(self) -> Decimal:
        return max(self.fmv_at_exercise - self.exercise_price, Decimal("0")) * self.shares


class Client(BaseModel):
    """An advisor's client: tax profile plus equity holdings.

    ``custom_state_tax_rate`` and ``custom_ltcg_tax_rate`` are percents.
    When set (including 0) they override the table lookups.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str = ""
    state: str = "CA"
    filing_status: FilingStatus = FilingStatus.SINGLE
    tax_bracket: Decimal = Field(ge=0, le=100)  # Federal ordinary bracket, percent
    estimated_income: Decimal | None = Field(default=None, ge=0)
    custom_state_tax_rate: Decimal | None = Field(default=None, ge=0, le=100)
    custom_ltcg_tax_rate: Decimal | None = Field(default=None, ge=0, le=100)
    grants: list[Grant] = Field(default_factory=list)
    planned_exercises: list[PlannedExercise] = Field(default_factory=list)

    def get_grant(self, grant_id: str) -> Grant | None:
        for grant in self.grants:
            if grant.id == grant_id:
                return grant
        return None

    def exercises_for(self, grant_id: str) -> list[PlannedExercise]:
        return [p for p in self.planned_exercises if p.grant_id == grant_id]

    def with_planned_exercise(self, plan: PlannedExercise) -> "Client":
        """Return a copy of this client with ``plan`` appended."""
        return self.model_copy(
            update={"planned_exercises": [*self.planned_exercises, plan]}
        )
