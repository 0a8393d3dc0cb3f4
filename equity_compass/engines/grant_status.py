"""Grant share accounting and exercise planning."""

import logging
from datetime import date
from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.vesting import VestingScheduleGenerator, is_past
from equity_compass.exceptions import DataValidationError, InsufficientSharesError
from equity_compass.models.client import Grant, PlannedExercise
from equity_compass.models.enums import ExerciseStrategy
from equity_compass.models.reports import GrantStatus

logger = logging.getLogger(__name__)


class GrantStatusTracker:
    """Derives vested, unvested, exercised, and available shares for a grant."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.vesting = VestingScheduleGenerator(self.config)

    def status(
        self,
        grant: Grant,
        planned_exercises: list[PlannedExercise],
        as_of: date | None = None,
    ) -> GrantStatus:
        """Partition the grant's schedule at ``as_of`` and net out exercises.

        ``available`` is clamped at zero. Exercises above the vested total are
        a caller error; they never produce a negative count here.
        """
        as_of = as_of or date.today()
        vested = Decimal("0")
        unvested = Decimal("0")
        for vest_date, shares in self.vesting.tranches(grant):
            if is_past(vest_date, as_of):
                vested += shares
            else:
                unvested += shares

        exercised = sum(
            (p.shares for p in planned_exercises if p.grant_id == grant.id),
            Decimal("0"),
        )
        if exercised > vested:
            logger.warning(
                "Grant %s: exercised shares %s exceed vested shares %s",
                grant.id, exercised, vested,
            )

        return GrantStatus(
            total=grant.total_shares,
            vested_total=vested,
            unvested=unvested,
            exercised=exercised,
            available=max(vested - exercised, Decimal("0")),
        )

    def plan_exercise(
        self,
        grant: Grant,
        shares: Decimal,
        planned_exercises: list[PlannedExercise],
        strategy: ExerciseStrategy = ExerciseStrategy.BUY_HOLD,
        exercise_date: date | None = None,
        as_of: date | None = None,
    ) -> PlannedExercise:
        """Record a decision to exercise ``shares`` of an ISO grant.

        Exercise price and FMV are taken from the grant. A cashless exercise
        is a same-year disqualifying disposition, so it carries no AMT
        exposure; buy-and-hold carries the full bargain element.
        """
        as_of = as_of or date.today()
        if not grant.is_iso:
            raise DataValidationError("grant", f"grant {grant.id} is {grant.type}, not ISO")
        if shares <= 0:
            raise DataValidationError("shares", f"must be positive, got {shares}")

        status = self.status(grant, planned_exercises, as_of)
        if shares > status.available:
            raise InsufficientSharesError(grant.id, shares, status.available)

        strike = grant.strike_price
        amt_exposure = (
            grant.spread_per_share * shares
            if strategy == ExerciseStrategy.BUY_HOLD
            else Decimal("0")
        )

        plan = PlannedExercise(
            grant_id=grant.id,
            grant_ticker=grant.ticker,
            shares=shares,
            exercise_date=exercise_date or as_of,
            exercise_price=strike,
            fmv_at_exercise=grant.current_price,
            estimated_cost=shares * strike,
            amt_exposure=amt_exposure,
            strategy=strategy,
        )
        logger.info(
            "Planned %s exercise of %s shares on grant %s (cost=%s, amt_exposure=%s)",
            strategy.value, shares, grant.id, plan.estimated_cost, amt_exposure,
        )
        return plan
