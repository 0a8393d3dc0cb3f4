"""Tests for grant share accounting and exercise planning."""

from datetime import date
from decimal import Decimal

import pytest

from equity_compass.engines.grant_status import GrantStatusTracker
from equity_compass.exceptions import DataValidationError, InsufficientSharesError
from equity_compass.models.client import Grant, PlannedExercise
from equity_compass.models.enums import ExerciseStrategy


@pytest.fixture
def tracker():
    return GrantStatusTracker()


def _exercise(grant_id: str, shares: str) -> PlannedExercise:
    return PlannedExercise(
        grant_id=grant_id,
        shares=Decimal(shares),
        exercise_date=date(2026, 1, 1),
        exercise_price=Decimal("10"),
        fmv_at_exercise=Decimal("50"),
        estimated_cost=Decimal(shares) * 10,
        amt_exposure=Decimal("0"),
    )


class TestGrantStatus:
    def test_no_exercises(self, tracker, rsu_grant: Grant, as_of):
        status = tracker.status(rsu_grant, [], as_of)
        assert status.total == Decimal("1000")
        assert status.vested_total == Decimal("500")
        assert status.unvested == Decimal("500")
        assert status.exercised == Decimal("0")
        assert status.available == Decimal("500")

    def test_exercises_reduce_available(self, tracker, iso_grant, iso_exercise, as_of):
        status = tracker.status(iso_grant, [iso_exercise], as_of)
        assert status.vested_total == Decimal("2000")
        assert status.exercised == Decimal("500")
        assert status.available == Decimal("1500")

    def test_other_grant_exercises_ignored(self, tracker, iso_grant, as_of):
        status = tracker.status(iso_grant, [_exercise("someone-else", "900")], as_of)
        assert status.exercised == Decimal("0")

    def test_available_never_negative(self, tracker, iso_grant, as_of):
        status = tracker.status(iso_grant, [_exercise(iso_grant.id, "3500")], as_of)
        assert status.exercised == Decimal("3500")
        assert status.available == Decimal("0")

    def test_before_first_vest(self, tracker, iso_grant):
        status = tracker.status(iso_grant, [], date(2024, 2, 1))
        assert status.vested_total == Decimal("0")
        assert status.unvested == Decimal("4000")


class TestPlanExercise:
    def test_buy_hold_carries_bargain_element(self, tracker, iso_grant, as_of):
        plan = tracker.plan_exercise(iso_grant, Decimal("1000"), [], as_of=as_of)
        assert plan.grant_id == iso_grant.id
        assert plan.exercise_date == as_of
        assert plan.exercise_price == Decimal("10")
        assert plan.fmv_at_exercise == Decimal("50")
        assert plan.estimated_cost == Decimal("10000")
        assert plan.amt_exposure == Decimal("40000")
        assert plan.strategy == ExerciseStrategy.BUY_HOLD

    def test_cashless_has_no_amt_exposure(self, tracker, iso_grant, as_of):
        plan = tracker.plan_exercise(
            iso_grant, Decimal("1000"), [], strategy=ExerciseStrategy.CASHLESS, as_of=as_of
        )
        assert plan.amt_exposure == Decimal("0")
        assert plan.estimated_cost == Decimal("10000")

    def test_explicit_exercise_date(self, tracker, iso_grant, as_of):
        plan = tracker.plan_exercise(
            iso_grant, Decimal("10"), [], exercise_date=date(2026, 6, 30), as_of=as_of
        )
        assert plan.exercise_date == date(2026, 6, 30)

    def test_more_than_available(self, tracker, iso_grant, iso_exercise, as_of):
        with pytest.raises(InsufficientSharesError) as exc_info:
            tracker.plan_exercise(iso_grant, Decimal("1501"), [iso_exercise], as_of=as_of)
        assert exc_info.value.available == Decimal("1500")
        assert exc_info.value.requested == Decimal("1501")

    def test_exactly_available(self, tracker, iso_grant, iso_exercise, as_of):
        plan = tracker.plan_exercise(iso_grant, Decimal("1500"), [iso_exercise], as_of=as_of)
        assert plan.shares == Decimal("1500")

    def test_rsu_rejected(self, tracker, rsu_grant, as_of):
        with pytest.raises(DataValidationError, match="not ISO"):
            tracker.plan_exercise(rsu_grant, Decimal("10"), [], as_of=as_of)

    def test_non_positive_shares_rejected(self, tracker, iso_grant, as_of):
        with pytest.raises(DataValidationError) as exc_info:
            tracker.plan_exercise(iso_grant, Decimal("0"), [], as_of=as_of)
        assert exc_info.value.field == "shares"
