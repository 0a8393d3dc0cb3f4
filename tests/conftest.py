"""Shared test fixtures for Equity Compass."""

from datetime import date
from decimal import Decimal

import pytest

from equity_compass.models.client import Client, Grant, PlannedExercise
from equity_compass.models.enums import (
    ExerciseStrategy,
    FilingStatus,
    GrantType,
    VestingScheduleType,
)

AS_OF = date(2026, 3, 1)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def ca_client() -> Client:
    """37% bracket, married filing jointly, California (14.4%), no overrides."""
    return Client(
        id="client-001",
        name="Jane Doe",
        state="CA",
        filing_status=FilingStatus.MARRIED_JOINT,
        tax_bracket=Decimal("37"),
    )


@pytest.fixture
def rsu_grant() -> Grant:
    return Grant(
        id="rsu-001",
        type=GrantType.RSU,
        ticker="ACME",
        company_name="Acme Corp",
        current_price=Decimal("100"),
        grant_date=date(2024, 1, 15),
        total_shares=Decimal("1000"),
        vesting_schedule=VestingScheduleType.CLIFF_4Y_1Y,
    )


@pytest.fixture
def iso_grant() -> Grant:
    return Grant(
        id="iso-001",
        type=GrantType.ISO,
        ticker="ACME",
        company_name="Acme Corp",
        current_price=Decimal("50"),
        strike_price=Decimal("10"),
        grant_date=date(2024, 1, 15),
        total_shares=Decimal("4000"),
        vesting_schedule=VestingScheduleType.QUARTERLY_4Y,
    )


@pytest.fixture
def iso_exercise(iso_grant: Grant) -> PlannedExercise:
    return PlannedExercise(
        id="plan-001",
        grant_id=iso_grant.id,
        grant_ticker=iso_grant.ticker,
        shares=Decimal("500"),
        exercise_date=date(2026, 2, 1),
        exercise_price=Decimal("10"),
        fmv_at_exercise=Decimal("50"),
        estimated_cost=Decimal("5000"),
        amt_exposure=Decimal("20000"),
        strategy=ExerciseStrategy.BUY_HOLD,
    )


@pytest.fixture
def portfolio_client(
    ca_client: Client, rsu_grant: Grant, iso_grant: Grant, iso_exercise: PlannedExercise
) -> Client:
    return ca_client.model_copy(
        update={"grants": [rsu_grant, iso_grant], "planned_exercises": [iso_exercise]}
    )


@pytest.fixture
def client_document() -> dict:
    """Client aggregate as saved by the web front end (camelCase keys)."""
    return {
        "id": "client-001",
        "name": "Jane Doe",
        "state": "CA",
        "filingStatus": "married_joint",
        "taxBracket": 37,
        "estimatedIncome": 300000,
        "grants": [
            {
                "id": "rsu-001",
                "type": "RSU",
                "ticker": "ACME",
                "companyName": "Acme Corp",
                "currentPrice": 100,
                "grantDate": "2024-01-15",
                "totalShares": 1000,
                "vestingSchedule": "standard_4y_1y_cliff",
                "withholdingRate": 22,
                "lastUpdated": "2025-12-01T10:00:00Z",
            },
            {
                "id": "iso-001",
                "type": "ISO",
                "ticker": "ACME",
                "companyName": "Acme Corp",
                "currentPrice": 50,
                "strikePrice": 10,
                "grantDate": "2024-01-15",
                "totalShares": 4000,
                "vestingSchedule": "standard_4y_quarterly",
                "lastUpdated": "2025-12-01T10:00:00Z",
            },
        ],
        "plannedExercises": [
            {
                "id": "plan-001",
                "grantId": "iso-001",
                "grantTicker": "ACME",
                "shares": 500,
                "exerciseDate": "2026-02-01",
                "exercisePrice": 10,
                "fmvAtExercise": 50,
                "type": "ISO",
                "amtExposure": 20000,
                "estimatedCost": 5000,
            }
        ],
    }
