"""Unit tests for the client profile loader."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from equity_compass.exceptions import ClientFileError, DataValidationError
from equity_compass.ingestion.client_file import ClientFileLoader
from equity_compass.models.enums import (
    ExerciseStrategy,
    FilingStatus,
    GrantType,
    VestingScheduleType,
)


@pytest.fixture
def loader():
    return ClientFileLoader()


@pytest.fixture
def client_path(tmp_path: Path, client_document: dict) -> Path:
    path = tmp_path / "client.json"
    path.write_text(json.dumps(client_document))
    return path


class TestParse:
    def test_camel_case_document(self, loader, client_path: Path):
        client = loader.parse(client_path)
        assert client.id == "client-001"
        assert client.filing_status == FilingStatus.MARRIED_JOINT
        assert client.tax_bracket == Decimal("37")
        assert client.estimated_income == Decimal("300000")
        assert len(client.grants) == 2

        rsu, iso = client.grants
        assert rsu.type == GrantType.RSU
        assert rsu.company_name == "Acme Corp"
        assert rsu.withholding_rate == Decimal("22")
        assert iso.vesting_schedule == VestingScheduleType.QUARTERLY_4Y
        assert iso.strike_price == Decimal("10")

        plan = client.planned_exercises[0]
        assert plan.grant_id == "iso-001"
        assert plan.fmv_at_exercise == Decimal("50")
        assert plan.strategy == ExerciseStrategy.BUY_HOLD

    def test_float_values_become_exact_decimals(self, loader, client_document: dict):
        client_document["grants"][0]["currentPrice"] = 123.45
        client = loader.parse_dict(client_document)
        assert client.grants[0].current_price == Decimal("123.45")

    def test_empty_optional_number_is_absent(self, loader, client_document: dict):
        client_document["customStateTaxRate"] = ""
        client = loader.parse_dict(client_document)
        assert client.custom_state_tax_rate is None

    def test_zero_override_is_kept(self, loader, client_document: dict):
        client_document["customStateTaxRate"] = 0
        client = loader.parse_dict(client_document)
        assert client.custom_state_tax_rate == Decimal("0")

    def test_missing_file(self, loader, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            loader.parse(tmp_path / "nope.json")

    def test_invalid_json(self, loader, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ClientFileError, match="invalid JSON"):
            loader.parse(path)

    def test_non_object_document(self, loader, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ClientFileError, match="JSON object"):
            loader.parse(path)

    def test_iso_without_strike(self, loader, client_document: dict):
        del client_document["grants"][1]["strikePrice"]
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field.startswith("grants[iso-001]")

    def test_non_numeric_value(self, loader, client_document: dict):
        client_document["taxBracket"] = "high"
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field == "tax_bracket"

    def test_client_level_error(self, loader, client_document: dict):
        client_document["filingStatus"] = "head_of_household"
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field == "client.filing_status"

    def test_null_grant_entry(self, loader, client_document: dict):
        client_document["grants"].append(None)
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field == "grants[2]"

    def test_grants_must_be_a_list(self, loader, client_document: dict):
        client_document["grants"] = {"id": "x"}
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field == "grants"

    def test_planned_exercise_must_be_an_object(self, loader, client_document: dict):
        client_document["plannedExercises"] = ["plan-001"]
        with pytest.raises(DataValidationError) as exc_info:
            loader.parse_dict(client_document)
        assert exc_info.value.field == "planned_exercises[0]"

    def test_null_grants_means_none(self, loader, client_document: dict):
        client_document["grants"] = None
        client_document["plannedExercises"] = None
        client = loader.parse_dict(client_document)
        assert client.grants == []
        assert client.planned_exercises == []

    def test_non_utf8_file(self, loader, tmp_path: Path):
        path = tmp_path / "client.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(ClientFileError, match="not UTF-8"):
            loader.parse(path)

    def test_directory_path(self, loader, tmp_path: Path):
        with pytest.raises(ClientFileError) as exc_info:
            loader.parse(tmp_path)
        assert exc_info.value.file_path == str(tmp_path)


class TestValidate:
    def test_clean_document(self, loader, client_document: dict):
        assert loader.validate(loader.parse_dict(client_document)) == []

    def test_unknown_grant_reference(self, loader, client_document: dict):
        client_document["plannedExercises"][0]["grantId"] = "ghost"
        warnings = loader.validate(loader.parse_dict(client_document))
        assert len(warnings) == 1
        assert "unknown grant ghost" in warnings[0]

    def test_ignored_fields(self, loader, client_document: dict):
        client_document["grants"][0]["strikePrice"] = 5
        client_document["grants"][1]["withholdingRate"] = 30
        warnings = loader.validate(loader.parse_dict(client_document))
        assert any("strike price ignored" in w for w in warnings)
        assert any("withholding rate ignored" in w for w in warnings)


class TestSave:
    def test_round_trip(self, loader, client_path: Path, tmp_path: Path):
        client = loader.parse(client_path)
        out = tmp_path / "saved.json"
        loader.save(client, out)
        assert loader.parse(out) == client

    def test_saved_as_snake_case(self, loader, client_path: Path, tmp_path: Path):
        out = tmp_path / "saved.json"
        loader.save(loader.parse(client_path), out)
        saved = json.loads(out.read_text())
        assert "tax_bracket" in saved
        assert "planned_exercises" in saved
