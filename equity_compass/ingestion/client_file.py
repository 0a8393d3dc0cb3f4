"""Client profile loader for JSON files.

Accepts the camelCase documents saved by the web front end (``taxBracket``,
``customStateTaxRate``, ...) as well as snake_case documents written by
``ClientFileLoader.save``.
"""

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pydantic import ValidationError

from equity_compass.exceptions import ClientFileError, DataValidationError
from equity_compass.models.client import Client, Grant, PlannedExercise

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

DECIMAL_FIELDS = {
    "tax_bracket",
    "estimated_income",
    "custom_state_tax_rate",
    "custom_ltcg_tax_rate",
    "current_price",
    "strike_price",
    "total_shares",
    "withholding_rate",
    "shares",
    "exercise_price",
    "fmv_at_exercise",
    "estimated_cost",
    "amt_exposure",
}

# Front-end bookkeeping fields with no meaning to the engine
IGNORED_FIELDS = {"last_updated", "type_label"}


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _decimal_or_none(value: object, field: str) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise DataValidationError(field, f"not a number: {value!r}") from None


def _normalize(record: dict) -> dict:
    """snake_case the keys and coerce numeric fields to Decimal."""
    out: dict = {}
    for key, value in record.items():
        name = _snake(key)
        if name in IGNORED_FIELDS:
            continue
        if name in DECIMAL_FIELDS:
            value = _decimal_or_none(value, name)
            if value is None:
                continue
        out[name] = value
    return out


def _records(value: object, field: str) -> list[dict]:
    """A list of JSON objects, or an empty list when the field is absent."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DataValidationError(field, "expected a list")
    for i, record in enumerate(value):
        if not isinstance(record, dict):
            raise DataValidationError(f"{field}[{i}]", "expected an object")
    return value


class ClientFileLoader:
    """Reads and writes client aggregates as JSON."""

    def parse(self, file_path: Path) -> Client:
        """Read a client JSON file into a validated ``Client``."""
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ClientFileError(str(file_path), f"not UTF-8 text: {exc.reason}") from exc
        except OSError as exc:
            raise ClientFileError(str(file_path), exc.strerror or str(exc)) from exc

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ClientFileError(str(file_path), f"invalid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ClientFileError(str(file_path), "expected a JSON object for the client")

        return self.parse_dict(raw)

    def parse_dict(self, raw: dict) -> Client:
        if not isinstance(raw, dict):
            raise DataValidationError("client", "expected an object")
        data = _normalize(raw)
        data.pop("type", None)
        grants = [
            self._parse_grant(g)
            for g in _records(data.pop("grants", None), "grants")
        ]
        plans = [
            self._parse_plan(p)
            for p in _records(data.pop("planned_exercises", None), "planned_exercises")
        ]
        try:
            return Client(**data, grants=grants, planned_exercises=plans)
        except ValidationError as exc:
            raise self._to_data_error("client", exc) from exc

    def validate(self, client: Client) -> list[str]:
        """Consistency checks that are not model constraints. Returns warnings."""
        warnings = []
        grant_ids = {g.id for g in client.grants}
        for plan in client.planned_exercises:
            if plan.grant_id not in grant_ids:
                warnings.append(
                    f"Planned exercise {plan.id} references unknown grant {plan.grant_id}"
                )
        for grant in client.grants:
            if not grant.is_iso and grant.strike_price is not None:
                warnings.append(f"Grant {grant.id}: strike price ignored for {grant.type}")
            if grant.is_iso and grant.withholding_rate is not None:
                warnings.append(f"Grant {grant.id}: withholding rate ignored for ISO")
        return warnings

    def save(self, client: Client, file_path: Path) -> None:
        """Write ``client`` as snake_case JSON."""
        try:
            file_path.write_text(client.model_dump_json(indent=2) + "\n")
        except OSError as exc:
            raise ClientFileError(str(file_path), str(exc)) from exc
        logger.info("Saved client %s to %s", client.id, file_path)

    def _parse_grant(self, record: dict) -> Grant:
        data = _normalize(record)
        try:
            return Grant(**data)
        except ValidationError as exc:
            raise self._to_data_error(f"grants[{data.get('id', '?')}]", exc) from exc

    def _parse_plan(self, record: dict) -> PlannedExercise:
        data = _normalize(record)
        data.pop("type", None)  # Always "ISO"
        try:
            return PlannedExercise(**data)
        except ValidationError as exc:
            raise self._to_data_error(
                f"planned_exercises[{data.get('id', '?')}]", exc
            ) from exc

    @staticmethod
    def _to_data_error(prefix: str, exc: ValidationError) -> DataValidationError:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        field = f"{prefix}.{loc}" if loc else prefix
        return DataValidationError(field, first["msg"])
