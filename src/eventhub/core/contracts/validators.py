"""
JSON Schema contracts for persisted aggregate records

Repositories store the ``to_record()`` projection of an aggregate. Before a
record is turned back into a typed aggregate (``from_record``) it is checked
against the formal contract of that aggregate.

Schemas (``schema/*.json``, Draft 2020-12):
- payment.json
- ticket.json
- event_attendee.json
- group.json
- group_member.json
- notification_template.json
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for JSON Schema files.

    Looks up schemas in the ``schema/`` directory shipped with this package.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> list[str]:
        """Names of all schemas in the directory (without extension)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'payment')

        Returns:
            The loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation of the schema itself
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for record contract validators.

    Wraps a Draft 2020-12 validator with date-time format checking enabled.
    """

    def __init__(self, schema_name: str):
        """
        Args:
            schema_name: Name of the schema to validate against
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(
            self.schema, format_checker=Draft202012Validator.FORMAT_CHECKER
        )

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate a record.

        Raises:
            ValidationError: If the record does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Check validity without raising."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Iterate over every validation error of ``data``."""
        return self.validator.iter_errors(data)


class PaymentRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("payment")


class TicketRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("ticket")


class EventAttendeeRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("event_attendee")


class GroupRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("group")


class GroupMemberRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("group_member")


class NotificationTemplateRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("notification_template")


@lru_cache(maxsize=None)
def validator_for(schema_name: str) -> ContractValidator:
    """
    Cached validator for a schema name.

    Raises:
        ValueError: If ``schema_name`` is empty
        FileNotFoundError: If no such schema exists
    """
    if not schema_name:
        raise ValueError("Aggregate has no record schema")
    return ContractValidator(schema_name)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_payment_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid payment record."""
    validator_for("payment").validate(data)


def validate_ticket_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid ticket record."""
    validator_for("ticket").validate(data)


def validate_event_attendee_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid event attendee record."""
    validator_for("event_attendee").validate(data)


def validate_group_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid group record."""
    validator_for("group").validate(data)


def validate_group_member_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid group member record."""
    validator_for("group_member").validate(data)


def validate_notification_template_record(data: Dict[str, Any]) -> None:
    """Raises ValidationError if ``data`` is not a valid notification template record."""
    validator_for("notification_template").validate(data)
