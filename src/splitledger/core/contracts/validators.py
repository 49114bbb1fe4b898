"""
JSON Schema Record Validators

Validates persisted-state records (the storage-agnostic shape of expenses and
settlements) against the JSON Schema contracts bundled with the package.

Schemas:
- expense.json
- settlement.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Schemas live in ``schema/`` next to this module and are cached after the
    first load.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a schema by name.

        Args:
            schema_name: Schema name without extension (e.g. 'expense')

        Returns:
            Parsed schema

        Raises:
            FileNotFoundError: If the schema file is missing
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# RECORD VALIDATORS
# =============================================================================


class RecordValidator:
    """Validates one record type against its schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: If the record does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class ExpenseRecordValidator(RecordValidator):
    def __init__(self):
        super().__init__("expense")


class SettlementRecordValidator(RecordValidator):
    def __init__(self):
        super().__init__("settlement")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_expense_record(data: Dict[str, Any]) -> None:
    """
    Validate a persisted expense record.

    Raises:
        jsonschema.ValidationError: If the record does not match the schema
    """
    ExpenseRecordValidator().validate(data)


def validate_settlement_record(data: Dict[str, Any]) -> None:
    """
    Validate a persisted settlement record.

    Raises:
        jsonschema.ValidationError: If the record does not match the schema
    """
    SettlementRecordValidator().validate(data)
