"""
Record Contract Module

Persisted-state records for expenses and settlements, validated against
bundled JSON Schema contracts.
"""

from .records import (
    expense_from_record,
    expense_to_record,
    settlement_from_record,
    settlement_to_record,
)
from .validators import (
    ExpenseRecordValidator,
    RecordValidator,
    SchemaLoader,
    SettlementRecordValidator,
    validate_expense_record,
    validate_settlement_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "RecordValidator",
    "ExpenseRecordValidator",
    "SettlementRecordValidator",
    # Functions
    "validate_expense_record",
    "validate_settlement_record",
    "expense_to_record",
    "expense_from_record",
    "settlement_to_record",
    "settlement_from_record",
]
