"""
Record mapping between domain models and the persisted-state shape.

Records use camelCase keys, decimal strings for amounts and ISO-8601
timestamps, so any storage engine can hold them without binary floats.
Every conversion is checked against the JSON Schema contract.
"""

from datetime import datetime
from typing import Any, Dict

from splitledger.core.contracts.validators import (
    validate_expense_record,
    validate_settlement_record,
)
from splitledger.core.domain import Expense, Settlement, SplitLine


def expense_to_record(expense: Expense) -> Dict[str, Any]:
    record = {
        "id": expense.id,
        "groupId": expense.group_id,
        "description": expense.description,
        "amount": str(expense.amount),
        "paidBy": expense.paid_by,
        "category": expense.category.value,
        "splitBetween": [
            {"memberId": line.member_id, "amount": str(line.amount)}
            for line in expense.splits
        ],
        "createdAt": expense.created_at.isoformat(),
    }
    validate_expense_record(record)
    return record


def expense_from_record(record: Dict[str, Any]) -> Expense:
    """
    Rebuild an Expense from its record.

    Raises:
        jsonschema.ValidationError: If the record violates the contract
        pydantic.ValidationError: If the record violates model invariants
    """
    validate_expense_record(record)
    return Expense(
        id=record["id"],
        group_id=record["groupId"],
        description=record["description"],
        amount=record["amount"],
        paid_by=record["paidBy"],
        category=record["category"],
        splits=tuple(
            SplitLine(member_id=line["memberId"], amount=line["amount"])
            for line in record["splitBetween"]
        ),
        created_at=datetime.fromisoformat(record["createdAt"]),
    )


def settlement_to_record(settlement: Settlement) -> Dict[str, Any]:
    record = {
        "id": settlement.id,
        "groupId": settlement.group_id,
        "from": settlement.from_member,
        "to": settlement.to_member,
        "amount": str(settlement.amount),
        "description": settlement.description,
        "createdAt": settlement.created_at.isoformat(),
    }
    validate_settlement_record(record)
    return record


def settlement_from_record(record: Dict[str, Any]) -> Settlement:
    validate_settlement_record(record)
    return Settlement(
        id=record["id"],
        group_id=record["groupId"],
        from_member=record["from"],
        to_member=record["to"],
        amount=record["amount"],
        description=record["description"],
        created_at=datetime.fromisoformat(record["createdAt"]),
    )
