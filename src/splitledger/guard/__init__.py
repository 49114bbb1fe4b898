"""Guard: validators and permission checks applied before anything is written.

- Expense Split Validator: well-formed split sets
- Settlement Validator: well-formed settle-up requests
- Membership Guard: who may act on a group
"""

from .membership import (
    GroupAction,
    GuardResult,
    MembershipGuard,
    can_add_expense,
    can_add_member,
    can_delete_group,
    can_record_settlement,
    can_remove_member,
    can_view_group,
)
from .settlement_validator import SettlementValidationResult, SettlementValidator
from .split_validator import (
    ExpenseSplitValidator,
    SplitValidationResult,
    validate_expense_draft,
)

__all__ = [
    "ExpenseSplitValidator",
    "SplitValidationResult",
    "validate_expense_draft",
    "SettlementValidator",
    "SettlementValidationResult",
    "MembershipGuard",
    "GroupAction",
    "GuardResult",
    "can_add_expense",
    "can_add_member",
    "can_delete_group",
    "can_record_settlement",
    "can_remove_member",
    "can_view_group",
]
