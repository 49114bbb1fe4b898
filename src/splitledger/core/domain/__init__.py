"""
Domain models and value objects.

Contains the ledger entities: Member, Group, Expense, Settlement, Notification.
"""

from splitledger.core.domain.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    SplitLine,
)
from splitledger.core.domain.group import Group
from splitledger.core.domain.member import Member
from splitledger.core.domain.notification import Notification, NotificationType
from splitledger.core.domain.settlement import DEFAULT_SETTLEMENT_DESCRIPTION, Settlement

__all__ = [
    # Identity
    "Member",
    "Group",
    # Ledger entries
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "SplitLine",
    "Settlement",
    "DEFAULT_SETTLEMENT_DESCRIPTION",
    # Events
    "Notification",
    "NotificationType",
]
