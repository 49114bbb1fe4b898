"""Expense Split Validator

Turns an ExpenseDraft into an immutable Expense, or reports the first rule
it breaks:

1. amount > 0                                  → INVALID_AMOUNT
2. split set non-empty                         → EMPTY_SPLIT
3. payer and every participant in the group    → NOT_A_GROUP_MEMBER
4. each participant listed once                → DUPLICATE_SPLIT_ENTRY
5. |sum(shares) - amount| <= tolerance         → SPLIT_AMOUNT_MISMATCH

Stateless; appending the accepted expense is the caller's job.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from splitledger.config import LedgerConfig
from splitledger.core.domain import Expense, ExpenseDraft, Group
from splitledger.core.math.money import amounts_match, sum_amounts
from splitledger.errors import ErrorCode


@dataclass(frozen=True)
class SplitValidationResult:
    """Outcome of an expense draft validation."""

    accepted: bool
    error: Optional[ErrorCode]
    details: str

    # Set only when accepted
    expense: Optional[Expense] = None


class ExpenseSplitValidator:
    """Validates expense drafts against a group."""

    def __init__(self, config: LedgerConfig | None = None):
        self.config = config or LedgerConfig()

    def validate(
        self,
        draft: ExpenseDraft,
        group: Group,
        expense_id: str | None = None,
        now: datetime | None = None,
    ) -> SplitValidationResult:
        """Validate ``draft`` for ``group``.

        Args:
            draft: expense as submitted
            group: target group (membership snapshot)
            expense_id: id for the new expense (default: random uuid4 hex)
            now: creation timestamp (default: current UTC time)

        Returns:
            SplitValidationResult; ``expense`` is set when accepted
        """
        # 1. Amount
        if draft.amount <= 0:
            return self._rejected(
                ErrorCode.INVALID_AMOUNT,
                f"amount must be positive, got {draft.amount}",
            )

        # 2. Non-empty split
        if not draft.splits:
            return self._rejected(ErrorCode.EMPTY_SPLIT, "split set is empty")

        # 3. Membership
        if not group.has_member(draft.paid_by):
            return self._rejected(
                ErrorCode.NOT_A_GROUP_MEMBER,
                f"payer {draft.paid_by} is not a member of group {group.id}",
            )
        outsiders = [line.member_id for line in draft.splits if not group.has_member(line.member_id)]
        if outsiders:
            return self._rejected(
                ErrorCode.NOT_A_GROUP_MEMBER,
                f"not members of group {group.id}: {', '.join(outsiders)}",
            )

        # 4. Duplicates
        seen: set[str] = set()
        for line in draft.splits:
            if line.member_id in seen:
                return self._rejected(
                    ErrorCode.DUPLICATE_SPLIT_ENTRY,
                    f"member {line.member_id} appears more than once in the split",
                )
            seen.add(line.member_id)

        # 5. Split sum
        split_total = sum_amounts(line.amount for line in draft.splits)
        if not amounts_match(split_total, draft.amount, self.config.split_tolerance):
            return self._rejected(
                ErrorCode.SPLIT_AMOUNT_MISMATCH,
                f"split sums to {split_total}, expense amount is {draft.amount}",
            )

        expense = Expense(
            id=expense_id or uuid.uuid4().hex,
            group_id=group.id,
            description=draft.description,
            amount=draft.amount,
            paid_by=draft.paid_by,
            category=draft.category,
            splits=draft.splits,
            created_at=now or datetime.now(timezone.utc),
        )
        return SplitValidationResult(
            accepted=True,
            error=None,
            details=f"PASS: {len(draft.splits)} split lines, total={draft.amount}",
            expense=expense,
        )

    def _rejected(self, error: ErrorCode, details: str) -> SplitValidationResult:
        return SplitValidationResult(accepted=False, error=error, details=details)


def validate_expense_draft(
    draft: ExpenseDraft, group: Group, config: LedgerConfig | None = None
) -> SplitValidationResult:
    """Validate a draft with a throwaway validator."""
    return ExpenseSplitValidator(config).validate(draft, group)
