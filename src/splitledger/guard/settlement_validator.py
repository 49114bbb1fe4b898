"""Settlement Validator

Checks a settle-up request before it becomes a Settlement:

1. amount > 0                      → INVALID_AMOUNT
2. payer != payee                  → SELF_SETTLEMENT
3. payer and payee in the group    → NOT_A_GROUP_MEMBER
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from splitledger.config import LedgerConfig
from splitledger.core.domain import Group, Settlement
from splitledger.core.math.money import to_amount
from splitledger.errors import ErrorCode


@dataclass(frozen=True)
class SettlementValidationResult:
    """Outcome of a settlement request validation."""

    accepted: bool
    error: Optional[ErrorCode]
    details: str
    settlement: Optional[Settlement] = None


class SettlementValidator:
    def __init__(self, config: LedgerConfig | None = None):
        self.config = config or LedgerConfig()

    def validate(
        self,
        payer_id: str,
        group: Group,
        payee_id: str,
        amount: object,
        description: str = "",
        settlement_id: str | None = None,
        now: datetime | None = None,
    ) -> SettlementValidationResult:
        """Validate a payment from ``payer_id`` to ``payee_id`` inside ``group``.

        Returns:
            SettlementValidationResult; ``settlement`` is set when accepted
        """
        try:
            value = to_amount(amount)
        except ValueError as e:
            return self._rejected(ErrorCode.INVALID_AMOUNT, str(e))

        if value <= 0:
            return self._rejected(
                ErrorCode.INVALID_AMOUNT, f"amount must be positive, got {value}"
            )

        if payer_id == payee_id:
            return self._rejected(
                ErrorCode.SELF_SETTLEMENT, f"member {payer_id} cannot settle with themselves"
            )

        for member_id in (payer_id, payee_id):
            if not group.has_member(member_id):
                return self._rejected(
                    ErrorCode.NOT_A_GROUP_MEMBER,
                    f"{member_id} is not a member of group {group.id}",
                )

        settlement = Settlement(
            id=settlement_id or uuid.uuid4().hex,
            group_id=group.id,
            from_member=payer_id,
            to_member=payee_id,
            amount=value,
            description=description.strip() or self.config.default_settlement_description,
            created_at=now or datetime.now(timezone.utc),
        )
        return SettlementValidationResult(
            accepted=True,
            error=None,
            details=f"PASS: {payer_id} -> {payee_id} {value}",
            settlement=settlement,
        )

    def _rejected(self, error: ErrorCode, details: str) -> SettlementValidationResult:
        return SettlementValidationResult(accepted=False, error=error, details=details)
