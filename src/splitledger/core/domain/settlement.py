"""
Settlement: a direct payment from one member to another

Immutable Pydantic model. A settlement is always between two different
members of the same group.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Final

from pydantic import BaseModel, Field, field_validator, model_validator

from splitledger.core.math.money import to_amount


DEFAULT_SETTLEMENT_DESCRIPTION: Final[str] = "Settlement payment"


class Settlement(BaseModel):
    """Recorded debt-settling payment."""

    id: str = Field(..., min_length=1, description="Settlement id")
    group_id: str = Field(..., min_length=1, description="Owning group")
    from_member: str = Field(..., min_length=1, description="Payer member id")
    to_member: str = Field(..., min_length=1, description="Payee member id")
    amount: Decimal = Field(..., gt=0, description="Amount paid")
    description: str = Field(DEFAULT_SETTLEMENT_DESCRIPTION, description="Free-form note")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def quantize_amount(cls, v: object) -> Decimal:
        return to_amount(v)

    @model_validator(mode="after")
    def validate_distinct_parties(self) -> "Settlement":
        """Self-settlement is never valid."""
        if self.from_member == self.to_member:
            raise ValueError(
                f"settlement {self.id}: payer and payee are the same member {self.from_member}"
            )
        return self
