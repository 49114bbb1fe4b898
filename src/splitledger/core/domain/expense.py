"""
Expense: a purchase paid by one member and split across members

Two models live here:
- ExpenseDraft: what a client submits; left unconstrained so that the
  split validator can report every problem as a typed result
- Expense: an accepted, immutable ledger entry

Amounts are fixed-point Decimals (see core.math.money).
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from splitledger.core.math.money import split_equally, to_amount


# =============================================================================
# ENUMS
# =============================================================================


class ExpenseCategory(str, Enum):
    """Expense category. Unknown values fall back to OTHER."""

    GENERAL = "General"
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    TRAVEL = "Travel"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value: object) -> "ExpenseCategory":
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.OTHER


def _coerce_category(v: object) -> ExpenseCategory:
    if v is None or v == "":
        return ExpenseCategory.GENERAL
    if isinstance(v, ExpenseCategory):
        return v
    return ExpenseCategory(v)


# =============================================================================
# SPLIT LINE
# =============================================================================


class SplitLine(BaseModel):
    """One (member, share) pair of an expense."""

    member_id: str = Field(..., min_length=1, description="Participant member id")
    amount: Decimal = Field(..., ge=0, description="Participant share")

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def quantize_amount(cls, v: object) -> Decimal:
        return to_amount(v)


# =============================================================================
# DRAFT
# =============================================================================


class ExpenseDraft(BaseModel):
    """
    Unvalidated expense as submitted by a client.

    No business rules are enforced here: a non-positive amount, an empty or
    mismatched split are all representable and are rejected later by
    ExpenseSplitValidator with a specific error code.
    """

    description: str = Field(..., description="What the money was spent on")
    amount: Decimal = Field(..., description="Total amount")
    paid_by: str = Field(..., min_length=1, description="Payer member id")
    category: ExpenseCategory = Field(ExpenseCategory.GENERAL, description="Category")
    splits: tuple[SplitLine, ...] = Field(default=(), description="Proposed split set")

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def quantize_amount(cls, v: object) -> Decimal:
        return to_amount(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: object) -> ExpenseCategory:
        return _coerce_category(v)

    @classmethod
    def equal_split(
        cls,
        description: str,
        amount: object,
        paid_by: str,
        participants: Sequence[str],
        category: object = ExpenseCategory.GENERAL,
    ) -> "ExpenseDraft":
        """
        Build a draft splitting ``amount`` equally across ``participants``.

        Each share is rounded down to the cent. The remainder goes to the payer
        when the payer participates, otherwise to the first participant, so
        the split always sums to the total exactly.

        Args:
            description: Expense description
            amount: Total amount (any input accepted by to_amount)
            paid_by: Payer member id
            participants: Selected member ids, in selection order
            category: Expense category

        Returns:
            ExpenseDraft with one SplitLine per distinct participant
        """
        total = to_amount(amount)
        selected = list(dict.fromkeys(participants))

        # Nothing sensible to split: let the validator report it
        if not selected or total <= 0:
            return cls(
                description=description,
                amount=total,
                paid_by=paid_by,
                category=category,
                splits=(),
            )

        share, remainder = split_equally(total, len(selected))
        designated = paid_by if paid_by in selected else selected[0]

        splits = tuple(
            SplitLine(
                member_id=member_id,
                amount=share + remainder if member_id == designated else share,
            )
            for member_id in selected
        )
        return cls(
            description=description,
            amount=total,
            paid_by=paid_by,
            category=category,
            splits=splits,
        )


# =============================================================================
# EXPENSE
# =============================================================================


class Expense(BaseModel):
    """
    Accepted ledger entry.

    Immutable (frozen=True); there is no edit or delete path. Construction
    re-checks the structural invariants (positive amount, non-empty split,
    unique participants); the tolerance-based split-sum rule belongs to the
    validator.
    """

    id: str = Field(..., min_length=1, description="Expense id")
    group_id: str = Field(..., min_length=1, description="Owning group")
    description: str = Field(..., description="What the money was spent on")
    amount: Decimal = Field(..., gt=0, description="Total amount paid")
    paid_by: str = Field(..., min_length=1, description="Payer member id")
    category: ExpenseCategory = Field(ExpenseCategory.GENERAL, description="Category")
    splits: tuple[SplitLine, ...] = Field(..., min_length=1, description="Split set")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def quantize_amount(cls, v: object) -> Decimal:
        return to_amount(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: object) -> ExpenseCategory:
        return _coerce_category(v)

    @model_validator(mode="after")
    def validate_unique_participants(self) -> "Expense":
        ids = [line.member_id for line in self.splits]
        if len(set(ids)) != len(ids):
            raise ValueError(f"expense {self.id} lists a participant more than once")
        return self

    def participants(self) -> tuple[str, ...]:
        return tuple(line.member_id for line in self.splits)

    def share_of(self, member_id: str) -> Decimal:
        """Share owed by ``member_id`` (zero if not a participant)."""
        for line in self.splits:
            if line.member_id == member_id:
                return line.amount
        return Decimal("0.00")
