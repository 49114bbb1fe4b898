"""
Error taxonomy for the ledger.

Pure components report problems through typed results carrying an
``ErrorCode``; the service edge turns those into the exceptions below.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable failure codes."""

    # Validation (client-caused, non-retryable)
    INVALID_AMOUNT = "invalid_amount"
    EMPTY_SPLIT = "empty_split"
    NOT_A_GROUP_MEMBER = "not_a_group_member"
    DUPLICATE_SPLIT_ENTRY = "duplicate_split_entry"
    SPLIT_AMOUNT_MISMATCH = "split_amount_mismatch"
    SELF_SETTLEMENT = "self_settlement"

    # Access
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"

    # Should never happen
    CONSISTENCY = "consistency"


class LedgerError(Exception):
    """Base class for every error raised by splitledger."""

    code: ErrorCode = ErrorCode.CONSISTENCY

    def __init__(self, details: str, code: ErrorCode | None = None):
        super().__init__(details)
        self.details = details
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.details}"


class ValidationFailed(LedgerError):
    """A draft or settlement request was rejected by a validator."""


class ExpenseValidationError(ValidationFailed):
    pass


class SettlementValidationError(ValidationFailed):
    pass


class ForbiddenError(LedgerError):
    """The actor may not perform the requested action."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(LedgerError):
    """A referenced group or member does not exist."""

    code = ErrorCode.NOT_FOUND


class ConsistencyError(LedgerError):
    """
    Programming or persistence bug: balances that do not sum to zero, or a
    cascading delete that left orphaned records behind.
    """

    code = ErrorCode.CONSISTENCY
