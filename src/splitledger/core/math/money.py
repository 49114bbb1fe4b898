"""
Money: fixed-point amount primitives

Every monetary value in the ledger is a ``decimal.Decimal`` quantized to the
amount quantum (one cent). Binary floats are accepted only at the boundary,
for legacy inputs, and are converted through their shortest repr.

Invariants:
1. No amount is ever built with ``Decimal(float)``
2. NaN/Infinity never enter the ledger
3. Equal splits always sum back to the total exactly
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final, Iterable


# =============================================================================
# CONSTANTS
# =============================================================================

# Smallest representable currency unit
AMOUNT_QUANTUM: Final[Decimal] = Decimal("0.01")

# Tolerance for the split-sum check (absorbs drift from legacy float splits)
SPLIT_TOLERANCE: Final[Decimal] = Decimal("0.01")

ZERO: Final[Decimal] = Decimal("0.00")


# =============================================================================
# CONVERSION
# =============================================================================


def to_amount(value: object, quantum: Decimal = AMOUNT_QUANTUM) -> Decimal:
    """
    Convert a raw value into a quantized Decimal amount.

    Args:
        value: int, str, Decimal or float
        quantum: Target precision (default: one cent)

    Returns:
        Decimal rounded half-up to ``quantum``

    Raises:
        ValueError: If the value is not a finite number or is too large to
            represent at ``quantum`` precision

    Examples:
        >>> to_amount(0.1 + 0.2)
        Decimal('0.30')
        >>> to_amount("12.345")
        Decimal('12.35')
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be numeric, got bool {value!r}")

    if isinstance(value, Decimal):
        raw = value
    elif isinstance(value, float):
        raw = _decimal_from_text(repr(value))
    elif isinstance(value, (int, str)):
        raw = _decimal_from_text(str(value).strip())
    else:
        raise ValueError(f"Amount must be numeric, got {type(value).__name__}")

    if not raw.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")

    try:
        return raw.quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Result would exceed the context precision
        raise ValueError(f"Amount out of range: {value!r}") from None


def _decimal_from_text(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Cannot parse amount from {text!r}") from None


# =============================================================================
# COMPARISONS
# =============================================================================


def amounts_match(a: Decimal, b: Decimal, tolerance: Decimal = SPLIT_TOLERANCE) -> bool:
    """
    Tolerant equality: ``abs(a - b) <= tolerance``.

    Args:
        a: First amount
        b: Second amount
        tolerance: Maximum absolute difference (inclusive)

    Returns:
        True if the amounts are within tolerance of each other
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be non-negative, got {tolerance}")
    return abs(a - b) <= tolerance


def sum_amounts(values: Iterable[Decimal]) -> Decimal:
    """Exact sum starting from ZERO, so an empty input stays a Decimal."""
    total = ZERO
    for v in values:
        total += v
    return total


# =============================================================================
# EQUAL SPLIT
# =============================================================================


def split_equally(
    total: Decimal, parts: int, quantum: Decimal = AMOUNT_QUANTUM
) -> tuple[Decimal, Decimal]:
    """
    Divide ``total`` into ``parts`` equal shares rounded down to the quantum.

    The caller decides who absorbs the remainder; ``share * parts + remainder``
    always equals ``total``.

    Args:
        total: Amount to split
        parts: Number of participants (>= 1)
        quantum: Share precision

    Returns:
        (share, remainder)

    Examples:
        >>> split_equally(Decimal("100.00"), 3)
        (Decimal('33.33'), Decimal('0.01'))
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")

    share = (total / parts).quantize(quantum, rounding=ROUND_DOWN)
    remainder = total - share * parts
    return share, remainder
