"""
Core math for splitledger

Fixed-point money primitives shared by models, validators and the aggregator.
"""

from splitledger.core.math.money import (
    AMOUNT_QUANTUM,
    SPLIT_TOLERANCE,
    ZERO,
    amounts_match,
    split_equally,
    sum_amounts,
    to_amount,
)

__all__ = [
    "AMOUNT_QUANTUM",
    "SPLIT_TOLERANCE",
    "ZERO",
    "amounts_match",
    "split_equally",
    "sum_amounts",
    "to_amount",
]
