"""Ledger: balance aggregation and settle-up suggestions."""

from .balances import (
    assert_conservation,
    balance_total,
    check_conservation,
    compute_balances,
)
from .suggestions import SettlementSuggestion, suggest

__all__ = [
    "compute_balances",
    "balance_total",
    "check_conservation",
    "assert_conservation",
    "SettlementSuggestion",
    "suggest",
]
