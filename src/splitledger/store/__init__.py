"""Ledger Entry Store: persistence interface and in-memory implementation."""

from .base import LedgerStore
from .memory import InMemoryLedgerStore

__all__ = [
    "LedgerStore",
    "InMemoryLedgerStore",
]
