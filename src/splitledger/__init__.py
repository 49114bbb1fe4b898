"""
splitledger: shared-expense ledger and balance-settlement engine.

Records expenses split across group members and direct settlements between
them, derives each member's net balance and suggests settle-up payments.
"""

from splitledger.config import LedgerConfig
from splitledger.service import LedgerService

__all__ = [
    "LedgerConfig",
    "LedgerService",
]
