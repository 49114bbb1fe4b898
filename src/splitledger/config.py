"""
Ledger configuration.

Defaults cover normal operation; ``LedgerConfig.from_env`` overlays
``SPLITLEDGER_*`` variables (a ``.env`` file in the working directory is
loaded first).
"""

import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv

from splitledger.core.domain.settlement import DEFAULT_SETTLEMENT_DESCRIPTION
from splitledger.core.math.money import SPLIT_TOLERANCE, to_amount


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LedgerConfig:
    """
    Ledger settings.

    split_tolerance: allowed |sum(split) - total| when validating expenses
    verify_conservation: check that balances sum to zero on every query
    default_settlement_description: used when a settlement has no description
    """

    split_tolerance: Decimal = SPLIT_TOLERANCE
    verify_conservation: bool = True
    default_settlement_description: str = DEFAULT_SETTLEMENT_DESCRIPTION

    def __post_init__(self):
        if self.split_tolerance < 0:
            raise ValueError(f"split_tolerance must be non-negative, got {self.split_tolerance}")

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "LedgerConfig":
        """
        Build a config from the environment.

        Variables:
            SPLITLEDGER_SPLIT_TOLERANCE: decimal, e.g. "0.01"
            SPLITLEDGER_VERIFY_CONSERVATION: "true"/"false"
            SPLITLEDGER_SETTLEMENT_DESCRIPTION: default settlement note

        Args:
            dotenv_path: explicit .env file (default: search from cwd)
        """
        load_dotenv(dotenv_path=dotenv_path)
        defaults = cls()

        tolerance = os.environ.get("SPLITLEDGER_SPLIT_TOLERANCE")
        verify = os.environ.get("SPLITLEDGER_VERIFY_CONSERVATION")
        description = os.environ.get("SPLITLEDGER_SETTLEMENT_DESCRIPTION")

        return cls(
            split_tolerance=(
                to_amount(tolerance) if tolerance else defaults.split_tolerance
            ),
            verify_conservation=(
                verify.strip().lower() in _TRUE_VALUES
                if verify is not None
                else defaults.verify_conservation
            ),
            default_settlement_description=(
                description or defaults.default_settlement_description
            ),
        )
