"""
Balance Aggregator

Folds a group's expenses and settlements into one signed net balance per
member:

- positive: the group owes this member
- negative: this member owes the group

The fold is a pure function of its inputs, so balances are recomputed on
every request and never cached.

Conservation:
    every expense adds +amount to its payer and -amount across its split
    lines; every settlement moves the same amount from payer to payee.
    A fully populated balance map therefore sums to zero, up to the split
    tolerance per expense.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from splitledger.core.domain import Expense, Settlement
from splitledger.core.math.money import ZERO, sum_amounts
from splitledger.errors import ConsistencyError


def compute_balances(
    group_id: str,
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
    members: Optional[Iterable[str]] = None,
) -> dict[str, Decimal]:
    """
    Compute net balances for ``group_id``.

    Members with no involvement are omitted unless passed in ``members``, in
    which case they are seeded with zero. Entries belonging to another group
    are ignored.

    Args:
        group_id: group whose entries are folded
        expenses: expense entries
        settlements: settlement entries
        members: member ids to seed with zero (optional)

    Returns:
        member id → net balance
    """
    balances: defaultdict[str, Decimal] = defaultdict(lambda: ZERO)

    for member_id in members or ():
        balances[member_id] += ZERO

    for expense in expenses:
        if expense.group_id != group_id:
            continue
        balances[expense.paid_by] += expense.amount
        for line in expense.splits:
            balances[line.member_id] -= line.amount

    # Paying a debt raises the payer's balance toward zero and lowers the
    # payee's credit by the same amount
    for settlement in settlements:
        if settlement.group_id != group_id:
            continue
        balances[settlement.from_member] += settlement.amount
        balances[settlement.to_member] -= settlement.amount

    return dict(balances)


def balance_total(balances: Mapping[str, Decimal]) -> Decimal:
    """Sum of all balances; zero for a consistent ledger."""
    return sum_amounts(balances.values())


def check_conservation(balances: Mapping[str, Decimal], tolerance: Decimal) -> bool:
    return abs(balance_total(balances)) <= tolerance


def assert_conservation(balances: Mapping[str, Decimal], tolerance: Decimal) -> None:
    """
    Raises:
        ConsistencyError: If balances do not sum to zero within tolerance
    """
    total = balance_total(balances)
    if abs(total) > tolerance:
        raise ConsistencyError(
            f"balances sum to {total}, expected 0 within {tolerance}"
        )
