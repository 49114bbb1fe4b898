"""
Settlement Suggestion Engine

Helps one indebted actor pay down their balance. For every member who is
owed money, in membership order, the engine proposes paying
``min(actor debt, member credit)``.

Suggestions are independent options, all computed against the original
balances: the actor picks one, records a settlement, and suggestions are
recomputed. This is not a global minimum-transfer solver, and a suggestion
never creates a Settlement by itself.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from splitledger.core.math.money import ZERO


@dataclass(frozen=True)
class SettlementSuggestion:
    """Non-binding proposal: actor pays ``amount`` to ``payee``."""

    payee: str
    amount: Decimal
    reason: str


def suggest(
    actor_id: str,
    balances: Mapping[str, Decimal],
    members: Iterable[str],
    names: Optional[Mapping[str, str]] = None,
) -> list[SettlementSuggestion]:
    """
    Suggest payments for ``actor_id``.

    Args:
        actor_id: member asking how to settle
        balances: current balances (missing members count as zero)
        members: group member ids in membership order
        names: member id → display name for the reason text

    Returns:
        Suggestions in membership order; empty if the actor owes nothing
    """
    actor_balance = balances.get(actor_id, ZERO)
    if actor_balance >= 0:
        return []

    owed = -actor_balance
    names = names or {}

    suggestions = []
    for member_id in members:
        if member_id == actor_id:
            continue
        credit = balances.get(member_id, ZERO)
        if credit <= 0:
            continue
        suggestions.append(
            SettlementSuggestion(
                payee=member_id,
                amount=min(owed, credit),
                reason=f"you owe {names.get(member_id, member_id)}",
            )
        )
    return suggestions
