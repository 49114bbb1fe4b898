"""Unit tests for the Settlement Suggestion Engine."""

from decimal import Decimal

import pytest

from splitledger.ledger import SettlementSuggestion, suggest


@pytest.fixture
def balances():
    return {"A": Decimal("30"), "B": Decimal("-10"), "C": Decimal("-20")}


def test_single_creditor(balances):
    """B owes 10; only A is owed → pay A 10."""
    assert suggest("B", balances, ["A", "B", "C"]) == [
        SettlementSuggestion(payee="A", amount=Decimal("10"), reason="you owe A")
    ]


def test_amount_capped_by_creditor_balance():
    balances = {"A": Decimal("5"), "B": Decimal("-10")}
    [s] = suggest("B", balances, ["A", "B"])
    assert s.amount == Decimal("5")


def test_creditor_or_settled_actor_gets_nothing(balances):
    assert suggest("A", balances, ["A", "B", "C"]) == []
    assert suggest("B", {"B": Decimal("0")}, ["A", "B"]) == []


def test_actor_missing_from_balances_gets_nothing(balances):
    assert suggest("Z", balances, ["A", "B", "C", "Z"]) == []


def test_suggestions_are_independent_and_in_member_order():
    """Every option is computed against the original debt, not a running total."""
    balances = {
        "A": Decimal("15"),
        "B": Decimal("-20"),
        "C": Decimal("25"),
        "D": Decimal("-20"),
    }
    result = suggest("B", balances, ["C", "B", "D", "A"])
    assert [(s.payee, s.amount) for s in result] == [
        ("C", Decimal("20")),
        ("A", Decimal("15")),
    ]


def test_names_used_in_reason(balances):
    [s] = suggest("B", balances, ["A", "B", "C"], names={"A": "Alice"})
    assert s.reason == "you owe Alice"


def test_non_members_are_not_suggested():
    balances = {"A": Decimal("10"), "B": Decimal("-10"), "X": Decimal("50")}
    result = suggest("B", balances, ["A", "B"])
    assert [s.payee for s in result] == ["A"]
