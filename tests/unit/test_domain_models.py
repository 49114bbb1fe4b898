"""
Tests for the domain models: Member, Group, Expense, ExpenseDraft, Settlement,
Notification

Checks:
1. Creation and Pydantic validation
2. Immutability (frozen=True)
3. Group membership invariants
4. Category / notification type fallback
5. Equal-split rounding policy
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from splitledger.core.domain import (
    DEFAULT_SETTLEMENT_DESCRIPTION,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    Group,
    Member,
    Notification,
    NotificationType,
    Settlement,
    SplitLine,
)


# =============================================================================
# MEMBER
# =============================================================================


class TestMember:
    def test_email_is_normalized(self) -> None:
        member = Member(id="a", name="Alice", email="Alice@Example.COM")
        assert member.email == "alice@example.com"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Member(id="a", name="Alice", email="not-an-email")

    def test_immutable(self) -> None:
        member = Member(id="a", name="Alice", email="alice@example.com")
        with pytest.raises(ValidationError):
            member.name = "Bob"  # type: ignore


# =============================================================================
# GROUP
# =============================================================================


class TestGroup:
    @pytest.fixture
    def group(self) -> Group:
        return Group(id="g1", name="Trip", members=("a", "b"), created_by="a")

    def test_creator_must_be_member(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Group(id="g1", name="Trip", members=("b",), created_by="a")
        assert "creator" in str(exc_info.value)

    def test_duplicate_members_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Group(id="g1", name="Trip", members=("a", "a"), created_by="a")

    def test_members_added_in_order_without_duplicates(self, group: Group) -> None:
        updated = group.with_members_added(["c", "a", "d"])
        assert updated.members == ("a", "b", "c", "d")
        assert group.members == ("a", "b")

    def test_member_removed(self, group: Group) -> None:
        assert group.with_member_removed("b").members == ("a",)

    def test_creator_cannot_be_removed(self, group: Group) -> None:
        with pytest.raises(ValueError):
            group.with_member_removed("a")

    def test_removing_stranger_fails(self, group: Group) -> None:
        with pytest.raises(ValueError):
            group.with_member_removed("zed")

    def test_immutable(self, group: Group) -> None:
        with pytest.raises(ValidationError):
            group.members = ("a",)  # type: ignore


# =============================================================================
# EXPENSE
# =============================================================================


class TestExpense:
    def test_creation_quantizes_amounts(self) -> None:
        expense = Expense(
            id="e1",
            group_id="g1",
            description="Dinner",
            amount=40,
            paid_by="a",
            splits=(SplitLine(member_id="a", amount="20"), SplitLine(member_id="b", amount=20.0)),
        )
        assert expense.amount == Decimal("40.00")
        assert expense.share_of("b") == Decimal("20.00")
        assert expense.share_of("zed") == Decimal("0.00")
        assert expense.participants() == ("a", "b")
        assert expense.category == ExpenseCategory.GENERAL

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount_rejected(self, amount) -> None:
        with pytest.raises(ValidationError):
            Expense(
                id="e1",
                group_id="g1",
                description="x",
                amount=amount,
                paid_by="a",
                splits=(SplitLine(member_id="a", amount=1),),
            )

    def test_empty_split_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Expense(id="e1", group_id="g1", description="x", amount=1, paid_by="a", splits=())

    def test_duplicate_participant_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Expense(
                id="e1",
                group_id="g1",
                description="x",
                amount=2,
                paid_by="a",
                splits=(SplitLine(member_id="a", amount=1), SplitLine(member_id="a", amount=1)),
            )

    def test_negative_share_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SplitLine(member_id="a", amount=-1)


class TestExpenseCategory:
    def test_known_values(self) -> None:
        assert ExpenseCategory("Food") is ExpenseCategory.FOOD
        assert ExpenseCategory("travel") is ExpenseCategory.TRAVEL

    def test_unknown_falls_back_to_other(self) -> None:
        assert ExpenseCategory("Groceries") is ExpenseCategory.OTHER

    def test_draft_coerces_category(self) -> None:
        draft = ExpenseDraft(description="x", amount=1, paid_by="a", category="Pets")
        assert draft.category is ExpenseCategory.OTHER

    def test_empty_category_defaults_to_general(self) -> None:
        draft = ExpenseDraft(description="x", amount=1, paid_by="a", category="")
        assert draft.category is ExpenseCategory.GENERAL


# =============================================================================
# EXPENSE DRAFT / EQUAL SPLIT
# =============================================================================


class TestEqualSplit:
    def test_even_split(self) -> None:
        draft = ExpenseDraft.equal_split("Dinner", "40.00", "a", ["a", "b"])
        assert [(l.member_id, l.amount) for l in draft.splits] == [
            ("a", Decimal("20.00")),
            ("b", Decimal("20.00")),
        ]

    def test_remainder_goes_to_participating_payer(self) -> None:
        draft = ExpenseDraft.equal_split("Taxi", "100.00", "b", ["a", "b", "c"])
        shares = {l.member_id: l.amount for l in draft.splits}
        assert shares == {"a": Decimal("33.33"), "b": Decimal("33.34"), "c": Decimal("33.33")}
        assert sum(shares.values()) == Decimal("100.00")

    def test_remainder_goes_to_first_participant_when_payer_absent(self) -> None:
        draft = ExpenseDraft.equal_split("Gift", "10.00", "p", ["c", "a", "b"])
        shares = {l.member_id: l.amount for l in draft.splits}
        assert shares == {"c": Decimal("3.34"), "a": Decimal("3.33"), "b": Decimal("3.33")}

    def test_participants_deduplicated(self) -> None:
        draft = ExpenseDraft.equal_split("x", "9.00", "a", ["a", "b", "a"])
        assert [l.member_id for l in draft.splits] == ["a", "b"]

    def test_no_participants_gives_empty_split(self) -> None:
        draft = ExpenseDraft.equal_split("x", "9.00", "a", [])
        assert draft.splits == ()

    def test_non_positive_amount_gives_empty_split(self) -> None:
        draft = ExpenseDraft.equal_split("x", "0", "a", ["a", "b"])
        assert draft.amount == Decimal("0.00")
        assert draft.splits == ()

    def test_draft_accepts_invalid_amount(self) -> None:
        """Draft stays unconstrained so the validator can report it"""
        draft = ExpenseDraft(description="x", amount=-3, paid_by="a")
        assert draft.amount == Decimal("-3.00")

    def test_draft_rejects_amount_beyond_precision(self) -> None:
        with pytest.raises(ValidationError):
            ExpenseDraft(description="x", amount="1" + "0" * 27, paid_by="a")


# =============================================================================
# SETTLEMENT
# =============================================================================


class TestSettlement:
    def test_creation(self) -> None:
        s = Settlement(id="s1", group_id="g1", from_member="b", to_member="a", amount="20")
        assert s.amount == Decimal("20.00")
        assert s.description == DEFAULT_SETTLEMENT_DESCRIPTION

    def test_self_settlement_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Settlement(id="s1", group_id="g1", from_member="a", to_member="a", amount=5)
        assert "same member" in str(exc_info.value)

    def test_non_positive_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settlement(id="s1", group_id="g1", from_member="b", to_member="a", amount=0)

    def test_amount_beyond_precision_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settlement(id="s1", group_id="g1", from_member="b", to_member="a", amount="1e30")


# =============================================================================
# NOTIFICATION
# =============================================================================


class TestNotification:
    def test_known_type(self) -> None:
        n = Notification(id="n1", recipient_id="a", type="expense_added", message="hi")
        assert n.type is NotificationType.EXPENSE_ADDED
        assert n.is_read is False

    def test_unknown_type_falls_back(self) -> None:
        n = Notification(id="n1", recipient_id="a", type="reminder_sent", message="hi")
        assert n.type is NotificationType.OTHER
