"""
Ledger service: the operations exposed to transport and UI layers.

Every call takes the already-authenticated actor id explicitly; there is no
ambient "current user". Pure components (validators, guard, aggregator,
suggestion engine) return typed results; this layer turns rejections into
exceptions from ``splitledger.errors`` and performs the store writes.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, Optional

from splitledger.config import LedgerConfig
from splitledger.core.contracts import expense_to_record, settlement_to_record
from splitledger.core.domain import (
    Expense,
    ExpenseDraft,
    Group,
    Notification,
    NotificationType,
    Settlement,
)
from splitledger.errors import (
    ExpenseValidationError,
    ForbiddenError,
    NotFoundError,
    SettlementValidationError,
)
from splitledger.guard import (
    ExpenseSplitValidator,
    GroupAction,
    MembershipGuard,
    SettlementValidator,
    SplitValidationResult,
)
from splitledger.ledger import (
    SettlementSuggestion,
    assert_conservation,
    compute_balances,
    suggest,
)
from splitledger.store import LedgerStore


logger = logging.getLogger(__name__)


class LedgerService:
    """Facade over the store, validators, guard and ledger computations."""

    def __init__(self, store: LedgerStore, config: LedgerConfig | None = None):
        self.store = store
        self.config = config or LedgerConfig()
        self.guard = MembershipGuard()
        self.split_validator = ExpenseSplitValidator(self.config)
        self.settlement_validator = SettlementValidator(self.config)

    # =========================================================================
    # PERMISSIONS & VALIDATION
    # =========================================================================

    def is_action_permitted(
        self,
        actor_id: str,
        group: Group,
        action: GroupAction,
        target_id: Optional[str] = None,
    ) -> bool:
        return self.guard.is_action_permitted(actor_id, group, action, target_id)

    def validate_expense_draft(self, draft: ExpenseDraft, group: Group) -> SplitValidationResult:
        return self.split_validator.validate(draft, group)

    # =========================================================================
    # BALANCES
    # =========================================================================

    def compute_balances(self, actor_id: str, group_id: str) -> dict[str, Decimal]:
        """
        Net balance of every current member (zero-involvement members
        included), recomputed from the full entry set.

        Raises:
            NotFoundError, ForbiddenError, ConsistencyError
        """
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.VIEW_GROUP)
        return self._balances(group)

    def suggest_settlements(self, actor_id: str, group_id: str) -> list[SettlementSuggestion]:
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.VIEW_GROUP)

        balances = self._balances(group)
        names = {}
        for member_id in group.members:
            member = self.store.get_member(member_id)
            if member is not None:
                names[member_id] = member.name
        return suggest(actor_id, balances, group.members, names)

    def _balances(self, group: Group) -> dict[str, Decimal]:
        expenses = self.store.expenses_for_group(group.id)
        settlements = self.store.settlements_for_group(group.id)
        balances = compute_balances(group.id, expenses, settlements, members=group.members)

        if self.config.verify_conservation:
            tolerance = self.config.split_tolerance * max(1, len(expenses))
            assert_conservation(balances, tolerance)
        return balances

    # =========================================================================
    # GROUPS
    # =========================================================================

    def create_group(
        self,
        actor_id: str,
        name: str,
        description: str = "",
        member_emails: Iterable[str] = (),
    ) -> Group:
        """
        Create a group owned by ``actor_id``.

        Unknown e-mails are skipped; the creator is always added.
        """
        if self.store.get_member(actor_id) is None:
            raise NotFoundError(f"member {actor_id} does not exist")

        found = [m.id for m in self.store.find_members_by_email(member_emails)]
        members = list(dict.fromkeys(found))
        if actor_id not in members:
            members.append(actor_id)

        group = Group(
            id=uuid.uuid4().hex,
            name=name,
            description=description,
            members=tuple(members),
            created_by=actor_id,
        )
        self.store.save_group(group)
        logger.info("Group %s created by %s with %d members", group.id, actor_id, len(members))

        self._notify(
            group,
            actor_id,
            NotificationType.GROUP_CREATED,
            f"{self._name(actor_id)} added you to {group.name}",
        )
        return group

    def add_members(self, actor_id: str, group_id: str, member_emails: Iterable[str]) -> Group:
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.ADD_MEMBER)

        candidates = [m.id for m in self.store.find_members_by_email(member_emails)]
        new_ids: list[str] = []

        def add(current: Group) -> Group:
            new_ids[:] = [m for m in candidates if not current.has_member(m)]
            return current.with_members_added(new_ids) if new_ids else current

        # Applied to the latest snapshot under the store lock
        updated = self.store.update_group(group_id, add)
        if not new_ids:
            return updated
        logger.info("Added %d members to group %s", len(new_ids), group_id)

        for member_id in new_ids:
            self._notify(
                updated,
                actor_id,
                NotificationType.MEMBER_ADDED,
                f"{self._name(actor_id)} added {self._name(member_id)} to {updated.name}",
            )
        return updated

    def remove_member(self, actor_id: str, group_id: str, target_id: str) -> Group:
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.REMOVE_MEMBER, target_id)

        before: list[Group] = []

        def remove(current: Group) -> Group:
            if not current.has_member(target_id):
                raise NotFoundError(f"{target_id} is not a member of group {group_id}")
            before.append(current)
            return current.with_member_removed(target_id)

        updated = self.store.update_group(group_id, remove)
        logger.info("Member %s removed from group %s by %s", target_id, group_id, actor_id)

        # The removed member is still told about it
        self._notify(
            before[0],
            actor_id,
            NotificationType.MEMBER_REMOVED,
            f"{self._name(actor_id)} removed {self._name(target_id)} from {group.name}",
        )
        return updated

    def delete_group(self, actor_id: str, group_id: str) -> None:
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.DELETE_GROUP)

        if not self.store.delete_group_cascade(group_id):
            raise NotFoundError(f"group {group_id} does not exist")

        # Detached from the group so the cascade does not own them
        self._notify(
            group,
            actor_id,
            NotificationType.GROUP_DELETED,
            f"{self._name(actor_id)} deleted {group.name}",
            detached=True,
        )

    def list_groups(self, actor_id: str) -> list[Group]:
        return self.store.groups_for_member(actor_id)

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def record_expense(self, actor_id: str, group_id: str, draft: ExpenseDraft) -> Expense:
        """
        Validate and append an expense paid by ``actor_id``.

        Raises:
            NotFoundError, ForbiddenError, ExpenseValidationError
        """
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.ADD_EXPENSE)

        if draft.paid_by != actor_id:
            draft = draft.model_copy(update={"paid_by": actor_id})

        result = self.split_validator.validate(draft, group)
        if not result.accepted:
            logger.warning("Expense rejected in group %s: %s", group_id, result.details)
            raise ExpenseValidationError(result.details, result.error)

        expense = result.expense
        self.store.append_expense(expense)
        logger.info("Expense %s (%s) recorded in group %s", expense.id, expense.amount, group_id)

        self._notify(
            group,
            actor_id,
            NotificationType.EXPENSE_ADDED,
            f"{self._name(actor_id)} added \"{expense.description}\" ({expense.amount})",
        )
        return expense

    def record_settlement(
        self,
        actor_id: str,
        group_id: str,
        payee_id: str,
        amount: Any,
        description: str = "",
    ) -> Settlement:
        """
        Append a payment from ``actor_id`` to ``payee_id``.

        Raises:
            NotFoundError, ForbiddenError, SettlementValidationError
        """
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.RECORD_SETTLEMENT)

        result = self.settlement_validator.validate(actor_id, group, payee_id, amount, description)
        if not result.accepted:
            logger.warning("Settlement rejected in group %s: %s", group_id, result.details)
            raise SettlementValidationError(result.details, result.error)

        settlement = result.settlement
        self.store.append_settlement(settlement)
        logger.info(
            "Settlement %s: %s paid %s %s in group %s",
            settlement.id,
            actor_id,
            payee_id,
            settlement.amount,
            group_id,
        )

        self._notify(
            group,
            actor_id,
            NotificationType.SETTLEMENT_ADDED,
            f"{self._name(actor_id)} paid {self._name(payee_id)} {settlement.amount}",
        )
        return settlement

    def list_expenses(self, actor_id: str, group_id: str) -> list[Expense]:
        """Expenses of the group, newest first."""
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.VIEW_GROUP)
        return sorted(
            self.store.expenses_for_group(group_id), key=lambda e: e.created_at, reverse=True
        )

    def list_settlements(self, actor_id: str, group_id: str) -> list[Settlement]:
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.VIEW_GROUP)
        return sorted(
            self.store.settlements_for_group(group_id), key=lambda s: s.created_at, reverse=True
        )

    def export_records(self, actor_id: str, group_id: str) -> dict[str, list[dict[str, Any]]]:
        """Persisted-state records of the group, validated against their schemas."""
        group = self._load_group(group_id)
        self._require(actor_id, group, GroupAction.VIEW_GROUP)
        return {
            "expenses": [expense_to_record(e) for e in self.store.expenses_for_group(group_id)],
            "settlements": [
                settlement_to_record(s) for s in self.store.settlements_for_group(group_id)
            ],
        }

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def notifications_for(self, member_id: str) -> list[Notification]:
        """Notifications addressed to ``member_id``, newest first."""
        return sorted(
            self.store.notifications_for(member_id), key=lambda n: n.created_at, reverse=True
        )

    def _notify(
        self,
        group: Group,
        actor_id: str,
        kind: NotificationType,
        message: str,
        detached: bool = False,
    ) -> None:
        owner = None if detached else group.id
        notifications = [
            Notification(
                id=uuid.uuid4().hex,
                recipient_id=member_id,
                type=kind,
                message=message,
                group_id=owner,
            )
            for member_id in group.members
            if member_id != actor_id
        ]
        if notifications:
            self.store.append_notifications(notifications)
            logger.debug("Queued %d %s notifications", len(notifications), kind.value)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _load_group(self, group_id: str) -> Group:
        group = self.store.get_group(group_id)
        if group is None:
            raise NotFoundError(f"group {group_id} does not exist")
        return group

    def _require(
        self,
        actor_id: str,
        group: Group,
        action: GroupAction,
        target_id: Optional[str] = None,
    ) -> None:
        result = self.guard.evaluate(actor_id, group, action, target_id)
        if not result.allowed:
            logger.warning("Forbidden %s by %s: %s", action.value, actor_id, result.reason)
            raise ForbiddenError(result.details)

    def _name(self, member_id: str) -> str:
        member = self.store.get_member(member_id)
        return member.name if member is not None else member_id
