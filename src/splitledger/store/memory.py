"""
In-memory LedgerStore.

Reference implementation for tests and embedding. A single re-entrant lock
serializes every operation, which makes each append atomic and lets the
cascading group delete run as one indivisible step.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from splitledger.core.domain import Expense, Group, Member, Notification, Settlement
from splitledger.errors import ConsistencyError, NotFoundError


logger = logging.getLogger(__name__)


class InMemoryLedgerStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._members: dict[str, Member] = {}
        self._groups: dict[str, Group] = {}
        self._expenses: list[Expense] = []
        self._settlements: list[Settlement] = []
        self._notifications: list[Notification] = []

    # =========================================================================
    # MEMBERS
    # =========================================================================

    def add_member(self, member: Member) -> None:
        """
        Raises:
            ValueError: If another member already uses the e-mail address
        """
        with self._lock:
            for existing in self._members.values():
                if existing.email == member.email and existing.id != member.id:
                    raise ValueError(f"e-mail {member.email} is already registered")
            self._members[member.id] = member

    def get_member(self, member_id: str) -> Optional[Member]:
        with self._lock:
            return self._members.get(member_id)

    def find_members_by_email(self, emails: Iterable[str]) -> list[Member]:
        wanted = [e.strip().lower() for e in emails]
        with self._lock:
            by_email = {m.email: m for m in self._members.values()}
        return [by_email[e] for e in dict.fromkeys(wanted) if e in by_email]

    # =========================================================================
    # GROUPS
    # =========================================================================

    def save_group(self, group: Group) -> None:
        with self._lock:
            self._groups[group.id] = group

    def get_group(self, group_id: str) -> Optional[Group]:
        with self._lock:
            return self._groups.get(group_id)

    def groups_for_member(self, member_id: str) -> list[Group]:
        with self._lock:
            return [g for g in self._groups.values() if g.has_member(member_id)]

    def update_group(self, group_id: str, change: Callable[[Group], Group]) -> Group:
        """
        Apply ``change`` to the current snapshot of a group and store the result
        as one atomic step. ``change`` runs under the store lock and must not
        call back into the store.

        Raises:
            NotFoundError: If the group does not exist
        """
        with self._lock:
            self._require_group(group_id)
            updated = change(self._groups[group_id])
            self._groups[group_id] = updated
            return updated

    def delete_group_cascade(self, group_id: str) -> bool:
        """
        Remove a group and every expense, settlement and notification it owns.

        The surviving records are built and checked first; nothing is
        committed unless the check passes.

        Returns:
            False if the group did not exist

        Raises:
            ConsistencyError: If owned records would survive the delete
        """
        with self._lock:
            if group_id not in self._groups:
                return False

            expenses, settlements, notifications = self._records_without(group_id)
            self._verify_no_orphans(group_id, expenses, settlements)

            removed = (
                len(self._expenses) - len(expenses),
                len(self._settlements) - len(settlements),
            )
            del self._groups[group_id]
            self._expenses = expenses
            self._settlements = settlements
            self._notifications = notifications

        logger.info(
            "Deleted group %s with %d expenses and %d settlements",
            group_id,
            removed[0],
            removed[1],
        )
        return True

    def _records_without(
        self, group_id: str
    ) -> tuple[list[Expense], list[Settlement], list[Notification]]:
        return (
            [e for e in self._expenses if e.group_id != group_id],
            [s for s in self._settlements if s.group_id != group_id],
            [n for n in self._notifications if n.group_id != group_id],
        )

    @staticmethod
    def _verify_no_orphans(
        group_id: str, expenses: list[Expense], settlements: list[Settlement]
    ) -> None:
        orphans = sum(1 for e in expenses if e.group_id == group_id) + sum(
            1 for s in settlements if s.group_id == group_id
        )
        if orphans:
            raise ConsistencyError(
                f"{orphans} records still reference deleted group {group_id}"
            )

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def append_expense(self, expense: Expense) -> None:
        with self._lock:
            self._require_group(expense.group_id)
            self._expenses.append(expense)

    def append_settlement(self, settlement: Settlement) -> None:
        with self._lock:
            self._require_group(settlement.group_id)
            self._settlements.append(settlement)

    def expenses_for_group(self, group_id: str) -> list[Expense]:
        with self._lock:
            return [e for e in self._expenses if e.group_id == group_id]

    def settlements_for_group(self, group_id: str) -> list[Settlement]:
        with self._lock:
            return [s for s in self._settlements if s.group_id == group_id]

    def _require_group(self, group_id: str) -> None:
        if group_id not in self._groups:
            raise NotFoundError(f"group {group_id} does not exist")

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def append_notifications(self, notifications: Iterable[Notification]) -> None:
        with self._lock:
            self._notifications.extend(notifications)

    def notifications_for(self, member_id: str) -> list[Notification]:
        with self._lock:
            return [n for n in self._notifications if n.recipient_id == member_id]
