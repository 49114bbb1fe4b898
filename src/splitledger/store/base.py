"""
LedgerStore: persistence interface consumed by the ledger service.

Any engine can back it as long as appends are atomic per record,
``update_group`` applies a change to the latest group snapshot atomically,
and ``delete_group_cascade`` removes a group together with everything it
owns in one atomic step.
"""

from typing import Callable, Iterable, Optional, Protocol

from splitledger.core.domain import Expense, Group, Member, Notification, Settlement


class LedgerStore(Protocol):
    # Identity directory
    def add_member(self, member: Member) -> None: ...

    def get_member(self, member_id: str) -> Optional[Member]: ...

    def find_members_by_email(self, emails: Iterable[str]) -> list[Member]: ...

    # Groups
    def save_group(self, group: Group) -> None: ...

    def get_group(self, group_id: str) -> Optional[Group]: ...

    def groups_for_member(self, member_id: str) -> list[Group]: ...

    def update_group(self, group_id: str, change: Callable[[Group], Group]) -> Group: ...

    def delete_group_cascade(self, group_id: str) -> bool: ...

    # Append-only entries
    def append_expense(self, expense: Expense) -> None: ...

    def append_settlement(self, settlement: Settlement) -> None: ...

    def expenses_for_group(self, group_id: str) -> list[Expense]: ...

    def settlements_for_group(self, group_id: str) -> list[Settlement]: ...

    # Notification outbox
    def append_notifications(self, notifications: Iterable[Notification]) -> None: ...

    def notifications_for(self, member_id: str) -> list[Notification]: ...
