"""Membership Guard

Pure permission predicates over a Group snapshot. No I/O, no logging.

Rules:
- expenses, settlements, viewing and inviting: actor must be a member
- deleting the group: actor must be the creator
- removing a member: target must not be the creator. The actor is not
  checked at all (not even for membership).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from splitledger.core.domain import Group


class GroupAction(str, Enum):
    """Mutating or reading actions gated by membership."""

    ADD_EXPENSE = "add_expense"
    RECORD_SETTLEMENT = "record_settlement"
    VIEW_GROUP = "view_group"
    ADD_MEMBER = "add_member"
    REMOVE_MEMBER = "remove_member"
    DELETE_GROUP = "delete_group"


@dataclass(frozen=True)
class GuardResult:
    """Permission decision; ``allowed=False`` is the typed Forbidden result."""

    allowed: bool
    action: GroupAction
    reason: str
    details: str


# =============================================================================
# PREDICATES
# =============================================================================


def can_add_expense(actor_id: str, group: Group) -> bool:
    return group.has_member(actor_id)


def can_record_settlement(actor_id: str, group: Group) -> bool:
    return group.has_member(actor_id)


def can_view_group(actor_id: str, group: Group) -> bool:
    return group.has_member(actor_id)


def can_add_member(actor_id: str, group: Group) -> bool:
    return group.has_member(actor_id)


def can_delete_group(actor_id: str, group: Group) -> bool:
    return actor_id == group.created_by


def can_remove_member(actor_id: str, group: Group, target_id: str) -> bool:
    # Creator is permanent; actor is unchecked
    return target_id != group.created_by


# =============================================================================
# GUARD
# =============================================================================


class MembershipGuard:
    """Dispatches a GroupAction to its predicate."""

    def evaluate(
        self,
        actor_id: str,
        group: Group,
        action: GroupAction,
        target_id: Optional[str] = None,
    ) -> GuardResult:
        """Evaluate ``action`` for ``actor_id`` on ``group``.

        Args:
            actor_id: authenticated actor
            group: group snapshot
            action: requested action
            target_id: member affected by REMOVE_MEMBER

        Returns:
            GuardResult
        """
        if action == GroupAction.DELETE_GROUP:
            if can_delete_group(actor_id, group):
                return self._allowed(action, actor_id, group)
            return self._forbidden(
                action,
                "not_group_creator",
                f"only creator {group.created_by} may delete group {group.id}",
            )

        if action == GroupAction.REMOVE_MEMBER:
            if target_id is None:
                return self._forbidden(
                    action, "missing_target", "remove_member requires a target member"
                )
            if can_remove_member(actor_id, group, target_id):
                return self._allowed(action, actor_id, group)
            return self._forbidden(
                action,
                "creator_is_permanent",
                f"creator {group.created_by} cannot be removed from group {group.id}",
            )

        # Remaining actions only require membership
        if group.has_member(actor_id):
            return self._allowed(action, actor_id, group)
        return self._forbidden(
            action,
            "not_a_group_member",
            f"{actor_id} is not a member of group {group.id}",
        )

    def is_action_permitted(
        self,
        actor_id: str,
        group: Group,
        action: GroupAction,
        target_id: Optional[str] = None,
    ) -> bool:
        return self.evaluate(actor_id, group, action, target_id).allowed

    def _allowed(self, action: GroupAction, actor_id: str, group: Group) -> GuardResult:
        return GuardResult(
            allowed=True,
            action=action,
            reason="",
            details=f"PASS: {action.value} by {actor_id} in group {group.id}",
        )

    def _forbidden(self, action: GroupAction, reason: str, details: str) -> GuardResult:
        return GuardResult(allowed=False, action=action, reason=reason, details=details)
