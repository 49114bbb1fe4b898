"""
Group: a named set of members sharing expenses

Immutable Pydantic model. Membership changes produce a new Group instance;
the creator is always a member and can never be removed.
"""

from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel, Field, model_validator


class Group(BaseModel):
    """
    Group snapshot.

    ``members`` keeps insertion order: the settlement engine walks members in
    this order, so it is significant for presentation even though membership
    itself is a set.
    """

    id: str = Field(..., min_length=1, description="Group identifier")
    name: str = Field(..., min_length=1, description="Group name")
    description: str = Field("", description="Free-form description")
    members: tuple[str, ...] = Field(..., min_length=1, description="Member ids in join order")
    created_by: str = Field(..., min_length=1, description="Creator member id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_membership(self) -> "Group":
        """Creator is a member; no member appears twice."""
        if len(set(self.members)) != len(self.members):
            raise ValueError(f"members of group {self.id} contain duplicates")
        if self.created_by not in self.members:
            raise ValueError(
                f"creator {self.created_by} must be a member of group {self.id}"
            )
        return self

    def has_member(self, member_id: str) -> bool:
        return member_id in self.members

    def with_members_added(self, member_ids: Iterable[str]) -> "Group":
        """New Group with ``member_ids`` appended; already-present ids are skipped."""
        members = list(self.members)
        for member_id in member_ids:
            if member_id not in members:
                members.append(member_id)
        return self._replace_members(tuple(members))

    def with_member_removed(self, member_id: str) -> "Group":
        """
        New Group without ``member_id``.

        Raises:
            ValueError: If ``member_id`` is the creator or not a member
        """
        if member_id == self.created_by:
            raise ValueError(f"creator {member_id} cannot be removed from group {self.id}")
        if member_id not in self.members:
            raise ValueError(f"{member_id} is not a member of group {self.id}")
        return self._replace_members(tuple(m for m in self.members if m != member_id))

    def _replace_members(self, members: tuple[str, ...]) -> "Group":
        data = self.model_dump()
        data["members"] = members
        return Group(**data)
