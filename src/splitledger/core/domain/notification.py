"""
Notification: event record produced for group members on every mutation

Delivery (polling, push) is the transport's concern; the ledger only
produces the records.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class NotificationType(str, Enum):
    """Notification kind. Unknown values fall back to OTHER."""

    EXPENSE_ADDED = "expense_added"
    GROUP_CREATED = "group_created"
    MEMBER_ADDED = "member_added"
    MEMBER_REMOVED = "member_removed"
    GROUP_DELETED = "group_deleted"
    SETTLEMENT_ADDED = "settlement_added"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "NotificationType":
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value == wanted:
                    return member
        return cls.OTHER


class Notification(BaseModel):
    """Single notification for one recipient."""

    id: str = Field(..., min_length=1)
    recipient_id: str = Field(..., min_length=1)
    type: NotificationType = Field(NotificationType.OTHER)
    message: str = Field(..., min_length=1)
    group_id: str | None = Field(None, description="Group the event happened in")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_read: bool = False

    model_config = {"frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: object) -> NotificationType:
        if isinstance(v, NotificationType):
            return v
        return NotificationType(v)
