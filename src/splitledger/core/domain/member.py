"""
Member: identity of a person taking part in groups

Owned by the identity subsystem; the ledger only reads it.
"""

from pydantic import BaseModel, Field, field_validator


class Member(BaseModel):
    """Immutable member identity."""

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(
        ..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="Unique e-mail address"
    )

    model_config = {"frozen": True}

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """E-mail lookups are case-insensitive."""
        return v.strip().lower()
