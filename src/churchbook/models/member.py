"""Church member directory entries."""

from __future__ import annotations

from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .transaction import blank_to_none, generate_id


class Member(SQLModel):
    """A congregation member who may be linked to income entries."""

    id: str = Field(default_factory=generate_id, min_length=1)
    name: str = Field(min_length=1, max_length=128)
    mobile: str = Field(default="", max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name", "mobile", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _optional_email(cls, value):
        value = blank_to_none(value)
        return value.strip() if isinstance(value, str) else value
