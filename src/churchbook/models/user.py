"""Signed-in user."""

from __future__ import annotations

from sqlmodel import Field, SQLModel


class User(SQLModel):
    """The person operating the books for this session."""

    username: str = Field(min_length=1, max_length=64)
    is_authenticated: bool = Field(default=False)
