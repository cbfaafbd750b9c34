"""Budget envelopes."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .transaction import blank_to_none, generate_id


class Budget(SQLModel):
    """A named spending envelope: a goal amount plus category tags.

    Unlinked expense transactions whose category is one of ``categories`` (and,
    when ``year`` is set, dated in that year) are attributed to the budget.
    """

    id: str = Field(default_factory=generate_id, min_length=1)
    name: str = Field(min_length=1, max_length=128)
    amount: Decimal = Field(ge=0, description="Spending limit or fund goal")
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    categories: list[str] = Field(default_factory=list)
    attachment_url: Optional[str] = Field(default=None)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("year", "attachment_url", mode="before")
    @classmethod
    def _optional_fields(cls, value):
        return blank_to_none(value)

    @field_validator("categories", mode="after")
    @classmethod
    def _dedupe_categories(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for raw in value:
            tag = raw.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen
