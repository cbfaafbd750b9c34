"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel


def generate_id() -> str:
    """Return a short random identifier for new records."""

    return uuid4().hex[:12]


def blank_to_none(value):
    """Treat empty or whitespace-only strings as an unset optional value."""

    if isinstance(value, str) and not value.strip():
        return None
    return value


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    BANK_TRANSFER = "Bank Transfer"
    CHECK = "Check"


class Transaction(SQLModel):
    """A single income or expense entry in the church books."""

    id: str = Field(default_factory=generate_id, min_length=1)
    date: dt.date
    amount: Decimal = Field(ge=0, description="Always non-negative; direction comes from type")
    type: TransactionType
    category: str = Field(min_length=1, max_length=64)
    description: str = Field(default="", max_length=255)
    member_id: Optional[str] = Field(default=None)
    payment_method: PaymentMethod = Field(default=PaymentMethod.CASH)
    # Opaque reference to an uploaded receipt (usually a base64 data URL)
    attachment_url: Optional[str] = Field(default=None)
    budget_id: Optional[str] = Field(default=None)

    @field_validator("category", "description", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("member_id", "attachment_url", "budget_id", mode="before")
    @classmethod
    def _optional_refs(cls, value):
        return blank_to_none(value)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE
