"""
Known category definitions for income and expense entries.

Transactions may still carry free-text categories; these lists are the
suggestions offered when recording a transaction or defining a budget.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class IncomeCategory(str, Enum):
    TITHE = "Tithe"
    OFFERING = "Offering"
    LOOSE_OFFERING = "Loose Offering"
    CHARITY = "Charity"
    DONATION = "Donation"
    FUNDRAISING = "Fundraising"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    SALARY = "Salary"
    UTILITIES = "Utilities"
    MAINTENANCE = "Maintenance"
    CHARITY = "Charity/Mission"
    EVENTS = "Events"
    ADMIN = "Administration"
    OTHER = "Other"


INCOME_CATEGORIES = [c.value for c in IncomeCategory]
EXPENSE_CATEGORIES = [c.value for c in ExpenseCategory]


@dataclass(frozen=True)
class KnownCategory:
    """A category drawn from one of the enumerations."""

    category: Union[IncomeCategory, ExpenseCategory]

    @property
    def name(self) -> str:
        return self.category.value


@dataclass(frozen=True)
class CustomCategory:
    """A free-text category tag."""

    name: str


CategoryTag = Union[KnownCategory, CustomCategory]


def classify_category(name: str, *, income: bool | None = None) -> CategoryTag:
    """Resolve a category string to a known enum member or a custom tag.

    ``income`` restricts the lookup to one enumeration; ``None`` searches
    expense categories first, then income.
    """

    cleaned = name.strip()
    if income is None:
        pools = (ExpenseCategory, IncomeCategory)
    elif income:
        pools = (IncomeCategory,)
    else:
        pools = (ExpenseCategory,)

    for pool in pools:
        for member in pool:
            if member.value == cleaned:
                return KnownCategory(member)
    return CustomCategory(cleaned)
