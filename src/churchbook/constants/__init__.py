"""Static lookup data."""

from .categories import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    CustomCategory,
    ExpenseCategory,
    IncomeCategory,
    KnownCategory,
    classify_category,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "CustomCategory",
    "ExpenseCategory",
    "IncomeCategory",
    "KnownCategory",
    "classify_category",
]
