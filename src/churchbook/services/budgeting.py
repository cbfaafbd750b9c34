"""Budgeting domain services.

A transaction belongs to a budget when it is explicitly linked through
``budget_id``, or when it is an unlinked expense whose category is one of the
budget's tags and whose date falls in the budget's year (any year when the
budget has none). Income is only ever linked explicitly.

Every function here is a pure read over the given sequences; none of them
validates or mutates its inputs.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..models.budget import Budget
from ..models.transaction import Transaction, TransactionType
from .formatting import plain_amount

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(slots=True)
class BudgetStats:
    """Totals for one budget over its related transactions."""

    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    percentage_used: Decimal
    is_over_budget: bool
    related: list[Transaction] = field(default_factory=list)


@dataclass(slots=True)
class MonthlyActivity:
    """Income/expense totals for one calendar month (1-12)."""

    month: int
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def label(self) -> str:
        return calendar.month_abbr[self.month]


def is_related(budget: Budget, transaction: Transaction) -> bool:
    """Return True when ``transaction`` counts towards ``budget``."""

    if transaction.budget_id is not None:
        return transaction.budget_id == budget.id

    if not transaction.is_expense:
        return False
    if transaction.category not in budget.categories:
        return False
    return budget.year is None or transaction.date.year == budget.year


def related_transactions(budget: Budget, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Transactions linked to ``budget`` in their original order."""

    return [t for t in transactions if is_related(budget, t)]


def compute_stats(budget: Budget, transactions: Iterable[Transaction]) -> BudgetStats:
    """Compute income, expense, net and goal usage for a budget."""

    related = related_transactions(budget, transactions)

    total_income = sum(
        (t.amount for t in related if t.type is TransactionType.INCOME), ZERO
    )
    total_expense = sum(
        (t.amount for t in related if t.type is TransactionType.EXPENSE), ZERO
    )

    if budget.amount > 0:
        percentage_used = min(HUNDRED, total_expense / budget.amount * HUNDRED)
    else:
        percentage_used = ZERO

    return BudgetStats(
        total_income=total_income,
        total_expense=total_expense,
        net_balance=total_income - total_expense,
        percentage_used=percentage_used,
        # Compared against the raw total so it still fires when the bar is clamped
        is_over_budget=total_expense > budget.amount,
        related=related,
    )


def compute_monthly_activity(
    budget: Budget, transactions: Iterable[Transaction]
) -> list[MonthlyActivity]:
    """Bucket related transactions into January..December.

    Buckets ignore the year, so a budget without a year merges the same month
    of different years into one bucket.
    """

    buckets = [MonthlyActivity(month=m) for m in range(1, 13)]
    for txn in related_transactions(budget, transactions):
        bucket = buckets[txn.date.month - 1]
        if txn.type is TransactionType.INCOME:
            bucket.income += txn.amount
        else:
            bucket.expense += txn.amount
    return buckets


def filter_related_by_category(
    budget: Budget,
    transactions: Iterable[Transaction],
    category: Optional[str] = None,
) -> list[Transaction]:
    """Related transactions, optionally for one category, newest date first.

    The sort is stable: transactions sharing a date keep their input order.
    """

    related = related_transactions(budget, transactions)
    if category is not None:
        related = [t for t in related if t.category == category]
    return sorted(related, key=lambda t: t.date, reverse=True)


def budget_categories_in_use(budget: Budget, transactions: Iterable[Transaction]) -> list[str]:
    """Distinct categories among a budget's related transactions."""

    seen: list[str] = []
    for txn in related_transactions(budget, transactions):
        if txn.category not in seen:
            seen.append(txn.category)
    return seen


def filter_budgets(
    budgets: Sequence[Budget], *, search: str = "", year: Optional[int] = None
) -> list[Budget]:
    """Filter the budget list by a search term and an optional year."""

    term = search.strip().lower()
    matches: list[Budget] = []
    for budget in budgets:
        if term and term not in budget.name.lower() and term not in plain_amount(budget.amount):
            continue
        if year is not None and budget.year != year:
            continue
        matches.append(budget)
    return matches
