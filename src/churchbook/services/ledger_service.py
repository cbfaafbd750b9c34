"""Ledger-specific helpers for filtering, summaries, and drill-downs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..constants.categories import IncomeCategory
from ..models.member import Member
from ..models.transaction import Transaction, TransactionType
from .formatting import plain_amount

INCOME_TABS = ("all", "tithe_offering", "loose_offering")


@dataclass
class LedgerFilters:
    """Filters applied to ledger listings."""

    txn_type: Optional[TransactionType] = None
    income_tab: str = "all"  # all | tithe_offering | loose_offering
    year: Optional[int] = None
    month: Optional[int] = None  # 1-12
    week: Optional[int] = None  # week of month, 1-6
    search: str = ""

    def __post_init__(self) -> None:
        if self.income_tab not in INCOME_TABS:
            raise ValueError(f"Unknown income tab: {self.income_tab}")


def week_of_month(day: date) -> int:
    """Return the calendar row (1-based) a date falls on, weeks starting Sunday."""

    first = day.replace(day=1)
    # date.weekday() is Monday=0; shift so Sunday=0
    first_weekday = (first.weekday() + 1) % 7
    return math.ceil((day.day + first_weekday) / 7)


def sort_newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Stable date-descending order."""

    return sorted(transactions, key=lambda t: t.date, reverse=True)


def _matches_search(txn: Transaction, term: str, member_names: dict[str, str]) -> bool:
    member_name = member_names.get(txn.member_id, "") if txn.member_id else ""
    return (
        term in member_name
        or term in txn.description.lower()
        or term in plain_amount(txn.amount)
        or term in txn.date.isoformat()
    )


def filtered_transactions(
    transactions: Iterable[Transaction],
    filters: LedgerFilters,
    members: Sequence[Member] = (),
) -> list[Transaction]:
    """Apply listing filters and return the rows newest first."""

    txs = list(transactions)
    if filters.txn_type is not None:
        txs = [t for t in txs if t.type is filters.txn_type]

    if filters.txn_type is TransactionType.INCOME:
        loose = IncomeCategory.LOOSE_OFFERING.value
        if filters.income_tab == "loose_offering":
            txs = [t for t in txs if t.category == loose]
        elif filters.income_tab == "tithe_offering":
            txs = [t for t in txs if t.category != loose]

    if filters.year is not None:
        txs = [t for t in txs if t.date.year == filters.year]
    if filters.month is not None:
        txs = [t for t in txs if t.date.month == filters.month]
    if filters.week is not None:
        txs = [t for t in txs if week_of_month(t.date) == filters.week]

    term = filters.search.strip().lower()
    if term:
        member_names = {m.id: m.name.lower() for m in members}
        txs = [t for t in txs if _matches_search(t, term, member_names)]

    return sort_newest_first(txs)


def category_transactions(
    transactions: Iterable[Transaction],
    category: str,
    txn_type: TransactionType,
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> list[Transaction]:
    """Drill-down list for one category of one transaction type."""

    txs = [t for t in transactions if t.category == category and t.type is txn_type]
    if year is not None:
        txs = [t for t in txs if t.date.year == year]
    if month is not None:
        txs = [t for t in txs if t.date.month == month]
    return sort_newest_first(txs)


def compute_summary(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Compute income, expense, and net totals from the provided transactions."""

    income = Decimal("0")
    expense = Decimal("0")
    for txn in transactions:
        if txn.type is TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return {"income": income, "expense": expense, "net": income - expense}


def compute_category_totals(
    transactions: Iterable[Transaction], txn_type: TransactionType
) -> list[tuple[str, Decimal]]:
    """Roll up totals per category for one type, largest first."""

    totals: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type is not txn_type:
            continue
        totals[txn.category] = totals.get(txn.category, Decimal("0")) + txn.amount
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def available_years(transactions: Iterable[Transaction]) -> list[int]:
    """Distinct years with activity, most recent first."""

    return sorted({t.date.year for t in transactions}, reverse=True)
