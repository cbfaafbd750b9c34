"""Member directory helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from ..models.member import Member
from ..models.transaction import Transaction, TransactionType
from .ledger_service import sort_newest_first


def search_members(members: Sequence[Member], term: str) -> list[Member]:
    """Match by case-insensitive name or by raw mobile number substring."""

    if not term:
        return list(members)
    lowered = term.lower()
    return [m for m in members if lowered in m.name.lower() or term in m.mobile]


def member_transactions(member_id: str, transactions: Iterable[Transaction]) -> list[Transaction]:
    """All entries linked to a member, newest first."""

    return sort_newest_first(t for t in transactions if t.member_id == member_id)


def member_contribution_total(member_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Sum of the member's income entries (tithes, offerings, donations)."""

    return sum(
        (
            t.amount
            for t in transactions
            if t.member_id == member_id and t.type is TransactionType.INCOME
        ),
        Decimal("0"),
    )


def member_lookup(members: Iterable[Member]) -> dict[str, str]:
    """Map member id to display name."""

    return {m.id: m.name for m in members}
