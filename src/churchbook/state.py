"""Explicit state container for the books.

``LedgerState`` is an immutable snapshot. The reducer functions return a new
snapshot and never touch the one they are given; ``LedgerStore`` holds the
current snapshot and swaps it wholesale on every change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, TypeVar

import pydantic

from .errors import ValidationError
from .logging_config import get_logger
from .models import AppSettings, Budget, Member, Transaction, User

logger = get_logger("state")

RecordT = TypeVar("RecordT", Transaction, Member, Budget)


@dataclass(frozen=True)
class LedgerState:
    """Snapshot of everything the application knows about."""

    transactions: tuple[Transaction, ...] = ()
    members: tuple[Member, ...] = ()
    budgets: tuple[Budget, ...] = ()
    settings: AppSettings = field(default_factory=AppSettings)
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.user.is_authenticated

    def find_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def find_member(self, member_id: str) -> Optional[Member]:
        return next((m for m in self.members if m.id == member_id), None)

    def find_budget(self, budget_id: str) -> Optional[Budget]:
        return next((b for b in self.budgets if b.id == budget_id), None)


# =============================================================================
# Record construction (input boundary)
# =============================================================================


def _build(model: type[RecordT], fields: dict[str, Any]) -> RecordT:
    try:
        return model(**fields)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid {model.__name__.lower()}: {exc}") from exc


def new_transaction(**fields: Any) -> Transaction:
    """Validate ``fields`` into a Transaction with a fresh id."""

    fields.pop("id", None)
    return _build(Transaction, fields)


def new_member(**fields: Any) -> Member:
    """Validate ``fields`` into a Member with a fresh id."""

    fields.pop("id", None)
    return _build(Member, fields)


def new_budget(**fields: Any) -> Budget:
    """Validate ``fields`` into a Budget with a fresh id."""

    fields.pop("id", None)
    return _build(Budget, fields)


# =============================================================================
# Reducers
# =============================================================================


def sort_by_date_desc(transactions: tuple[Transaction, ...]) -> tuple[Transaction, ...]:
    """Newest date first; equal dates keep their current relative order."""

    return tuple(sorted(transactions, key=lambda t: t.date, reverse=True))


def _replace_by_id(records: tuple[RecordT, ...], record: RecordT) -> tuple[RecordT, ...]:
    return tuple(record if r.id == record.id else r for r in records)


def _drop_by_id(records: tuple[RecordT, ...], record_id: str) -> tuple[RecordT, ...]:
    return tuple(r for r in records if r.id != record_id)


def add_transaction(state: LedgerState, transaction: Transaction) -> LedgerState:
    # Prepended before sorting so it leads any existing entry on the same date
    transactions = sort_by_date_desc((transaction,) + state.transactions)
    return replace(state, transactions=transactions)


def update_transaction(state: LedgerState, transaction: Transaction) -> LedgerState:
    transactions = sort_by_date_desc(_replace_by_id(state.transactions, transaction))
    return replace(state, transactions=transactions)


def delete_transaction(state: LedgerState, transaction_id: str) -> LedgerState:
    return replace(state, transactions=_drop_by_id(state.transactions, transaction_id))


def add_member(state: LedgerState, member: Member) -> LedgerState:
    return replace(state, members=state.members + (member,))


def update_member(state: LedgerState, member: Member) -> LedgerState:
    return replace(state, members=_replace_by_id(state.members, member))


def delete_member(state: LedgerState, member_id: str) -> LedgerState:
    return replace(state, members=_drop_by_id(state.members, member_id))


def add_budget(state: LedgerState, budget: Budget) -> LedgerState:
    return replace(state, budgets=state.budgets + (budget,))


def update_budget(state: LedgerState, budget: Budget) -> LedgerState:
    return replace(state, budgets=_replace_by_id(state.budgets, budget))


def delete_budget(state: LedgerState, budget_id: str) -> LedgerState:
    """Remove a budget. Transactions pointing at it keep their ``budget_id``."""

    return replace(state, budgets=_drop_by_id(state.budgets, budget_id))


def update_settings(state: LedgerState, settings: AppSettings) -> LedgerState:
    return replace(state, settings=settings)


def login(state: LedgerState, user: User) -> LedgerState:
    return replace(state, user=user)


def logout(state: LedgerState) -> LedgerState:
    return replace(state, user=None)


# =============================================================================
# Store
# =============================================================================


class LedgerStore:
    """Holds the current snapshot and applies reducers to it."""

    def __init__(self, state: Optional[LedgerState] = None):
        self._state = state or LedgerState()
        self._listeners: list[Callable[[LedgerState], None]] = []

    @property
    def state(self) -> LedgerState:
        return self._state

    def subscribe(self, listener: Callable[[LedgerState], None]) -> Callable[[], None]:
        """Register a callback run after every change; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _apply(self, new_state: LedgerState, action: str, **context: Any) -> LedgerState:
        self._state = new_state
        logger.info(action, extra=context)
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    # Transactions
    def add_transaction(self, transaction: Transaction) -> Transaction:
        self._apply(
            add_transaction(self._state, transaction),
            "Transaction added",
            transaction_id=transaction.id,
            txn_type=transaction.type.value,
        )
        return transaction

    def update_transaction(self, transaction: Transaction) -> Transaction:
        if self._state.find_transaction(transaction.id) is None:
            logger.warning("Update for unknown transaction ignored", extra={"transaction_id": transaction.id})
            return transaction
        self._apply(
            update_transaction(self._state, transaction),
            "Transaction updated",
            transaction_id=transaction.id,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        self._apply(
            delete_transaction(self._state, transaction_id),
            "Transaction deleted",
            transaction_id=transaction_id,
        )

    # Members
    def add_member(self, member: Member) -> Member:
        self._apply(add_member(self._state, member), "Member added", member_id=member.id)
        return member

    def update_member(self, member: Member) -> Member:
        self._apply(update_member(self._state, member), "Member updated", member_id=member.id)
        return member

    def delete_member(self, member_id: str) -> None:
        self._apply(delete_member(self._state, member_id), "Member deleted", member_id=member_id)

    # Budgets
    def add_budget(self, budget: Budget) -> Budget:
        self._apply(add_budget(self._state, budget), "Budget added", budget_id=budget.id)
        return budget

    def update_budget(self, budget: Budget) -> Budget:
        self._apply(update_budget(self._state, budget), "Budget updated", budget_id=budget.id)
        return budget

    def delete_budget(self, budget_id: str) -> None:
        dangling = sum(1 for t in self._state.transactions if t.budget_id == budget_id)
        self._apply(
            delete_budget(self._state, budget_id),
            "Budget deleted",
            budget_id=budget_id,
            linked_transactions=dangling,
        )

    # Session / settings
    def update_settings(self, settings: AppSettings) -> AppSettings:
        self._apply(update_settings(self._state, settings), "Settings updated")
        return settings

    def login(self, user: User) -> User:
        self._apply(login(self._state, user), "User signed in", username=user.username)
        return user

    def logout(self) -> None:
        self._apply(logout(self._state), "User signed out")
