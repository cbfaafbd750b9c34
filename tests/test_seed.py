from __future__ import annotations

from churchbook.constants import EXPENSE_CATEGORIES, INCOME_CATEGORIES
from churchbook.seed import demo_budgets, demo_members, demo_state, demo_transactions


def test_demo_state_is_sorted_and_consistent():
    state = demo_state()
    member_ids = {m.id for m in state.members}
    budget_ids = {b.id for b in state.budgets}

    dates = [t.date for t in state.transactions]
    assert dates == sorted(dates, reverse=True)
    assert len(state.transactions) == len(demo_transactions())
    for txn in state.transactions:
        assert txn.member_id is None or txn.member_id in member_ids
        assert txn.budget_id is None or txn.budget_id in budget_ids
        expected = INCOME_CATEGORIES if txn.is_income else EXPENSE_CATEGORIES
        assert txn.category in expected


def test_demo_ids_are_unique():
    assert len({m.id for m in demo_members()}) == len(demo_members())
    assert len({b.id for b in demo_budgets()}) == len(demo_budgets())
    assert len({t.id for t in demo_transactions()}) == len(demo_transactions())


def test_demo_state_is_not_authenticated():
    assert not demo_state().is_authenticated
