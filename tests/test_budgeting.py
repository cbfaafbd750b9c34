"""Tests for the budget aggregator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from churchbook.models import TransactionType
from churchbook.services import budgeting

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def test_over_budget_scenario_clamps_percentage(budget_factory, transaction_factory):
    budget = budget_factory(amount=1000, categories=["Utilities"], year=2024)
    txs = [
        transaction_factory(600, EXPENSE, "Utilities", date(2024, 2, 1)),
        transaction_factory(600, EXPENSE, "Utilities", date(2024, 2, 15)),
    ]

    stats = budgeting.compute_stats(budget, txs)

    assert stats.total_expense == Decimal("1200")
    assert stats.total_income == Decimal("0")
    assert stats.percentage_used == Decimal("100")
    assert stats.is_over_budget is True
    assert stats.net_balance == Decimal("-1200")
    assert [t.id for t in stats.related] == [t.id for t in txs]


def test_empty_transactions_give_zero_stats(budget_factory):
    stats = budgeting.compute_stats(budget_factory(), [])

    assert stats.total_income == 0
    assert stats.total_expense == 0
    assert stats.net_balance == 0
    assert stats.percentage_used == 0
    assert stats.is_over_budget is False
    assert stats.related == []


def test_net_balance_is_income_minus_expense(budget_factory, transaction_factory):
    budget = budget_factory(amount=5000, id="b1")
    txs = [
        transaction_factory(750, INCOME, "Fundraising", budget_id="b1"),
        transaction_factory(300, EXPENSE, "Utilities"),
        transaction_factory(125.5, EXPENSE, "Utilities"),
    ]

    stats = budgeting.compute_stats(budget, txs)

    assert stats.total_income == Decimal("750")
    assert stats.total_expense == Decimal("425.5")
    assert stats.net_balance == stats.total_income - stats.total_expense


def test_percentage_used_below_goal(budget_factory, transaction_factory):
    budget = budget_factory(amount=1000)
    stats = budgeting.compute_stats(budget, [transaction_factory(250, EXPENSE, "Utilities")])

    assert stats.percentage_used == Decimal("25")
    assert stats.is_over_budget is False


def test_exactly_on_goal_is_not_over_budget(budget_factory, transaction_factory):
    budget = budget_factory(amount=1000)
    stats = budgeting.compute_stats(budget, [transaction_factory(1000, EXPENSE, "Utilities")])

    assert stats.percentage_used == Decimal("100")
    assert stats.is_over_budget is False


def test_zero_goal_reports_zero_percentage(budget_factory, transaction_factory):
    budget = budget_factory(amount=0)
    stats = budgeting.compute_stats(budget, [transaction_factory(50, EXPENSE, "Utilities")])

    assert stats.percentage_used == 0
    assert stats.is_over_budget is True


@pytest.mark.parametrize("amount", ["1", "999", "1000", "1001", "250000"])
def test_percentage_used_stays_within_bounds(budget_factory, transaction_factory, amount):
    stats = budgeting.compute_stats(
        budget_factory(amount=1000), [transaction_factory(amount, EXPENSE, "Utilities")]
    )

    assert 0 <= stats.percentage_used <= 100


def test_compute_stats_is_repeatable(budget_factory, transaction_factory):
    budget = budget_factory()
    txs = [
        transaction_factory(400, EXPENSE, "Utilities"),
        transaction_factory(90, INCOME, "Offering", budget_id=budget.id),
    ]

    assert budgeting.compute_stats(budget, txs) == budgeting.compute_stats(budget, txs)


def test_explicit_link_ignores_category_and_year(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"], year=2024)
    linked = transaction_factory(80, EXPENSE, "Events", date(2019, 6, 1), budget_id=budget.id)

    assert budgeting.is_related(budget, linked)
    assert budgeting.related_transactions(budget, [linked]) == [linked]


def test_link_to_other_budget_excludes_matching_category(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"])
    elsewhere = transaction_factory(80, EXPENSE, "Utilities", budget_id="another")

    assert not budgeting.is_related(budget, elsewhere)


def test_unlinked_income_never_matches(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Offering"], year=None)
    offering = transaction_factory(500, INCOME, "Offering")

    assert not budgeting.is_related(budget, offering)
    assert budgeting.compute_stats(budget, [offering]).total_income == 0


def test_year_filter_on_implicit_links(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"], year=2024)
    new_years_eve = transaction_factory(10, EXPENSE, "Utilities", date(2023, 12, 31))
    new_years_day = transaction_factory(10, EXPENSE, "Utilities", date(2024, 1, 1))

    related = budgeting.related_transactions(budget, [new_years_eve, new_years_day])

    assert related == [new_years_day]


def test_budget_without_year_matches_any_year(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Maintenance"], year=None)
    txs = [
        transaction_factory(10, EXPENSE, "Maintenance", date(2021, 5, 1)),
        transaction_factory(20, EXPENSE, "Maintenance", date(2024, 5, 1)),
    ]

    assert budgeting.related_transactions(budget, txs) == txs


def test_category_match_is_exact(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"])
    txn = transaction_factory(10, EXPENSE, "utilities")

    assert not budgeting.is_related(budget, txn)


def test_monthly_activity_buckets_by_month(budget_factory, transaction_factory):
    budget = budget_factory(id="b1", categories=["Utilities"], year=2024)
    txs = [
        transaction_factory(100, EXPENSE, "Utilities", date(2024, 3, 5)),
        transaction_factory(50, INCOME, "Donation", date(2024, 3, 20), budget_id="b1"),
    ]

    activity = budgeting.compute_monthly_activity(budget, txs)

    assert len(activity) == 12
    assert [m.month for m in activity] == list(range(1, 13))
    assert (activity[2].income, activity[2].expense) == (Decimal("50"), Decimal("100"))
    assert activity[2].label == "Mar"
    for index, month in enumerate(activity):
        if index != 2:
            assert (month.income, month.expense) == (0, 0)


def test_monthly_activity_empty_is_zero_filled(budget_factory):
    activity = budgeting.compute_monthly_activity(budget_factory(), [])

    assert len(activity) == 12
    assert all(m.income == 0 and m.expense == 0 for m in activity)


def test_monthly_activity_merges_years_when_budget_has_no_year(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"], year=None)
    txs = [
        transaction_factory(100, EXPENSE, "Utilities", date(2023, 7, 1)),
        transaction_factory(40, EXPENSE, "Utilities", date(2024, 7, 9)),
    ]

    activity = budgeting.compute_monthly_activity(budget, txs)

    assert activity[6].expense == Decimal("140")


def test_filter_related_sorts_newest_first(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities", "Salary"])
    older = transaction_factory(10, EXPENSE, "Utilities", date(2024, 1, 3))
    newer = transaction_factory(10, EXPENSE, "Salary", date(2024, 4, 1))
    middle = transaction_factory(10, EXPENSE, "Utilities", date(2024, 2, 1))

    result = budgeting.filter_related_by_category(budget, [older, newer, middle])

    assert result == [newer, middle, older]


def test_filter_related_keeps_input_order_on_equal_dates(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities"])
    first = transaction_factory(10, EXPENSE, "Utilities", date(2024, 5, 1))
    second = transaction_factory(20, EXPENSE, "Utilities", date(2024, 5, 1))

    assert budgeting.filter_related_by_category(budget, [first, second]) == [first, second]
    assert budgeting.filter_related_by_category(budget, [second, first]) == [second, first]


def test_filter_related_by_single_category(budget_factory, transaction_factory):
    budget = budget_factory(categories=["Utilities", "Salary"])
    utilities = transaction_factory(10, EXPENSE, "Utilities")
    salary = transaction_factory(10, EXPENSE, "Salary")

    assert budgeting.filter_related_by_category(budget, [utilities, salary], "Salary") == [salary]
    assert budgeting.filter_related_by_category(budget, [utilities, salary], "Events") == []


def test_budget_categories_in_use(budget_factory, transaction_factory):
    budget = budget_factory(id="b1", categories=["Utilities", "Salary", "Administration"])
    txs = [
        transaction_factory(10, EXPENSE, "Salary"),
        transaction_factory(10, EXPENSE, "Utilities"),
        transaction_factory(10, EXPENSE, "Salary"),
        transaction_factory(10, INCOME, "Fundraising", budget_id="b1"),
    ]

    assert budgeting.budget_categories_in_use(budget, txs) == ["Salary", "Utilities", "Fundraising"]


def test_filter_budgets_by_name_amount_and_year(budget_factory):
    budgets = [
        budget_factory(id="b1", name="General Fund", amount=250000, year=2024),
        budget_factory(id="b2", name="Missions", amount=50000, year=None),
        budget_factory(id="b3", name="Building", amount=100000, year=2023),
    ]

    assert [b.id for b in budgeting.filter_budgets(budgets)] == ["b1", "b2", "b3"]
    assert [b.id for b in budgeting.filter_budgets(budgets, search="general")] == ["b1"]
    assert [b.id for b in budgeting.filter_budgets(budgets, search="50000")] == ["b1", "b2"]
    assert [b.id for b in budgeting.filter_budgets(budgets, year=2023)] == ["b3"]
    assert budgeting.filter_budgets(budgets, search="missions", year=2024) == []


def test_demo_general_fund_stats(store):
    state = store.state
    general = state.find_budget("b1")

    stats = budgeting.compute_stats(general, state.transactions)

    # Salary 15000 + Utilities 9800 in 2024; the 2023 entries fall outside the year
    assert stats.total_expense == Decimal("24800")
    assert stats.percentage_used == Decimal("24800") / Decimal("250000") * 100
    assert stats.is_over_budget is False


def test_demo_missions_budget_counts_linked_fundraiser(store):
    state = store.state
    stats = budgeting.compute_stats(state.find_budget("b2"), state.transactions)

    assert stats.total_income == Decimal("20000")
    assert stats.total_expense == Decimal("12000")
    assert stats.net_balance == Decimal("8000")
