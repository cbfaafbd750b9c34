"""Demo dataset used when no snapshot is supplied."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from .constants.categories import ExpenseCategory, IncomeCategory
from .models import AppSettings, Budget, Member, PaymentMethod, Transaction, TransactionType
from .state import LedgerState, sort_by_date_desc


def demo_members() -> list[Member]:
    return [
        Member(id="1", name="Ravi Kumar", mobile="+91 98765 43210", email="ravi@example.com"),
        Member(id="2", name="Anita Singh", mobile="+91 98123 45678", email="anita@example.com"),
        Member(id="3", name="Samuel John", mobile="+91 99887 76655", email="samuel@example.com"),
        Member(id="4", name="Grace Thomas", mobile="+91 88776 65544"),
        Member(id="5", name="Esther Rani", mobile="+91 77665 54433"),
        Member(id="6", name="Paul Mathew", mobile="+91 66554 43322", email="paul@example.com"),
    ]


def _txn(
    txn_id: str,
    day: date,
    amount: int,
    txn_type: TransactionType,
    category: str,
    description: str,
    method: PaymentMethod,
    **extra,
) -> Transaction:
    return Transaction(
        id=txn_id,
        date=day,
        amount=Decimal(amount),
        type=txn_type,
        category=category,
        description=description,
        payment_method=method,
        **extra,
    )


def demo_transactions() -> list[Transaction]:
    income, expense = TransactionType.INCOME, TransactionType.EXPENSE
    return [
        _txn("t1", date(2023, 10, 1), 5000, income, IncomeCategory.TITHE.value,
             "Monthly Tithe", PaymentMethod.UPI, member_id="1"),
        _txn("t2", date(2023, 10, 5), 200, income, IncomeCategory.OFFERING.value,
             "Sunday Offering", PaymentMethod.CASH),
        _txn("t3", date(2023, 10, 10), 12000, expense, ExpenseCategory.UTILITIES.value,
             "Electricity Bill - Sept", PaymentMethod.BANK_TRANSFER),
        _txn("t4", date(2023, 10, 15), 2500, income, IncomeCategory.TITHE.value,
             "Tithe", PaymentMethod.CASH, member_id="2"),
        _txn("t5", date(2023, 10, 20), 5000, expense, ExpenseCategory.MAINTENANCE.value,
             "AC Repair", PaymentMethod.CASH),
        _txn("t6", date(2023, 10, 22), 500, income, IncomeCategory.LOOSE_OFFERING.value,
             "Evening Service Loose Offering", PaymentMethod.CASH),
        _txn("t7", date(2023, 11, 1), 6000, income, IncomeCategory.TITHE.value,
             "November Tithe", PaymentMethod.UPI, member_id="3"),
        _txn("t8", date(2023, 11, 5), 15000, expense, ExpenseCategory.SALARY.value,
             "Staff Salary", PaymentMethod.BANK_TRANSFER),
        _txn("t9", date(2024, 1, 7), 7500, income, IncomeCategory.TITHE.value,
             "January Tithe", PaymentMethod.UPI, member_id="1"),
        _txn("t10", date(2024, 1, 31), 15000, expense, ExpenseCategory.SALARY.value,
             "Staff Salary - Jan", PaymentMethod.BANK_TRANSFER),
        _txn("t11", date(2024, 2, 12), 9800, expense, ExpenseCategory.UTILITIES.value,
             "Electricity Bill - Jan", PaymentMethod.BANK_TRANSFER),
        _txn("t12", date(2024, 3, 3), 20000, income, IncomeCategory.FUNDRAISING.value,
             "Mission Sunday Fundraiser", PaymentMethod.CASH, budget_id="b2"),
        _txn("t13", date(2024, 3, 18), 12000, expense, ExpenseCategory.CHARITY.value,
             "Village Outreach Supplies", PaymentMethod.CHECK),
    ]


def demo_budgets() -> list[Budget]:
    return [
        Budget(
            id="b1",
            name="General Fund 2024",
            amount=Decimal(250000),
            year=2024,
            categories=[
                ExpenseCategory.SALARY.value,
                ExpenseCategory.UTILITIES.value,
                ExpenseCategory.ADMIN.value,
            ],
        ),
        Budget(
            id="b2",
            name="Missions & Outreach",
            amount=Decimal(50000),
            year=2024,
            categories=[ExpenseCategory.CHARITY.value],
        ),
        Budget(
            id="b3",
            name="Building Maintenance",
            amount=Decimal(100000),
            year=2024,
            categories=[ExpenseCategory.MAINTENANCE.value],
        ),
    ]


def demo_state() -> LedgerState:
    """A fresh state holding the demo dataset."""

    return LedgerState(
        transactions=sort_by_date_desc(tuple(demo_transactions())),
        members=tuple(demo_members()),
        budgets=tuple(demo_budgets()),
        settings=AppSettings(),
    )
