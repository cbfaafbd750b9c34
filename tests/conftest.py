"""Pytest configuration and shared fixtures for Churchbook tests.

Fixtures keep every test away from the real data directory and the AI
service, and provide factories for building records with sensible defaults.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from churchbook.config import TestConfig
from churchbook.logging_config import ROOT_LOGGER_NAME
from churchbook.models import Budget, Member, PaymentMethod, Transaction, TransactionType
from churchbook.seed import demo_state
from churchbook.state import LedgerStore

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the data directory at a temp dir and drop any AI keys."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("CHURCHBOOK_DATA_DIR", str(data_dir))
    for name in ("CHURCHBOOK_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)

    yield data_dir

    # Close handlers opened by setup_logging so temp files are released
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def config() -> TestConfig:
    return TestConfig()


@pytest.fixture
def store() -> LedgerStore:
    """A store seeded with the demo dataset."""

    return LedgerStore(demo_state())


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def transaction_factory():
    """Factory for building transactions.

    Returns:
        Callable: Function that builds Transaction instances
    """

    counter = {"n": 0}

    def _create_transaction(
        amount="100",
        txn_type: TransactionType = TransactionType.EXPENSE,
        category: str = "Utilities",
        day: date = date(2024, 1, 15),
        **overrides,
    ) -> Transaction:
        counter["n"] += 1
        fields = {
            "id": f"tx{counter['n']}",
            "date": day,
            "amount": Decimal(str(amount)),
            "type": txn_type,
            "category": category,
            "description": f"Entry {counter['n']}",
            "payment_method": PaymentMethod.CASH,
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _create_transaction


@pytest.fixture
def budget_factory():
    """Factory for building budgets."""

    def _create_budget(
        amount="1000",
        categories=("Utilities",),
        year=2024,
        **overrides,
    ) -> Budget:
        fields = {
            "id": "b-test",
            "name": "Test Budget",
            "amount": Decimal(str(amount)),
            "year": year,
            "categories": list(categories),
        }
        fields.update(overrides)
        return Budget(**fields)

    return _create_budget


@pytest.fixture
def member_factory():
    """Factory for building members."""

    counter = {"n": 0}

    def _create_member(name: str = "Test Member", mobile: str = "+91 90000 00000", **overrides) -> Member:
        counter["n"] += 1
        fields = {"id": f"m{counter['n']}", "name": name, "mobile": mobile}
        fields.update(overrides)
        return Member(**fields)

    return _create_member
