"""Shared fixtures: a fixed clock and the January sample ledger."""

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from tracker.core.models import Transaction, TransactionKind

REFERENCE_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def make_transaction(
    txn_id: str,
    amount: str,
    kind: TransactionKind,
    category: str,
    timestamp: datetime,
    title: str = "Entry",
) -> Transaction:
    """Build a validated transaction for tests."""
    return Transaction(
        id=txn_id,
        title=title,
        amount=Decimal(amount),
        kind=kind,
        category=category,
        timestamp=timestamp,
    )


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """A clock frozen at 2025-01-15 12:00 UTC."""
    return lambda: REFERENCE_NOW


@pytest.fixture
def january() -> list[Transaction]:
    """Groceries and metro expenses plus a salary, all in January 2025."""
    expense, income = TransactionKind.EXPENSE, TransactionKind.INCOME
    return [
        make_transaction("t1", "42.50", expense, "Food", datetime(2025, 1, 5, 9, 30, tzinfo=UTC), "Groceries"),
        make_transaction("t2", "3.20", expense, "Transport", datetime(2025, 1, 6, 8, 0, tzinfo=UTC), "Metro"),
        make_transaction("t3", "1800.00", income, "Other", datetime(2025, 1, 1, 0, 0, tzinfo=UTC), "Salary"),
    ]
