"""Tests for the summary aggregator."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from conftest import make_transaction

from tracker.core.errors import InvariantViolation
from tracker.core.models import Transaction, TransactionKind
from tracker.services.aggregator import budget_progress, summarize
from tracker.services.store import TransactionStore

REFERENCE = date(2025, 1, 15)


def test_january_example(january: list[Transaction]) -> None:
    """Totals, month spend, and progress for the January sample ledger."""
    summary = summarize(january, Decimal(1200), REFERENCE)
    expected = {
        "income": Decimal("1800.00"),
        "expense": Decimal("45.70"),
        "balance": Decimal("1754.30"),
        "month_spend": Decimal("45.70"),
        "budget_progress": Decimal("0.0381"),
    }
    actual = summary.model_dump()
    if actual != expected:
        msg = f"Expected {expected}, got {actual}"
        raise AssertionError(msg)


def test_balance_is_exact_difference() -> None:
    """Balance equals income minus expense with no float drift."""
    ts = datetime(2025, 1, 10, tzinfo=UTC)
    txns = [make_transaction(f"e{i}", "0.10", TransactionKind.EXPENSE, "Food", ts) for i in range(10)]
    txns.append(make_transaction("i1", "0.30", TransactionKind.INCOME, "Other", ts))
    summary = summarize(txns, Decimal(0), REFERENCE)
    if summary.balance != summary.income - summary.expense or summary.balance != Decimal("-0.70"):
        msg = f"Unexpected balance {summary.balance}"
        raise AssertionError(msg)


def test_month_spend_includes_boundaries_only_for_reference_month() -> None:
    """First and last instants of the month count; neighbouring months and income do not."""
    txns = [
        make_transaction("first", "10.00", TransactionKind.EXPENSE, "Food", datetime(2025, 1, 1, 0, 0, tzinfo=UTC)),
        make_transaction(
            "last", "20.00", TransactionKind.EXPENSE, "Food", datetime(2025, 1, 31, 23, 59, 59, 999999, tzinfo=UTC)
        ),
        make_transaction("dec", "40.00", TransactionKind.EXPENSE, "Food", datetime(2024, 12, 31, 23, 59, tzinfo=UTC)),
        make_transaction("feb", "80.00", TransactionKind.EXPENSE, "Food", datetime(2025, 2, 1, 0, 0, tzinfo=UTC)),
        make_transaction("last-year", "5.00", TransactionKind.EXPENSE, "Food", datetime(2024, 1, 10, tzinfo=UTC)),
        make_transaction("pay", "500.00", TransactionKind.INCOME, "Other", datetime(2025, 1, 2, tzinfo=UTC)),
    ]
    summary = summarize(txns, Decimal(100), REFERENCE)
    if summary.month_spend != Decimal("30.00"):
        msg = f"Expected month spend 30.00, got {summary.month_spend}"
        raise AssertionError(msg)
    if summary.expense != Decimal("155.00"):
        msg = f"Expected full-history expense 155.00, got {summary.expense}"
        raise AssertionError(msg)


def test_zero_budget_yields_zero_progress(january: list[Transaction]) -> None:
    """A missing budget never divides by zero."""
    summary = summarize(january, Decimal(0), REFERENCE)
    if summary.budget_progress != 0:
        msg = f"Expected progress 0, got {summary.budget_progress}"
        raise AssertionError(msg)


def test_progress_is_not_capped_at_one(january: list[Transaction]) -> None:
    """Overspending shows as progress above 1."""
    summary = summarize(january, Decimal(10), REFERENCE)
    if summary.budget_progress != Decimal("4.5700"):
        msg = f"Expected progress 4.5700, got {summary.budget_progress}"
        raise AssertionError(msg)


def test_empty_ledger() -> None:
    """No transactions gives an all-zero summary."""
    summary = summarize([], Decimal(1000), REFERENCE)
    if any(value != 0 for value in summary.model_dump().values()):
        msg = f"Expected all zeros, got {summary}"
        raise AssertionError(msg)


def test_unvalidated_amount_is_an_invariant_violation() -> None:
    """Records that bypassed validation are rejected instead of summed."""
    bad = Transaction.model_construct(
        id="bad",
        title="Refund",
        amount=Decimal("-5.00"),
        kind=TransactionKind.EXPENSE,
        category="Other",
        notes=None,
        timestamp=datetime(2025, 1, 3, tzinfo=UTC),
    )
    with pytest.raises(InvariantViolation):
        summarize([bad], Decimal(100), REFERENCE)


def test_negative_budget_is_an_invariant_violation(january: list[Transaction]) -> None:
    """Budget targets are validated upstream to be non-negative."""
    with pytest.raises(InvariantViolation):
        summarize(january, Decimal(-1), REFERENCE)


def test_month_membership_uses_utc() -> None:
    """An offset timestamp counts toward the month it falls in once converted to UTC."""
    txn = TransactionStore().add({"title": "Late dinner", "amount": "30", "date": "2025-02-01T01:00:00+05:00"})
    summary = summarize([txn.transaction], Decimal(100), REFERENCE)
    if summary.month_spend != Decimal("30.00"):
        msg = f"Expected the dinner in January's spend, got {summary.month_spend}"
        raise AssertionError(msg)


def test_progress_against_a_tiny_budget_stays_finite() -> None:
    """A one-cent budget against a very large spend still yields a finite, non-negative ratio."""
    progress = budget_progress(Decimal("1e26"), Decimal("0.01"))
    if not progress.is_finite() or progress != Decimal("1e28"):
        msg = f"Expected 1E+28, got {progress}"
        raise AssertionError(msg)
