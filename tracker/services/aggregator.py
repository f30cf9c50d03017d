"""Aggregator: derives balance, totals, monthly spend, and budget progress from transactions.

Every input is passed in explicitly; the function reads no ambient state and has no side effects. Inputs are
expected to have passed store validation, so a malformed record signals a bug upstream and raises
InvariantViolation instead of being silently summed.
"""

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

from tracker.core.errors import InvariantViolation
from tracker.core.models import Summary, Transaction, TransactionKind

PROGRESS_QUANTUM = Decimal("0.0001")
ZERO = Decimal("0.00")


def summarize(transactions: Iterable[Transaction], budget_target: Decimal, reference_date: date) -> Summary:
    """Compute the summary of a transaction set against a monthly budget target."""
    target = _check_target(budget_target)
    income = ZERO
    expense = ZERO
    month_spend = ZERO
    for txn in transactions:
        _check_transaction(txn)
        if txn.kind == TransactionKind.INCOME:
            income += txn.amount
            continue
        expense += txn.amount
        if txn.timestamp.year == reference_date.year and txn.timestamp.month == reference_date.month:
            month_spend += txn.amount
    return Summary(
        balance=income - expense,
        income=income,
        expense=expense,
        month_spend=month_spend,
        budget_progress=budget_progress(month_spend, target),
    )


def budget_progress(month_spend: Decimal, budget_target: Decimal) -> Decimal:
    """Ratio of monthly spend to the target; zero when no budget is set."""
    if budget_target <= 0:
        return Decimal(0).quantize(PROGRESS_QUANTUM)
    ratio = max(month_spend / budget_target, Decimal(0))
    with localcontext() as ctx:
        # Room for every integer digit of the ratio plus the four decimal places.
        ctx.prec = max(ctx.prec, ratio.adjusted() + 1 - PROGRESS_QUANTUM.as_tuple().exponent)
        return ratio.quantize(PROGRESS_QUANTUM, rounding=ROUND_HALF_UP)


def _check_target(budget_target: Decimal) -> Decimal:
    target = Decimal(budget_target)
    if not target.is_finite() or target < 0:
        msg = f"Budget target must be a finite non-negative number, got {budget_target!r}"
        raise InvariantViolation(msg)
    return target


def _check_transaction(txn: Transaction) -> None:
    if not isinstance(txn.amount, Decimal) or not txn.amount.is_finite() or txn.amount <= 0:
        msg = f"Transaction {txn.id} has non-positive or non-finite amount {txn.amount!r}"
        raise InvariantViolation(msg)
    if txn.kind not in (TransactionKind.INCOME, TransactionKind.EXPENSE):
        msg = f"Transaction {txn.id} has unknown kind {txn.kind!r}"
        raise InvariantViolation(msg)
