"""Filter engine for transaction history views."""

from collections.abc import Iterable

from tracker.core.models import Transaction, TransactionFilter


def matches(txn: Transaction, criteria: TransactionFilter) -> bool:
    """Check a transaction against every constraint present in the filter.

    Category matching is exact and case-sensitive. Date bounds are inclusive and compared by calendar day, so the
    time of day of the transaction never excludes it from its own date.
    """
    if criteria.category is not None and txn.category != criteria.category:
        return False
    if criteria.kind is not None and txn.kind != criteria.kind:
        return False
    day = txn.timestamp.date()
    if criteria.start_date is not None and day < criteria.start_date:
        return False
    return criteria.end_date is None or day <= criteria.end_date


def apply(transactions: Iterable[Transaction], criteria: TransactionFilter) -> tuple[Transaction, ...]:
    """Return the matching transactions, most recent first; ties keep their input order."""
    selected = [txn for txn in transactions if matches(txn, criteria)]
    return tuple(sorted(selected, key=lambda txn: txn.timestamp, reverse=True))
