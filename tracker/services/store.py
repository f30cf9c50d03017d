"""TransactionStore: ordered, append-only collection of validated transactions."""

import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from tracker.core.errors import ValidationError
from tracker.core.models import OTHER_CATEGORY, Transaction, TransactionDraft, parse_payload
from tracker.core.utils import get_logger, utcnow

logger = get_logger("finance-tracker.store")


def as_draft(record: TransactionDraft | Mapping) -> TransactionDraft:
    """Coerce a submission into a TransactionDraft."""
    return record if isinstance(record, TransactionDraft) else parse_payload(TransactionDraft, record)


def materialize(draft: TransactionDraft, clock: Callable[[], datetime] = utcnow) -> Transaction:
    """Validate a draft and build the Transaction it describes, generating id and timestamp if absent."""
    try:
        return Transaction(
            id=draft.id or uuid.uuid4().hex,
            title=draft.title,
            amount=draft.amount,
            kind=draft.kind,
            category=draft.category,
            notes=draft.notes or None,
            timestamp=draft.timestamp or clock(),
        )
    except PydanticValidationError as exc:
        msg = "; ".join(err["msg"] for err in exc.errors())
        logger.warning(f"Rejected transaction '{draft.title}': {msg}")
        raise ValidationError(msg) from exc


def check_category(draft: TransactionDraft, allowed: frozenset[str] | None) -> None:
    """Reject a draft whose category is outside the allowed set; None accepts any category."""
    if allowed is not None and draft.category not in allowed:
        msg = f"Unknown category '{draft.category}'"
        logger.warning(f"Rejected transaction: {msg}")
        raise ValidationError(msg)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a successful add: the stored record and its insertion position."""

    transaction: Transaction
    position: int


class TransactionStore:
    """Append-only store of transactions in insertion order.

    Only `add` mutates the store; records cannot be edited or removed once stored. Mutation runs under a lock so
    concurrent writers never lose an update and readers never see a half-applied add.
    """

    def __init__(
        self,
        allowed_categories: Iterable[str] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize an empty store, optionally restricted to a set of categories."""
        self._records: list[Transaction] = []
        self._ids: set[str] = set()
        self._lock = threading.Lock()
        self._clock = clock
        self.allowed_categories = allowed_categories

    @property
    def allowed_categories(self) -> frozenset[str] | None:
        """Categories accepted by `add`, or None when any category is accepted."""
        return self._allowed

    @allowed_categories.setter
    def allowed_categories(self, categories: Iterable[str] | None) -> None:
        self._allowed = None if categories is None else frozenset(categories) | {OTHER_CATEGORY}

    def add(self, record: TransactionDraft | Mapping) -> StoreResult:
        """Validate a submission, assign id and timestamp if absent, and append it.

        Raises ValidationError for invalid fields, a disallowed category, or an id that is already stored.
        """
        draft = as_draft(record)
        check_category(draft, self._allowed)
        transaction = materialize(draft, self._clock)
        with self._lock:
            if transaction.id in self._ids:
                msg = f"Duplicate transaction id '{transaction.id}'"
                logger.warning(f"Rejected transaction: {msg}")
                raise ValidationError(msg)
            self._ids.add(transaction.id)
            self._records.append(transaction)
            position = len(self._records) - 1
        logger.info(f"Stored transaction {transaction.id}: {transaction.kind.value} {transaction.amount}")
        return StoreResult(transaction=transaction, position=position)

    def all(self) -> tuple[Transaction, ...]:
        """Return every record in insertion order."""
        with self._lock:
            return tuple(self._records)

    def query(self, predicate: Callable[[Transaction], bool]) -> tuple[Transaction, ...]:
        """Return the records matching a predicate, preserving store order."""
        return tuple(record for record in self.all() if predicate(record))

    def __len__(self) -> int:
        """Return the number of stored records."""
        with self._lock:
            return len(self._records)
