"""LedgerSession: one user's profile and transactions, with the summary kept current."""

import threading
from collections.abc import Callable, Mapping
from datetime import date, datetime

from tracker.core.errors import ValidationError
from tracker.core.models import Profile, Summary, SummaryReport, Transaction, TransactionDraft, TransactionFilter
from tracker.core.utils import get_logger, month_key, utcnow
from tracker.services import filter_engine
from tracker.services.aggregator import summarize
from tracker.services.store import TransactionStore

logger = get_logger("finance-tracker.ledger")

DEFAULT_RECENT_LIMIT = 6


class LedgerSession:
    """Owns a Profile and a TransactionStore; every successful add recomputes the summary."""

    def __init__(self, profile: Profile | None = None, clock: Callable[[], datetime] = utcnow) -> None:
        """Initialize the session with a profile (defaults to the not-onboarded profile)."""
        self._clock = clock
        self._lock = threading.Lock()
        self.profile = profile or Profile()
        self.store = TransactionStore(allowed_categories=self.profile.allowed_categories, clock=clock)
        self._summary = self._compute(self._today())

    @property
    def summary(self) -> Summary:
        """Summary computed at the last mutation or refresh."""
        return self._summary

    def adopt_profile(self, profile: Profile) -> Summary:
        """Replace the profile (e.g. after onboarding) and recompute against its budget."""
        with self._lock:
            self.profile = profile
            self.store.allowed_categories = profile.allowed_categories
            self._summary = self._compute(self._today())
        logger.info(f"Adopted profile: onboarded={profile.onboarded} target={profile.budget_target}")
        return self._summary

    def add(self, record: TransactionDraft | Mapping) -> Transaction:
        """Store a transaction and recompute the summary."""
        try:
            result = self.store.add(record)
        except ValidationError:
            logger.warning("Transaction rejected by store validation")
            raise
        with self._lock:
            self._summary = self._compute(self._today())
        return result.transaction

    def refresh(self, reference_date: date | None = None) -> Summary:
        """Recompute the summary for a reference date (today when omitted)."""
        with self._lock:
            self._summary = self._compute(reference_date or self._today())
            return self._summary

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> tuple[Transaction, ...]:
        """Most recent transactions, newest first."""
        return self.history(TransactionFilter())[: max(limit, 0)]

    def history(self, criteria: TransactionFilter) -> tuple[Transaction, ...]:
        """Filtered transaction history, newest first."""
        return filter_engine.apply(self.store.all(), criteria)

    def report(self, limit: int = DEFAULT_RECENT_LIMIT, reference_date: date | None = None) -> SummaryReport:
        """Summary for the dashboard, including the budget and recent activity."""
        reference = reference_date or self._today()
        summary = self.refresh(reference)
        return SummaryReport(
            **summary.model_dump(),
            month=month_key(reference),
            budget=self.profile.budget_target,
            recent=self.recent(limit),
        )

    def _compute(self, reference_date: date) -> Summary:
        return summarize(self.store.all(), self.profile.budget_target, reference_date)

    def _today(self) -> date:
        return self._clock().date()
