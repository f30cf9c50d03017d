"""OfflineFirstGateway: the single place where backend failures are replaced by local or demo data.

Callers never see a TransportError from the gateway. The summary call returns an explicit Ok/Err result, and the
demo substitution happens once, in summary_or_demo. History falls back to filtering the last known recent slice,
submissions fall back to an optimistic local record, and onboarding adopts the profile even when it cannot be
persisted.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from tracker.clients.backend import BackendClient
from tracker.core.errors import TransportError, ValidationError
from tracker.core.models import (
    Profile,
    SummaryReport,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    TransactionKind,
)
from tracker.core.result import Err, Ok, Result
from tracker.core.utils import get_logger, month_key, utcnow
from tracker.services import filter_engine
from tracker.services.aggregator import budget_progress
from tracker.services.onboarding import OnboardingWizard
from tracker.services.store import as_draft, check_category, materialize

logger = get_logger("finance-tracker.gateway")


@dataclass(frozen=True)
class Submission:
    """A submitted transaction; `synced` is False when it only exists locally."""

    transaction: Transaction
    synced: bool


def demo_report(now: datetime) -> SummaryReport:
    """Static sample dashboard shown while the backend is unreachable."""
    income = Decimal("1800.00")
    expense = Decimal("712.60")
    month_spend = Decimal("412.60")
    budget = Decimal("1200.00")
    samples = (
        ("1", "Groceries", Decimal("42.50"), TransactionKind.EXPENSE, "Food"),
        ("2", "Metro", Decimal("3.20"), TransactionKind.EXPENSE, "Transport"),
        ("3", "Salary", income, TransactionKind.INCOME, "Other"),
    )
    recent = tuple(
        Transaction(id=txn_id, title=title, amount=amount, kind=kind, category=category, timestamp=now)
        for txn_id, title, amount, kind, category in samples
    )
    return SummaryReport(
        balance=income - expense,
        income=income,
        expense=expense,
        month_spend=month_spend,
        budget_progress=budget_progress(month_spend, budget),
        month=month_key(now.date()),
        budget=budget,
        recent=recent,
    )


class OfflineFirstGateway:
    """Wraps BackendClient and degrades gracefully whenever the backend is unavailable."""

    def __init__(self, client: BackendClient, clock: Callable[[], datetime] = utcnow) -> None:
        """Initialize the gateway with a backend client and a clock for locally generated data."""
        self.client = client
        self._clock = clock
        self.profile = Profile()
        self.recent: list[Transaction] = []

    async def load_profile(self) -> Profile:
        """Fetch the profile, keeping the default one when the backend is unavailable."""
        try:
            self.profile = await self.client.fetch_profile()
        except (TransportError, ValidationError) as exc:
            logger.warning(f"Profile unavailable, using default: {exc}")
            self.profile = Profile()
        return self.profile

    async def fetch_summary(self) -> Result[SummaryReport, TransportError]:
        """Fetch the summary report as an explicit result."""
        try:
            return Ok(await self.client.fetch_summary())
        except TransportError as exc:
            return Err(exc)
        except ValidationError as exc:
            error = TransportError(f"Unusable summary payload: {exc}")
            error.__cause__ = exc
            return Err(error)

    async def summary_or_demo(self) -> SummaryReport:
        """Fetch the summary report, substituting the demo report on failure."""
        result = await self.fetch_summary()
        if not result.ok:
            logger.warning(f"Summary unavailable, showing demo data: {result.error}")
        report = result.unwrap_or(demo_report(self._clock()))
        self.recent = list(report.recent)
        return report

    async def history(self, criteria: TransactionFilter | None = None) -> tuple[Transaction, ...]:
        """Fetch filtered history, filtering the last known recent slice locally on failure."""
        criteria = criteria or TransactionFilter()
        try:
            return tuple(await self.client.fetch_transactions(criteria))
        except (TransportError, ValidationError) as exc:
            logger.warning(f"History unavailable, filtering {len(self.recent)} local records: {exc}")
            return filter_engine.apply(self.recent, criteria)

    async def add_transaction(self, record: TransactionDraft | dict) -> Submission:
        """Submit a transaction; on transport failure keep an optimistic local copy.

        Input is validated locally first, against the adopted profile's categories too, so a ValidationError is
        raised before anything is sent.
        """
        draft = as_draft(record)
        check_category(draft, self.profile.allowed_categories)
        local = materialize(draft, self._clock)
        try:
            stored = await self.client.submit_transaction(draft)
        except TransportError as exc:
            logger.warning(f"Submit failed, keeping local transaction {local.id}: {exc}")
            self.recent.insert(0, local)
            return Submission(transaction=local, synced=False)
        self.recent.insert(0, stored)
        return Submission(transaction=stored, synced=True)

    async def complete_onboarding(self, wizard: OnboardingWizard) -> Profile:
        """Finish the wizard, persist the profile if possible, and adopt it either way."""
        profile = wizard.finish()
        try:
            await self.client.submit_onboarding(profile)
        except (TransportError, ValidationError) as exc:
            logger.warning(f"Onboarding not persisted: {exc}")
        self.profile = profile
        return profile
