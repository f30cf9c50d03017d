"""Services package: transaction store, aggregator, filter engine, onboarding wizard, and ledger session."""

from .ledger import LedgerSession  # noqa: F401
from .onboarding import OnboardingWizard  # noqa: F401
from .store import StoreResult, TransactionStore  # noqa: F401
