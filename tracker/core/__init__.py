"""Core package: provides models, errors, settings, and shared utilities."""

from .errors import InvariantViolation, TrackerError, TransportError, ValidationError  # noqa: F401
from .models import (  # noqa: F401
    Profile,
    Summary,
    SummaryReport,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    TransactionKind,
)
from .settings import Settings  # noqa: F401
from .utils import get_logger  # noqa: F401
