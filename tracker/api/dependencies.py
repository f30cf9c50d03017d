"""FastAPI dependencies for DI (settings, ledger session).

The ledger session lives on the application state so each app instance, including the ones built in tests, owns
its own in-memory ledger.
"""

from fastapi import Request

from tracker.core.settings import get_settings
from tracker.services.ledger import LedgerSession

__all__ = ["get_ledger", "get_settings"]


def get_ledger(request: Request) -> LedgerSession:
    """Provide the application's LedgerSession for dependency injection."""
    return request.app.state.ledger
