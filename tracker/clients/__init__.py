"""Clients package: HTTP client for the backend contracts and the offline-first gateway around it."""

from .backend import BackendClient  # noqa: F401
from .gateway import OfflineFirstGateway, Submission  # noqa: F401
