"""BackendClient: asynchronous HTTP client for the tracker's boundary contracts.

Every network or protocol failure is raised as TransportError; payloads that do not match the expected entity shapes
are raised as ValidationError. No fallback happens here, see OfflineFirstGateway for that.
"""

from types import TracebackType
from typing import Any

import httpx

from tracker.core.errors import TransportError, ValidationError
from tracker.core.models import (
    Profile,
    SummaryReport,
    Transaction,
    TransactionDraft,
    TransactionFilter,
    parse_payload,
    parse_transactions,
)
from tracker.core.settings import Settings, get_settings
from tracker.core.utils import get_logger

logger = get_logger("finance-tracker.client")

HTTP_404_NOT_FOUND = 404
HTTP_422_UNPROCESSABLE = 422
HTTP_400_BAD_REQUEST = 400


class BackendClient:
    """Client for the profile, summary, transactions, and onboarding endpoints."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client from settings; an explicit transport replaces the network."""
        settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=settings.backend_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BackendClient":
        """Enter the async context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the underlying HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def fetch_profile(self) -> Profile:
        """Retrieve the persisted profile; an absent profile yields the default one."""
        response = await self._request("GET", "/profile", allow_missing=True)
        if response.status_code == HTTP_404_NOT_FOUND or not response.content.strip():
            logger.info("No stored profile, using default")
            return Profile()
        return parse_payload(Profile, self._json(response))

    async def fetch_summary(self) -> SummaryReport:
        """Retrieve the precomputed summary with the recent-activity slice."""
        response = await self._request("GET", "/summary")
        return parse_payload(SummaryReport, self._json(response))

    async def fetch_transactions(self, criteria: TransactionFilter | None = None) -> list[Transaction]:
        """Retrieve the transactions matching a filter, most recent first."""
        params = (criteria or TransactionFilter()).to_query_params()
        response = await self._request("GET", "/transactions", params=params)
        return parse_transactions(self._json(response))

    async def submit_transaction(self, draft: TransactionDraft) -> Transaction:
        """Persist a new transaction and return the stored record."""
        body = draft.model_dump(mode="json", exclude_none=True)
        response = await self._request("POST", "/transactions", json=body)
        return parse_payload(Transaction, self._json(response))

    async def submit_onboarding(self, profile: Profile) -> None:
        """Persist the profile produced by onboarding."""
        await self._request("POST", "/onboarding", json=profile.model_dump(mode="json"))

    async def _request(
        self,
        method: str,
        path: str,
        *,
        allow_missing: bool = False,
        **kwargs: Any,  # noqa: ANN401
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            msg = f"{method} {path} failed: {exc}"
            logger.warning(msg)
            raise TransportError(msg) from exc
        if response.status_code == HTTP_422_UNPROCESSABLE:
            msg = f"{method} {path} rejected: {self._detail(response)}"
            logger.warning(msg)
            raise ValidationError(msg)
        if allow_missing and response.status_code == HTTP_404_NOT_FOUND:
            return response
        if response.status_code >= HTTP_400_BAD_REQUEST:
            msg = f"{method} {path} returned HTTP {response.status_code}"
            logger.warning(msg)
            raise TransportError(msg)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:  # noqa: ANN401
        try:
            return response.json()
        except ValueError as exc:
            msg = f"Response from {response.request.url.path} is not valid JSON"
            raise TransportError(msg) from exc

    @staticmethod
    def _detail(response: httpx.Response) -> str:
        try:
            return str(response.json().get("detail", response.text))
        except (ValueError, AttributeError):
            return response.text
