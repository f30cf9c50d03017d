"""FastAPI endpoints for the finance tracker API.

This module serves the boundary contracts the tracker front end consumes: the onboarding profile, the dashboard
summary, filtered transaction history, and transaction submission. All state lives in the in-memory LedgerSession
attached to the application.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from tracker.api.dependencies import get_ledger, get_settings
from tracker.core.errors import ValidationError
from tracker.core.models import Profile, SummaryReport, Transaction, TransactionFilter, parse_payload
from tracker.core.settings import Settings
from tracker.core.utils import get_logger
from tracker.services.ledger import LedgerSession

router = APIRouter()
logger = get_logger("finance-tracker.api")

HTTP_422_UNPROCESSABLE = 422


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get(
    "/profile",
    response_model=Profile,
    summary="Get the onboarding profile",
    description=(
        "Return the user's profile. Before onboarding this is the default profile "
        "`{currency_symbol: '$', onboarded: false}`."
    ),
)
def get_profile(ledger: LedgerSession = Depends(get_ledger)) -> Profile:
    """Return the current profile."""
    return ledger.profile


@router.post(
    "/onboarding",
    summary="Store the finished onboarding profile",
    description=(
        "Adopt the profile produced by the onboarding wizard. Accepts `currency_symbol`/`budget_target` "
        "as well as the legacy `currency`/`target` keys.\n\n"
        "**Response:**\n"
        "- 200 OK: `{ 'status': 'ok' }`.\n"
        "- 422 Unprocessable Entity: If the payload does not describe a profile."
    ),
)
def post_onboarding(
    payload: dict[str, Any] = Body(...),
    ledger: LedgerSession = Depends(get_ledger),
) -> dict:
    """Adopt an onboarded profile."""
    try:
        profile = parse_payload(Profile, payload)
    except ValidationError as exc:
        logger.warning(f"Rejected onboarding payload: {exc}")
        raise HTTPException(HTTP_422_UNPROCESSABLE, str(exc)) from exc
    ledger.adopt_profile(profile.model_copy(update={"onboarded": True}))
    return {"status": "ok"}


@router.get(
    "/summary",
    response_model=SummaryReport,
    summary="Get the dashboard summary",
    description=(
        "Balance, income and expense totals over the full history, spend for the current month, "
        "budget progress (month spend divided by the budget target, 0 when no target is set), "
        "and the most recent transactions, newest first."
    ),
)
def get_summary(
    ledger: LedgerSession = Depends(get_ledger),
    settings: Settings = Depends(get_settings),
) -> SummaryReport:
    """Return the summary report for the current month."""
    return ledger.report(limit=settings.recent_limit)


@router.get(
    "/transactions",
    response_model=list[Transaction],
    summary="List transactions",
    description=(
        "Return transactions matching every supplied filter, most recent first.\n\n"
        "**Query parameters (all optional, empty means any):**\n"
        "- `category`: exact, case-sensitive category.\n"
        "- `type`: `income` or `expense`.\n"
        "- `start_date`, `end_date`: inclusive ISO dates (YYYY-MM-DD)."
    ),
)
def list_transactions(
    category: str | None = Query(None),
    type_: str | None = Query(None, alias="type"),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
    ledger: LedgerSession = Depends(get_ledger),
) -> list[Transaction]:
    """Return the filtered transaction history."""
    try:
        criteria = parse_payload(
            TransactionFilter,
            {"category": category, "type": type_, "start_date": start_date, "end_date": end_date},
        )
    except ValidationError as exc:
        raise HTTPException(HTTP_422_UNPROCESSABLE, str(exc)) from exc
    return list(ledger.history(criteria))


@router.post(
    "/transactions",
    status_code=201,
    response_model=Transaction,
    summary="Record a transaction",
    description=(
        "Record an income or expense. The amount must be positive; its sign is implied by `kind` "
        "(`type` is accepted as well). Id and timestamp are assigned when absent.\n\n"
        "**Response:**\n"
        "- 201 Created: The stored transaction.\n"
        "- 422 Unprocessable Entity: Empty title, non-positive amount, or unknown category."
    ),
)
def create_transaction(
    payload: dict[str, Any] = Body(...),
    ledger: LedgerSession = Depends(get_ledger),
) -> Transaction:
    """Store a new transaction."""
    logger.info(f"Received transaction: title={payload.get('title')!r} kind={payload.get('kind', payload.get('type'))}")
    try:
        return ledger.add(payload)
    except ValidationError as exc:
        raise HTTPException(HTTP_422_UNPROCESSABLE, str(exc)) from exc
