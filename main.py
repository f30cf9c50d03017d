"""Main entrypoint and application factory for the finance tracker API.

This module builds the FastAPI application, configures logging, attaches the in-memory ledger session, and exposes
the Scalar API reference endpoint for interactive OpenAPI documentation. It also includes the main entrypoint for
running the app with Uvicorn.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from scalar_fastapi import get_scalar_api_reference

from tracker.api.routes import router
from tracker.core.settings import get_settings
from tracker.core.utils import get_logger
from tracker.services.ledger import LedgerSession


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console, and ensure the log directory exists."""
    log_file = Path(get_settings().log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = get_logger("finance-tracker")
    logger.setLevel(logging.INFO)
    # Add file handler for persistent logs (not colorized)
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(file_handler)
    logger.propagate = False


def create_app(ledger: LedgerSession | None = None) -> FastAPI:
    """Build the API around a ledger session (a fresh, not-onboarded one by default)."""
    app = FastAPI(
        docs_url="/docs",
        redoc_url="/redoc",
        title="Finance Tracker API",
        description="""
        The Finance Tracker API records income and expenses and reports spending against a monthly budget.

        **Endpoints:**
        - `GET /profile`: The onboarding profile (currency, budget target, categories).
        - `POST /onboarding`: Store the profile produced by the onboarding wizard.
        - `GET /summary`: Balance, totals, month spend, budget progress, and recent activity.
        - `GET /transactions`: Filtered history (`category`, `type`, `start_date`, `end_date`).
        - `POST /transactions`: Record a transaction.
        - `GET /health`: Health check endpoint.
        - `GET /scalar`: Interactive Scalar OpenAPI documentation.
        """,
        version="1.0.0",
    )
    app.state.ledger = ledger or LedgerSession()
    app.include_router(router)

    @app.get("/scalar", include_in_schema=False)
    async def scalar_docs() -> HTMLResponse:
        """Return Scalar API reference."""
        return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)

    return app


setup_logging()

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
