"""Shared utility functions for the finance tracker."""

import logging
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import colorlog

CENTS = Decimal("0.01")
ROOT_LOGGER = "finance-tracker"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project.

    Loggers below the project namespace (``finance-tracker.store`` and so on) carry no handler of their own and
    propagate to the project logger, so handlers added there (such as the log file) see every module's records.
    """
    logger = logging.getLogger(name)
    if name.startswith(f"{ROOT_LOGGER}."):
        get_logger(ROOT_LOGGER)
        return logger
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def safe_decimal(val: object, default: Decimal | None = None) -> Decimal | None:
    """Convert a value to a finite Decimal, returning default on failure."""
    if isinstance(val, bool) or val is None:
        return default
    try:
        result = Decimal(val.strip().replace(",", "")) if isinstance(val, str) else Decimal(str(val))
    except (InvalidOperation, ValueError, TypeError):
        return default
    if not result.is_finite():
        return default
    return result


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary value to cents.

    Raises ValueError when the value has too many digits to be expressed in cents.
    """
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        msg = f"{value} is out of range for a monetary amount"
        raise ValueError(msg) from exc


def utcnow() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def month_key(value: date) -> str:
    """Format the year and month of a date as YYYY-MM."""
    return f"{value.year:04d}-{value.month:02d}"
