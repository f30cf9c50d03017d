"""Pydantic models for the finance tracker.

This module defines the value types shared by every layer: transactions and their submission drafts, the onboarding
profile, the derived summary, and the history filter. It also provides the boundary parsers that turn untrusted JSON
into these typed entities, raising the tracker's own ValidationError on shape mismatch.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from tracker.core.errors import ValidationError
from tracker.core.utils import as_utc, quantize_money

OTHER_CATEGORY = "Other"
DEFAULT_CURRENCY_SYMBOL = "$"

ModelT = TypeVar("ModelT", bound=BaseModel)


class TransactionKind(StrEnum):
    """Direction of a transaction; the sign of its amount is derived from it."""

    INCOME = "income"
    EXPENSE = "expense"


class Currency(BaseModel):
    """A selectable currency: ISO code plus display symbol."""

    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str


class Transaction(BaseModel):
    """A stored income or expense record. The amount is always positive."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    amount: Decimal
    kind: TransactionKind = Field(validation_alias=AliasChoices("kind", "type"))
    category: str = OTHER_CATEGORY
    notes: str | None = None
    timestamp: datetime = Field(validation_alias=AliasChoices("timestamp", "date"))

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "title must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            msg = "amount must be a finite number"
            raise ValueError(msg)
        value = quantize_money(value)
        if value <= 0:
            msg = "amount must be greater than zero"
            raise ValueError(msg)
        return value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_aware(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the kind."""
        return self.amount if self.kind == TransactionKind.INCOME else -self.amount


class TransactionDraft(BaseModel):
    """A transaction as submitted by the user, before the store assigns id and timestamp."""

    title: str = ""
    amount: Decimal
    kind: TransactionKind = Field(TransactionKind.EXPENSE, validation_alias=AliasChoices("kind", "type"))
    category: str = OTHER_CATEGORY
    notes: str | None = None
    id: str | None = None
    timestamp: datetime | None = Field(None, validation_alias=AliasChoices("timestamp", "date"))


class Profile(BaseModel):
    """Onboarding-derived configuration: currency, monthly budget target, and categories."""

    model_config = ConfigDict(frozen=True)

    currency_symbol: str = Field(
        DEFAULT_CURRENCY_SYMBOL, validation_alias=AliasChoices("currency_symbol", "currency")
    )
    budget_target: Decimal = Field(Decimal(0), ge=0, validation_alias=AliasChoices("budget_target", "target"))
    categories: tuple[str, ...] = ()
    onboarded: bool = False

    @field_validator("budget_target")
    @classmethod
    def _target_in_cents(cls, value: Decimal) -> Decimal:
        return quantize_money(value)

    @field_validator("categories")
    @classmethod
    def _unique_categories(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @property
    def allowed_categories(self) -> frozenset[str] | None:
        """Categories a transaction may use, or None before onboarding when any label is accepted."""
        if not self.onboarded:
            return None
        return frozenset(self.categories) | {OTHER_CATEGORY}


class Summary(BaseModel):
    """Aggregate view of the ledger relative to a reference month."""

    model_config = ConfigDict(frozen=True)

    balance: Decimal
    income: Decimal
    expense: Decimal
    month_spend: Decimal
    budget_progress: Decimal


class SummaryReport(Summary):
    """Summary as served to the dashboard, with the budget and a recent-activity slice."""

    month: str
    budget: Decimal
    recent: tuple[Transaction, ...] = ()


class TransactionFilter(BaseModel):
    """Optional predicates narrowing a history query. Empty strings mean "any"."""

    model_config = ConfigDict(frozen=True)

    category: str | None = None
    kind: TransactionKind | None = Field(None, validation_alias=AliasChoices("kind", "type"))
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("category", "kind", "start_date", "end_date", mode="before")
    @classmethod
    def _blank_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_query_params(self) -> dict[str, str]:
        """Render the filter as the query parameters of the transactions endpoint."""
        params: dict[str, str] = {}
        if self.category is not None:
            params["category"] = self.category
        if self.kind is not None:
            params["type"] = self.kind.value
        if self.start_date is not None:
            params["start_date"] = self.start_date.isoformat()
        if self.end_date is not None:
            params["end_date"] = self.end_date.isoformat()
        return params


def parse_payload(model: type[ModelT], payload: Any) -> ModelT:  # noqa: ANN401
    """Validate untrusted data into a model, raising the tracker's ValidationError on mismatch."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        msg = f"Invalid {model.__name__} payload: {exc.error_count()} error(s): {_describe(exc)}"
        raise ValidationError(msg) from exc


def parse_transactions(payload: Any) -> list[Transaction]:  # noqa: ANN401
    """Validate a JSON array of transactions."""
    if not isinstance(payload, list):
        msg = f"Expected a list of transactions, got {type(payload).__name__}"
        raise ValidationError(msg)
    return [parse_payload(Transaction, item) for item in payload]


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}" for err in exc.errors())
