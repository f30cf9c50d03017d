"""Onboarding wizard: a linear sequence of setup steps that produces the user's Profile.

The wizard never raises. Every field has a safe default, an unknown currency code is ignored, and a malformed
budget amount counts as zero, so onboarding can always be finished.
"""

import re
from decimal import Decimal
from enum import IntEnum

from tracker.core.models import Currency, Profile
from tracker.core.utils import get_logger, quantize_money, safe_decimal

logger = get_logger("finance-tracker.onboarding")

CURRENCIES: tuple[Currency, ...] = (
    Currency(code="USD", symbol="$"),
    Currency(code="EUR", symbol="€"),
    Currency(code="GBP", symbol="£"),
    Currency(code="JPY", symbol="¥"),
    Currency(code="INR", symbol="₹"),
    Currency(code="AUD", symbol="A$"),
    Currency(code="CAD", symbol="C$"),
)

DEFAULT_CATEGORIES: tuple[str, ...] = ("Food", "Bills", "Transport", "Shopping", "Savings", "Other")

DEFAULT_BUDGET_TEXT = "1000"

NUMERIC_PREFIX = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class Step(IntEnum):
    """Wizard states in the order they are visited."""

    WELCOME = 0
    CURRENCY = 1
    BUDGET_TARGET = 2
    CATEGORIES = 3
    COMPLETE = 4


LAST_INPUT_STEP = Step.CATEGORIES


def parse_budget_target(text: str | None) -> Decimal:
    """Parse free-text budget input leniently, rounded to cents; anything unusable becomes zero.

    Like a browser number field, the leading number is used and trailing text is ignored, so "12abc" is 12.
    Thousands separators are dropped. Negative amounts, and amounts too large or too small to hold in cents,
    count as zero.
    """
    match = NUMERIC_PREFIX.match((text or "").strip().replace(",", ""))
    value = safe_decimal(match.group() if match else None, default=Decimal(0))
    try:
        value = quantize_money(value)
    except ValueError:
        logger.warning(f"Ignoring out-of-range budget target '{text}'")
        return Decimal(0)
    if value < 0:
        return Decimal(0)
    return value


class OnboardingWizard:
    """Collects currency, budget target, and categories, then materializes the Profile."""

    def __init__(self) -> None:
        """Start at the welcome step with default selections."""
        self.step = Step.WELCOME
        self.currency = CURRENCIES[0]
        self.budget_text = DEFAULT_BUDGET_TEXT
        self._categories: list[str] = list(DEFAULT_CATEGORIES)
        self._profile: Profile | None = None

    @property
    def complete(self) -> bool:
        """Whether finish() has been called."""
        return self.step is Step.COMPLETE

    @property
    def categories(self) -> tuple[str, ...]:
        """Currently selected categories, in selection order."""
        return tuple(self._categories)

    @property
    def budget_target(self) -> Decimal:
        """Budget target parsed from the current text input."""
        return parse_budget_target(self.budget_text)

    def next(self) -> Step:
        """Advance one step; stays on the last input step."""
        if not self.complete:
            self.step = Step(min(self.step + 1, LAST_INPUT_STEP))
        return self.step

    def prev(self) -> Step:
        """Go back one step; stays on the welcome step."""
        if not self.complete:
            self.step = Step(max(self.step - 1, Step.WELCOME))
        return self.step

    def select_currency(self, code: str) -> Currency:
        """Select a currency by ISO code; unknown codes keep the current selection."""
        for currency in CURRENCIES:
            if currency.code == code.upper():
                self.currency = currency
                return currency
        logger.warning(f"Ignoring unknown currency code '{code}', keeping {self.currency.code}")
        return self.currency

    def set_budget_text(self, text: str | None) -> Decimal:
        """Store raw budget input and return the value it parses to."""
        self.budget_text = text or ""
        return self.budget_target

    def toggle_category(self, name: str) -> tuple[str, ...]:
        """Remove a default category if selected, otherwise add it at the end."""
        if name in self._categories:
            self._categories.remove(name)
        elif name in DEFAULT_CATEGORIES:
            self._categories.append(name)
        else:
            logger.warning(f"Ignoring unknown category '{name}'")
        return self.categories

    def finish(self) -> Profile:
        """Materialize the onboarded Profile; repeated calls return the same Profile."""
        if self._profile is None:
            self._profile = Profile(
                currency_symbol=self.currency.symbol,
                budget_target=self.budget_target,
                categories=self.categories,
                onboarded=True,
            )
            self.step = Step.COMPLETE
            logger.info(
                f"Onboarding complete: currency={self._profile.currency_symbol} "
                f"target={self._profile.budget_target} categories={list(self._profile.categories)}"
            )
        return self._profile
