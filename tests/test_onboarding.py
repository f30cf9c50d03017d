"""Tests for the onboarding wizard."""

from decimal import Decimal

import pytest

from tracker.services.onboarding import DEFAULT_CATEGORIES, OnboardingWizard, Step, parse_budget_target


def test_three_steps_reach_categories_then_finish() -> None:
    """WELCOME plus three next() calls lands on CATEGORIES; finish() completes with defaults."""
    wizard = OnboardingWizard()
    for _ in range(3):
        wizard.next()
    if wizard.step is not Step.CATEGORIES:
        msg = f"Expected CATEGORIES, got {wizard.step.name}"
        raise AssertionError(msg)
    profile = wizard.finish()
    if not profile.onboarded or profile.currency_symbol != "$" or profile.budget_target != Decimal(1000):
        msg = f"Unexpected default profile: {profile}"
        raise AssertionError(msg)
    if profile.categories != DEFAULT_CATEGORIES or wizard.step is not Step.COMPLETE:
        msg = f"Expected default categories and COMPLETE, got {profile.categories} / {wizard.step.name}"
        raise AssertionError(msg)


def test_navigation_is_clamped() -> None:
    """prev() stays on WELCOME and next() stays on CATEGORIES."""
    wizard = OnboardingWizard()
    if wizard.prev() is not Step.WELCOME:
        msg = "prev() must not leave WELCOME"
        raise AssertionError(msg)
    for _ in range(10):
        wizard.next()
    if wizard.step is not Step.CATEGORIES:
        msg = f"next() must stop at CATEGORIES, got {wizard.step.name}"
        raise AssertionError(msg)


@pytest.mark.parametrize("start", [Step.CURRENCY, Step.BUDGET_TARGET])
def test_next_then_prev_preserves_selections(start: Step) -> None:
    """Moving forward and back returns to the same step with every selection intact."""
    wizard = OnboardingWizard()
    wizard.select_currency("EUR")
    wizard.set_budget_text("750.25")
    wizard.toggle_category("Savings")
    while wizard.step is not start:
        wizard.next()
    wizard.next()
    wizard.prev()
    if wizard.step is not start:
        msg = f"Expected {start.name}, got {wizard.step.name}"
        raise AssertionError(msg)
    state = (wizard.currency.code, wizard.budget_target, "Savings" in wizard.categories)
    if state != ("EUR", Decimal("750.25"), False):
        msg = f"Selections changed: {state}"
        raise AssertionError(msg)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", Decimal(0)),
        (None, Decimal(0)),
        ("abc", Decimal(0)),
        ("-50", Decimal(0)),
        ("NaN", Decimal(0)),
        ("Infinity", Decimal(0)),
        (" 1,200.50 ", Decimal("1200.50")),
        ("12abc", Decimal(12)),
        ("99.999", Decimal("100.00")),
        ("1e-25", Decimal(0)),
        ("1e30", Decimal(0)),
    ],
)
def test_budget_text_is_parsed_leniently(text: str | None, expected: Decimal) -> None:
    """Unusable budget input becomes zero instead of an error."""
    if parse_budget_target(text) != expected:
        msg = f"Expected {expected} for {text!r}, got {parse_budget_target(text)}"
        raise AssertionError(msg)


def test_empty_budget_input_finishes_with_zero_target() -> None:
    """An emptied budget field still produces a profile, with a zero target."""
    wizard = OnboardingWizard()
    wizard.set_budget_text("")
    profile = wizard.finish()
    if profile.budget_target != 0:
        msg = f"Expected zero target, got {profile.budget_target}"
        raise AssertionError(msg)


def test_toggle_categories_may_empty_the_set() -> None:
    """Toggling removes and re-appends; the selection may become empty."""
    wizard = OnboardingWizard()
    for name in DEFAULT_CATEGORIES:
        wizard.toggle_category(name)
    if wizard.categories != ():
        msg = f"Expected no categories, got {wizard.categories}"
        raise AssertionError(msg)
    wizard.toggle_category("Bills")
    wizard.toggle_category("Food")
    wizard.toggle_category("Crypto")
    if wizard.finish().categories != ("Bills", "Food"):
        msg = f"Expected ('Bills', 'Food'), got {wizard.categories}"
        raise AssertionError(msg)


def test_unknown_currency_keeps_selection() -> None:
    """An unlisted currency code is ignored."""
    wizard = OnboardingWizard()
    wizard.select_currency("inr")
    wizard.select_currency("XYZ")
    if wizard.currency.symbol != "₹":
        msg = f"Expected ₹, got {wizard.currency.symbol}"
        raise AssertionError(msg)


def test_finish_is_idempotent_and_freezes_navigation() -> None:
    """After finish(), navigation is inert and finish() returns the same profile."""
    wizard = OnboardingWizard()
    first = wizard.finish()
    wizard.prev()
    wizard.set_budget_text("5")
    if wizard.step is not Step.COMPLETE or wizard.finish() is not first:
        msg = "Expected a completed wizard returning the first profile"
        raise AssertionError(msg)


def test_tiny_budget_target_finishes_as_zero() -> None:
    """A target below half a cent rounds to zero, so the profile never divides by a vanishing budget."""
    wizard = OnboardingWizard()
    wizard.set_budget_text("1e-25")
    profile = wizard.finish()
    if profile.budget_target != 0:
        msg = f"Expected zero target, got {profile.budget_target}"
        raise AssertionError(msg)
