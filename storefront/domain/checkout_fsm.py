"""Checkout workflow transition rules (single source of truth)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .customer import ADDRESS, EMAIL, PAYMENT, PHONE, ValidationResult


class CheckoutState(str, Enum):
    """Where the shopper is in the browse -> checkout flow."""

    BROWSING = "browsing"
    PREVIEWING = "previewing"
    CART_REVIEW = "cart_review"
    ORDER_DETAILS = "order_details"
    CONTACT_DETAILS = "contact_details"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


ALLOWED_TRANSITIONS: Mapping[CheckoutState, frozenset[CheckoutState]] = {
    CheckoutState.BROWSING: frozenset(
        {
            CheckoutState.PREVIEWING,
            CheckoutState.CART_REVIEW,
        }
    ),
    CheckoutState.PREVIEWING: frozenset(
        {
            CheckoutState.BROWSING,
            CheckoutState.CART_REVIEW,
        }
    ),
    CheckoutState.CART_REVIEW: frozenset(
        {
            CheckoutState.ORDER_DETAILS,
            CheckoutState.BROWSING,
        }
    ),
    CheckoutState.ORDER_DETAILS: frozenset(
        {
            CheckoutState.CONTACT_DETAILS,
            CheckoutState.BROWSING,
        }
    ),
    CheckoutState.CONTACT_DETAILS: frozenset(
        {
            CheckoutState.SUBMITTING,
            CheckoutState.BROWSING,
        }
    ),
    CheckoutState.SUBMITTING: frozenset(
        {
            CheckoutState.SUCCESS,
            CheckoutState.FAILED,
        }
    ),
    CheckoutState.SUCCESS: frozenset({CheckoutState.BROWSING}),
    CheckoutState.FAILED: frozenset(
        {
            CheckoutState.CONTACT_DETAILS,
            CheckoutState.BROWSING,
        }
    ),
}

# States that show content in the modal; a close gesture returns to browsing
MODAL_STATES = frozenset(
    {
        CheckoutState.PREVIEWING,
        CheckoutState.CART_REVIEW,
        CheckoutState.ORDER_DETAILS,
        CheckoutState.CONTACT_DETAILS,
        CheckoutState.SUCCESS,
        CheckoutState.FAILED,
    }
)

# Customer fields each form step validates. Adding a step is a data change.
STEP_FIELDS: Mapping[CheckoutState, frozenset[str]] = {
    CheckoutState.ORDER_DETAILS: frozenset({PAYMENT, ADDRESS}),
    CheckoutState.CONTACT_DETAILS: frozenset({EMAIL, PHONE}),
}


@dataclass(frozen=True, slots=True)
class TransitionValidationResult:
    allowed: bool
    reason: str | None = None


def validate_checkout_transition(
    current: CheckoutState | str,
    target: CheckoutState | str,
) -> TransitionValidationResult:
    """Check a move against the transition matrix."""
    try:
        current_state = CheckoutState(current)
    except ValueError:
        return TransitionValidationResult(False, f"Unknown current state: {current}")
    try:
        target_state = CheckoutState(target)
    except ValueError:
        return TransitionValidationResult(False, f"Unknown target state: {target}")

    if current_state == target_state:
        return TransitionValidationResult(True)

    if target_state not in ALLOWED_TRANSITIONS[current_state]:
        return TransitionValidationResult(
            False,
            f"Transition '{current_state.value} -> {target_state.value}' is not allowed",
        )
    return TransitionValidationResult(True)


def errors_for_step(state: CheckoutState, errors: ValidationResult | None) -> ValidationResult:
    """Keep only the errors of fields the step validates."""
    fields = STEP_FIELDS.get(state, frozenset())
    return {name: message for name, message in (errors or {}).items() if name in fields}


def can_submit_step(state: CheckoutState, errors: ValidationResult | None) -> bool:
    """Submit is enabled iff the step's own fields have no errors."""
    return not errors_for_step(state, errors)
