"""Order placement: identifiers, delivery estimate and cart hand-off."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from ace_order.cart import CartStore
from ace_order.checkout import validate_checkout
from ace_order.config import ETA_FORMAT, ETA_MINUTES, ORDER_ID_PREFIX
from ace_order.constant import GUEST_NAME
from ace_order.models import CheckoutForm, OrderConfirmation, ValidationResult

logger = logging.getLogger(__name__)


def customer_display_name(first_name: str, last_name: str) -> str:
    parts = [part.strip() for part in (first_name, last_name) if part.strip()]
    return " ".join(parts) or GUEST_NAME


def generate_order_id(now: datetime) -> str:
    """Readable id like ``ACE-4827``. Not unique; the suffix is always 4 digits."""
    millis = int(now.timestamp()) * 1000 + now.microsecond // 1000
    return f"{ORDER_ID_PREFIX}-{millis % 9000 + 1000}"


def estimate_delivery(now: datetime, minutes: int = ETA_MINUTES) -> str:
    return (now + timedelta(minutes=minutes)).strftime(ETA_FORMAT)


def finalize_order(form: CheckoutForm, cart: CartStore, now: datetime | None = None) -> OrderConfirmation:
    """Build the confirmation for the current cart, then clear the cart."""
    if cart.is_empty:
        raise ValueError("Cannot place an order for an empty cart")

    now = now or datetime.now()
    confirmation = OrderConfirmation(
        order_id=generate_order_id(now),
        customer_name=customer_display_name(form.first_name, form.last_name),
        eta_text=estimate_delivery(now),
        placed_at=now,
        total=cart.total(),
    )
    cart.clear()
    logger.info("order placed order_id=%s eta=%s", confirmation.order_id, confirmation.eta_text)
    return confirmation


@dataclass(frozen=True)
class CheckoutOutcome:
    """Verdict of a checkout attempt and, when it passed, the placed order."""

    verdict: ValidationResult
    confirmation: OrderConfirmation | None = None


def submit_checkout(form: CheckoutForm, cart: CartStore, now: datetime | None = None) -> CheckoutOutcome:
    """Validate the form and cart; place the order only if everything passes."""
    now = now or datetime.now()
    verdict = validate_checkout(form, cart, now.date())
    if not verdict.valid:
        # Field values are never logged.
        logger.info("checkout blocked field=%s reason=%s", verdict.field, verdict.reason.value)
        return CheckoutOutcome(verdict=verdict)
    return CheckoutOutcome(verdict=verdict, confirmation=finalize_order(form, cart, now))
