"""Checkout screen: order summary, payment/shipping form and order placement."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.validation import ValidationResult as InputValidation
from textual.validation import Validator
from textual.widgets import Button, Header, Input, Static

from ace_order.cart import CartStore
from ace_order.checkout import (
    CARD_DISPLAY_MAX_LENGTH,
    EXPIRY_MAX_LENGTH,
    format_card_input,
    format_expiry_input,
    validate_card_number,
    validate_cvv,
    validate_expiry,
    validate_zip,
)
from ace_order.constant import REQUIRED_FIELD_LABELS, Reason
from ace_order.models import CheckoutForm, OrderConfirmation, ValidationResult
from ace_order.orders import submit_checkout
from ace_order.privacy_modal import PrivacyTermsModal
from ace_order.rendering import format_cart_line, format_totals


class FieldRule(Validator):
    """Adapt one checkout field check to Textual's Input validation."""

    def __init__(self, check: Callable[[str], ValidationResult]) -> None:
        super().__init__()
        self.check = check

    def validate(self, value: str) -> InputValidation:
        verdict = self.check(value)
        if verdict.valid:
            return self.success()
        return self.failure(verdict.message)


FIELD_RULES: dict[str, Callable[[str], ValidationResult]] = {
    "card_number": validate_card_number,
    "expiry": validate_expiry,
    "cvv": validate_cvv,
    "billing_zip": lambda value: validate_zip(value, "billing_zip"),
    "ship_zip": lambda value: validate_zip(value, "ship_zip"),
}

FIELD_MAX_LENGTHS: dict[str, int] = {
    "card_number": CARD_DISPLAY_MAX_LENGTH,
    "expiry": EXPIRY_MAX_LENGTH,
    "cvv": 4,
    "billing_zip": 5,
    "ship_zip": 5,
}

PAYMENT_FIELDS = ("card_name", "card_number", "expiry", "cvv", "billing_zip")
SHIPPING_FIELDS = ("first_name", "last_name", "address", "city", "state", "ship_zip")


class CheckoutScreen(Screen[OrderConfirmation | None]):
    """Collect payment and delivery details and place the order."""

    # Ctrl+T because plain letters go to the focused Input.
    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+t", "show_privacy", "Privacy & Terms"),
    ]

    CSS = """
    #checkout-layout {
        height: 1fr;
    }

    #summary-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #form-pane {
        width: 3fr;
        border: round $secondary;
        padding: 0 1;
    }

    #summary-list {
        height: auto;
        margin-bottom: 1;
    }

    .pane-title {
        text-style: bold;
        margin: 1 0;
    }

    .field-label {
        color: $text-muted;
    }

    #checkout-error {
        color: #ffb3b3;
        margin: 1 0;
    }

    #checkout-buttons {
        height: auto;
        margin-bottom: 1;
    }

    #checkout-buttons Button {
        margin-right: 2;
    }
    """

    def __init__(self, cart: CartStore) -> None:
        super().__init__()
        self.cart = cart
        self._card_previous = ""
        self._unsubscribe: Callable[[], None] | None = None

    def _field(self, name: str) -> Input:
        validators = [FieldRule(FIELD_RULES[name])] if name in FIELD_RULES else None
        return Input(
            placeholder=REQUIRED_FIELD_LABELS[name],
            id=name,
            max_length=FIELD_MAX_LENGTHS.get(name, 0),
            validators=validators,
            validate_on=["blur"],
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="checkout-layout"):
            with Vertical(id="summary-pane"):
                yield Static("Order Summary", classes="pane-title")
                yield Static(id="summary-list")
                yield Static(id="summary-totals")
            with VerticalScroll(id="form-pane"):
                yield Static("Payment", classes="pane-title")
                for name in PAYMENT_FIELDS:
                    yield Static(REQUIRED_FIELD_LABELS[name], classes="field-label")
                    yield self._field(name)
                yield Static("Delivery", classes="pane-title")
                for name in SHIPPING_FIELDS:
                    yield Static(REQUIRED_FIELD_LABELS[name], classes="field-label")
                    yield self._field(name)
                yield Static(id="checkout-error")
                with Horizontal(id="checkout-buttons"):
                    yield Button("Place Order", id="place-order", variant="success")
                    yield Button("Cancel", id="cancel")
                    yield Button("Privacy & Terms", id="privacy")

    def on_mount(self) -> None:
        self._unsubscribe = self.cart.subscribe(lambda _cart: self._refresh_summary())
        self._refresh_summary()
        self.query_one("#card_name", Input).focus()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "card_number":
            self._reformat_card_number(event.input)
        elif event.input.id == "expiry":
            self._reformat_expiry(event.input)

    def on_input_blurred(self, event: Input.Blurred) -> None:
        result = event.validation_result
        if result is None:
            return
        error = self.query_one("#checkout-error", Static)
        if result.is_valid:
            error.update("")
        else:
            error.update("; ".join(result.failure_descriptions))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "place-order":
            self.action_place_order()
        elif event.button.id == "cancel":
            self.action_cancel()
        elif event.button.id == "privacy":
            self.action_show_privacy()

    def action_show_privacy(self) -> None:
        self.app.push_screen(PrivacyTermsModal())

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_place_order(self) -> None:
        outcome = submit_checkout(self._read_form(), self.cart)
        if outcome.confirmation is None:
            self._show_failure(outcome.verdict)
            return
        self.dismiss(outcome.confirmation)

    def _read_form(self) -> CheckoutForm:
        values = {name: self.query_one(f"#{name}", Input).value for name in REQUIRED_FIELD_LABELS}
        return CheckoutForm(**values)

    def _show_failure(self, verdict: ValidationResult) -> None:
        self.query_one("#checkout-error", Static).update(verdict.message)
        if verdict.reason == Reason.EMPTY_CART:
            self.app.notify(verdict.message, severity="warning")
            return
        if verdict.field is not None:
            field = self.query_one(f"#{verdict.field}", Input)
            field.focus()
            field.cursor_position = len(field.value)

    def _reformat_card_number(self, field: Input) -> None:
        raw = field.value
        result = format_card_input(self._card_previous, raw, field.cursor_position)
        self._card_previous = result.text
        if result.text != raw:
            field.value = result.text
            field.cursor_position = result.caret
        if result.advance and field.has_focus:
            self.query_one("#expiry", Input).focus()

    def _reformat_expiry(self, field: Input) -> None:
        formatted = format_expiry_input(field.value)
        if formatted != field.value:
            field.value = formatted
            field.cursor_position = len(formatted)

    def _refresh_summary(self) -> None:
        lines = Text()
        if self.cart.is_empty:
            lines.append("(your cart is empty)", style="dim")
        for idx, line in enumerate(self.cart.lines):
            if idx > 0:
                lines.append("\n")
            lines.append_text(format_cart_line(line))
        self.query_one("#summary-list", Static).update(lines)
        self.query_one("#summary-totals", Static).update(format_totals(self.cart))
        self.query_one("#place-order", Button).disabled = self.cart.is_empty
