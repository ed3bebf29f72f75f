"""Checkout field validation and payment input formatting.

Everything here is a pure function of the raw field text (plus today's date
for the expiry check), so the same rules back the per-field checks shown
while typing and the full check run when an order is placed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import date

from ace_order.cart import CartStore
from ace_order.config import CARD_DIGITS
from ace_order.constant import REASON_MESSAGES, REQUIRED_FIELD_LABELS, Reason
from ace_order.models import CheckoutForm, ValidationResult

_NON_DIGITS = re.compile(r"[^0-9]")
_CARD_GROUP = 4
EXPIRY_MAX_LENGTH = 5
CARD_DISPLAY_MAX_LENGTH = CARD_DIGITS + (CARD_DIGITS - 1) // _CARD_GROUP


def _invalid(field: str | None, reason: Reason) -> ValidationResult:
    return ValidationResult.invalid(field, reason, REASON_MESSAGES[reason])


def card_digits(text: str) -> str:
    """Digits of a card number with formatting stripped, capped at 16."""
    return _NON_DIGITS.sub("", text)[:CARD_DIGITS]


def luhn_valid(digits: str) -> bool:
    total = 0
    double = False
    for char in reversed(digits):
        value = int(char)
        if double:
            value *= 2
            if value > 9:
                value -= 9
        total += value
        double = not double
    return total % 10 == 0


def validate_card_number(text: str) -> ValidationResult:
    digits = card_digits(text)
    if len(digits) != CARD_DIGITS:
        return _invalid("card_number", Reason.CARD_LENGTH)
    if not luhn_valid(digits):
        return _invalid("card_number", Reason.CARD_CHECKSUM)
    return ValidationResult.ok()


def format_card_number(text: str) -> str:
    """Group up to 16 digits in blocks of four: ``"4242 4242 4242 4242"``."""
    digits = card_digits(text)
    return " ".join(digits[i : i + _CARD_GROUP] for i in range(0, len(digits), _CARD_GROUP))


@dataclass(frozen=True)
class CardInput:
    """Result of reformatting the card number field after one edit."""

    text: str
    caret: int
    advance: bool = False


def format_card_input(previous: str, raw: str, caret: int) -> CardInput:
    """Reformat the card field after an edit that turned ``previous`` into ``raw``.

    ``advance`` is set only for the forward edit that completes the 16th
    digit with the caret at the end of the field.
    """
    formatted = format_card_number(raw)
    deleting = len(raw) < len(previous)
    completed = len(card_digits(previous)) < CARD_DIGITS and len(card_digits(raw)) == CARD_DIGITS
    advance = completed and not deleting and caret == len(raw)

    if raw == formatted:
        return CardInput(text=raw, caret=caret, advance=advance)

    new_caret = min(max(caret + len(formatted) - len(raw), 0), len(formatted))
    if advance:
        new_caret = len(formatted)
    return CardInput(text=formatted, caret=new_caret, advance=advance)


def format_expiry_input(raw: str) -> str:
    """Keep four digits and insert the slash: ``"1225"`` -> ``"12/25"``."""
    digits = _NON_DIGITS.sub("", raw)[:4]
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}/{digits[2:]}"


def validate_expiry(text: str, today: date | None = None) -> ValidationResult:
    """MM/YY, month 1-12, and not before the current month.

    Years compare as two digits with no century rollover.
    """
    parts = text.split("/")
    if len(parts) != 2 or not all(len(part) == 2 and part.isascii() and part.isdigit() for part in parts):
        return _invalid("expiry", Reason.EXPIRY_FORMAT)

    month, year = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        return _invalid("expiry", Reason.EXPIRY_MONTH)

    today = today or date.today()
    current_year = today.year % 100
    expired = year < current_year or (year == current_year and month < today.month)
    if expired:
        return _invalid("expiry", Reason.EXPIRY_EXPIRED)
    return ValidationResult.ok()


def validate_cvv(text: str) -> ValidationResult:
    if len(text) in (3, 4):
        return ValidationResult.ok()
    return _invalid("cvv", Reason.CVV_LENGTH)


def validate_zip(text: str, field: str = "billing_zip") -> ValidationResult:
    if len(text) == 5:
        return ValidationResult.ok()
    return _invalid(field, Reason.ZIP_LENGTH)


def required_message(field: str) -> str:
    return f"{REQUIRED_FIELD_LABELS[field]} required"


def all_missing_required(form: CheckoutForm) -> list[ValidationResult]:
    """Every blank required field, in form order."""
    values = {f.name: getattr(form, f.name) for f in fields(form)}
    return [
        ValidationResult.invalid(name, Reason.REQUIRED, required_message(name))
        for name in REQUIRED_FIELD_LABELS
        if not values[name].strip()
    ]


def missing_required(form: CheckoutForm) -> ValidationResult:
    """The first blank required field, or ok."""
    missing = all_missing_required(form)
    return missing[0] if missing else ValidationResult.ok()


def validate_checkout(form: CheckoutForm, cart: CartStore, today: date | None = None) -> ValidationResult:
    """Run every check in order and report the first failure."""
    checks = (
        lambda: missing_required(form),
        lambda: validate_card_number(form.card_number),
        lambda: validate_expiry(form.expiry, today),
        lambda: validate_cvv(form.cvv),
        lambda: validate_zip(form.billing_zip, "billing_zip"),
        lambda: validate_zip(form.ship_zip, "ship_zip"),
    )
    for check in checks:
        verdict = check()
        if not verdict.valid:
            return verdict

    if cart.is_empty:
        return _invalid(None, Reason.EMPTY_CART)
    return ValidationResult.ok()
