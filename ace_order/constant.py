"""Static labels and reason codes shared by the cart, checkout and UI."""

from __future__ import annotations

from enum import Enum

ALL_CATEGORY_ID = "all"
ALL_CATEGORY_TITLE = "All"

GUEST_NAME = "Guest"


class Reason(str, Enum):
    """Why a checkout field (or the whole checkout) was rejected."""

    REQUIRED = "required"
    CARD_LENGTH = "card_length"
    CARD_CHECKSUM = "card_checksum"
    EXPIRY_FORMAT = "expiry_format"
    EXPIRY_MONTH = "expiry_month"
    EXPIRY_EXPIRED = "expiry_expired"
    CVV_LENGTH = "cvv_length"
    ZIP_LENGTH = "zip_length"
    EMPTY_CART = "empty_cart"


# Checkout form field name -> label, in the order fields are checked and shown.
REQUIRED_FIELD_LABELS: dict[str, str] = {
    "card_name": "Name",
    "card_number": "Card #",
    "expiry": "Expiry (MM/YY)",
    "cvv": "CVV",
    "billing_zip": "Billing Zip",
    "first_name": "First Name",
    "last_name": "Last Name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "ship_zip": "Zip Code",
}

REASON_MESSAGES: dict[Reason, str] = {
    Reason.CARD_LENGTH: "Card number must be 16 digits",
    Reason.CARD_CHECKSUM: "Invalid card number",
    Reason.EXPIRY_FORMAT: "Use MM/YY",
    Reason.EXPIRY_MONTH: "Month 01–12",
    Reason.EXPIRY_EXPIRED: "Card expired",
    Reason.CVV_LENGTH: "CVV must be 3–4 digits",
    Reason.ZIP_LENGTH: "5-digit ZIP required",
    Reason.EMPTY_CART: "Your cart is empty.",
}

# Option group attribute -> label used in cart summaries and the detail modal.
OPTION_GROUP_LABELS: dict[str, str] = {
    "size": "Size",
    "crust": "Crust",
    "topping": "Topping",
}

OPTION_SEPARATOR = " · "

PRIVACY_TERMS_TEXT = (
    "Ace Restaurant is a demo ordering app.\n\n"
    "Payment details are checked on this device only and are never stored, "
    "logged or sent anywhere. No charge is made when you place an order.\n\n"
    "Order contents live in memory and are discarded when the app closes."
)
