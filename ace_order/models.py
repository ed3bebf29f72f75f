"""Domain models for ace-order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ace_order.constant import Reason


@dataclass(frozen=True)
class Category:
    """A menu category (e.g. "pizza")."""

    category_id: str
    title: str


@dataclass(frozen=True)
class MenuItem:
    """A browsable menu item. Empty option tuples hide that option group."""

    item_id: str
    category: str
    name: str
    price: Decimal
    description: str = ""
    image: str | None = None
    sizes: tuple[str, ...] = ()
    crusts: tuple[str, ...] = ()
    toppings: tuple[str, ...] = ()


@dataclass(frozen=True)
class Menu:
    """Root of the bundled menu asset."""

    categories: tuple[Category, ...]
    items: tuple[MenuItem, ...]

    @classmethod
    def empty(cls) -> Menu:
        return cls(categories=(), items=())


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class CartLine:
    """One cart row: a menu item snapshot, its chosen options and a quantity."""

    item_id: str
    name: str
    base_price: Decimal
    size: str | None = None
    crust: str | None = None
    topping: str | None = None
    notes: str | None = None
    quantity: int = 1
    image: str | None = None

    @classmethod
    def from_menu_item(
        cls,
        item: MenuItem,
        *,
        size: str | None = None,
        crust: str | None = None,
        topping: str | None = None,
        notes: str | None = None,
        quantity: int = 1,
    ) -> CartLine:
        """Copy id, name, price and image from ``item``; blank choices become None."""
        return cls(
            item_id=item.item_id,
            name=item.name,
            base_price=item.price,
            size=_blank_to_none(size),
            crust=_blank_to_none(crust),
            topping=_blank_to_none(topping),
            notes=_blank_to_none(notes),
            quantity=quantity,
            image=item.image,
        )

    def line_price(self) -> Decimal:
        return self.base_price * self.quantity

    def identity_key(self) -> tuple[str, str | None, str | None, str | None, str]:
        """Lines with equal keys merge. Missing and empty notes are the same."""
        return (self.item_id, self.size, self.crust, self.topping, self.notes or "")


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one checkout field, or for the checkout as a whole."""

    field: str | None = None
    reason: Reason | None = None
    message: str = ""

    @property
    def valid(self) -> bool:
        return self.reason is None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls()

    @classmethod
    def invalid(cls, field: str | None, reason: Reason, message: str) -> ValidationResult:
        return cls(field=field, reason=reason, message=message)


@dataclass(frozen=True)
class CheckoutForm:
    """Raw text of every checkout field as typed."""

    card_name: str = ""
    card_number: str = ""
    expiry: str = ""
    cvv: str = ""
    billing_zip: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    ship_zip: str = ""


@dataclass(frozen=True)
class OrderConfirmation:
    """What the confirmation screen shows after a placed order."""

    order_id: str
    customer_name: str
    eta_text: str
    placed_at: datetime
    total: Decimal
