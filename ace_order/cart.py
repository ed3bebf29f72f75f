"""In-memory cart for one ordering session."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable

from ace_order.config import TAX_RATE
from ace_order.models import CartLine

logger = logging.getLogger(__name__)

CartListener = Callable[["CartStore"], None]


class CartStore:
    """Ordered cart lines with merge-on-add and derived totals.

    One instance is created per ordering session and handed to every screen
    that reads or changes the cart. Index-based operations ignore indices
    that are out of range. Subscribers are called after each change.
    """

    def __init__(self, tax_rate: Decimal = TAX_RATE) -> None:
        self.tax_rate = tax_rate
        self._lines: list[CartLine] = []
        self._listeners: list[CartListener] = []

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._lines)

    def add(self, line: CartLine) -> int:
        """Merge into the line with the same identity key, else append.

        Returns the index of the affected line.
        """
        if line.quantity < 1:
            raise ValueError("quantity must be at least 1")

        key = line.identity_key()
        for idx, existing in enumerate(self._lines):
            if existing.identity_key() == key:
                self._lines[idx] = replace(existing, quantity=existing.quantity + line.quantity)
                logger.debug("cart merge item=%s index=%d qty=%d", line.item_id, idx, self._lines[idx].quantity)
                self._notify()
                return idx

        self._lines.append(line)
        logger.debug("cart append item=%s index=%d qty=%d", line.item_id, len(self._lines) - 1, line.quantity)
        self._notify()
        return len(self._lines) - 1

    def remove_at(self, index: int) -> None:
        if not self._in_range(index):
            return
        removed = self._lines.pop(index)
        logger.debug("cart remove item=%s index=%d", removed.item_id, index)
        self._notify()

    def increment(self, index: int) -> None:
        if not self._in_range(index):
            return
        line = self._lines[index]
        self._lines[index] = replace(line, quantity=line.quantity + 1)
        self._notify()

    def decrement(self, index: int) -> None:
        """Lower the quantity, stopping at 1. Use remove_at to drop a line."""
        if not self._in_range(index):
            return
        line = self._lines[index]
        new_quantity = max(1, line.quantity - 1)
        if new_quantity == line.quantity:
            return
        self._lines[index] = replace(line, quantity=new_quantity)
        self._notify()

    def clear(self) -> None:
        if not self._lines:
            return
        self._lines.clear()
        logger.debug("cart cleared")
        self._notify()

    def subtotal(self) -> Decimal:
        return sum((line.line_price() for line in self._lines), Decimal("0"))

    def tax(self) -> Decimal:
        return self.subtotal() * self.tax_rate

    def total(self) -> Decimal:
        return self.subtotal() + self.tax()
