"""Rendering and formatting helpers for rich/Textual widgets."""

from __future__ import annotations

import locale
from decimal import Decimal

from rich.text import Text

from ace_order.cart import CartStore
from ace_order.constant import ALL_CATEGORY_ID, OPTION_GROUP_LABELS, OPTION_SEPARATOR
from ace_order.models import CartLine, Category, MenuItem


def format_currency(value: Decimal) -> str:
    """Format money with the process locale, or ``$1,234.50`` under the C locale."""
    try:
        return locale.currency(value, grouping=True)
    except ValueError:
        return f"${value:,.2f}"


def category_badge_style(category_id: str) -> str:
    """Return a consistent badge style for a category tab."""
    if category_id == ALL_CATEGORY_ID:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #2f6db5"


def format_category_tabs(tabs: list[Category], active_index: int) -> Text:
    text = Text()
    for idx, category in enumerate(tabs):
        if idx > 0:
            text.append(" ")
        if idx == active_index:
            text.append(f" {category.title} ", style=category_badge_style(category.category_id))
        else:
            text.append(f" {category.title} ", style="dim")
    return text


def option_summary(line: CartLine) -> str:
    """``"Size: Large · Crust: Thin · Notes: extra napkins"`` for the chosen options."""
    parts: list[str] = []
    for attr, label in OPTION_GROUP_LABELS.items():
        value = getattr(line, attr)
        if value is not None:
            parts.append(f"{label}: {value}")
    if line.notes and line.notes.strip():
        parts.append(f"Notes: {line.notes}")
    return OPTION_SEPARATOR.join(parts)


def format_cart_line(line: CartLine) -> Text:
    """Render a cart row: quantity, name, line price and an option summary."""
    text = Text()
    text.append(f"{line.quantity} × ", style="bold")
    text.append(line.name)
    text.append(f"  {format_currency(line.line_price())}", style="bold #5fbf72")
    summary = option_summary(line)
    if summary:
        text.append(f"\n      {summary}", style="dim")
    return text


def format_cart_title(cart: CartStore) -> str:
    count = cart.item_count()
    if count == 0:
        return "Your Cart"
    return f"Your Cart ({count} item{'s' if count != 1 else ''})"


def format_totals(cart: CartStore) -> Text:
    text = Text()
    text.append(f"Subtotal: {format_currency(cart.subtotal())}\n")
    text.append(f"Tax & Fees: {format_currency(cart.tax())}\n")
    text.append(f"Total: {format_currency(cart.total())}", style="bold")
    return text


def format_menu_item(item: MenuItem) -> Text:
    text = Text()
    text.append(item.name)
    text.append(f"  {format_currency(item.price)}", style="dim")
    return text


def format_suggestions(names: list[str]) -> Text:
    text = Text("No results")
    if names:
        text.append("\nDid you mean: ", style="dim")
        text.append(", ".join(names), style="italic")
    return text
