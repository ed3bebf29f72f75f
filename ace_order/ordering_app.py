"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from ace_order.cart import CartStore
from ace_order.catalog import MenuCatalog
from ace_order.checkout_screen import CheckoutScreen
from ace_order.confirm_modal import ConfirmModal
from ace_order.confirmation_modal import ConfirmationModal
from ace_order.constant import ALL_CATEGORY_ID
from ace_order.debounce import Debouncer
from ace_order.item_modal import ItemDetailModal
from ace_order.models import CartLine, MenuItem, OrderConfirmation
from ace_order.rendering import (
    format_cart_line,
    format_cart_title,
    format_category_tabs,
    format_menu_item,
    format_suggestions,
    format_totals,
)
from ace_order.suggestions import SearchResults, search_with_suggestions

logger = logging.getLogger(__name__)


class OrderingApp(App):
    """A Textual app for browsing the menu, building a cart and checking out."""

    TITLE = "Ace Restaurant"
    SUB_TITLE = "Menu / Cart / Checkout"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #category-tabs {
        height: 1;
        margin-bottom: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #item-preview {
        height: 3;
        color: $text-muted;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-totals {
        height: 3;
        margin-top: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    category_index = reactive(0)
    search_query = reactive("")
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        # Priority so the screen's own focus_next does not take tab first.
        Binding("tab", "next_result_or_focus", "Next result", priority=True),
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("enter", "open_selected", "Customize item"),
        ("backspace", "backspace_query", "Delete query char"),
        ("escape", "cancel_active_mode", "Exit search"),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, catalog: MenuCatalog | None = None, cart: CartStore | None = None) -> None:
        super().__init__()
        self.catalog = catalog if catalog is not None else MenuCatalog.from_path()
        self.cart = cart if cart is not None else CartStore()
        self.system_status = ""
        self.results = SearchResults()
        self.search_debouncer = Debouncer(self.set_timer)
        self._unsubscribe_cart: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Your Cart", id="cart-title", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-totals")
            with Vertical(id="menu-pane"):
                yield Static(id="category-tabs")
                yield Static(id="search-bar")
                yield Static(id="results")
                yield Static(id="item-preview")

    def on_mount(self) -> None:
        self._unsubscribe_cart = self.cart.subscribe(self._on_cart_changed)
        self.results = search_with_suggestions(self.catalog, self._active_category_id(), "")
        if not self.catalog.tab_categories():
            self.system_status = "Menu unavailable"
        logger.debug("on_mount categories=%d", len(self.catalog.categories()))
        self._refresh_all()

    def on_unmount(self) -> None:
        self.search_debouncer.cancel()
        if self._unsubscribe_cart is not None:
            self._unsubscribe_cart()
            self._unsubscribe_cart = None

    def _overlay_active(self) -> bool:
        return len(self.screen_stack) > 1

    def on_key(self, event: Key) -> None:
        # While a modal or the checkout screen is active, let it own keyboard handling.
        if self._overlay_active():
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        char = event.character
        if self.input_state == "active":
            self.search_query += char
            self._query_changed()
            event.stop()
            return

        handlers = {
            "/": self._start_search,
            "+": lambda: self._adjust_selected_line(1),
            "-": lambda: self._adjust_selected_line(-1),
            "j": lambda: self._move_cart_selection(1),
            "k": lambda: self._move_cart_selection(-1),
            "d": self._confirm_remove_selected,
            "x": self._confirm_clear_cart,
            "c": self._open_checkout,
        }
        handler = handlers.get(char.lower() if char.isalpha() else char)
        if handler is None:
            return
        handler()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if self._overlay_active():
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self._query_changed()

    def action_cycle_results(self, delta: int) -> None:
        if self._overlay_active():
            return

        items = self.results.items
        if not items:
            self.selected_index = 0
            self._refresh_results()
            return
        self.selected_index = (self.selected_index + delta) % len(items)
        self._refresh_results()

    def action_next_result_or_focus(self) -> None:
        if self._overlay_active():
            self.screen.focus_next()
            return
        self.action_cycle_results(1)

    def action_cycle_category(self, delta: int) -> None:
        if self._overlay_active():
            return
        tabs = self.catalog.tab_categories()
        if not tabs:
            return
        self.category_index = (self.category_index + delta) % len(tabs)
        self._run_search()

    def action_open_selected(self) -> None:
        if self._overlay_active():
            return
        item = self._selected_item()
        if item is None:
            return
        self.push_screen(ItemDetailModal(item), callback=self._on_item_detail_closed)

    def action_backspace_query(self) -> None:
        if self._overlay_active():
            return
        if self.input_state != "active":
            return

        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self._query_changed()

    def _start_search(self) -> None:
        self.input_state = "active"
        self._refresh_search_bar()

    def _query_changed(self) -> None:
        self._refresh_search_bar()
        self.search_debouncer.call(self._run_search)

    def _active_category_id(self) -> str:
        tabs = self.catalog.tab_categories()
        if not tabs:
            return ALL_CATEGORY_ID
        return tabs[min(self.category_index, len(tabs) - 1)].category_id

    def _run_search(self) -> None:
        tabs = self.catalog.tab_categories()
        if self.search_query.strip() and tabs and self._active_category_id() != ALL_CATEGORY_ID:
            # Searches always show in the All tab.
            self.category_index = 0

        self.results = search_with_suggestions(self.catalog, self._active_category_id(), self.search_query)
        self.selected_index = 0
        logger.debug(
            "search category=%s query=%r items=%d suggestions=%d",
            self._active_category_id(),
            self.search_query,
            len(self.results.items),
            len(self.results.suggestions),
        )
        self._refresh_search()

    def _selected_item(self) -> MenuItem | None:
        items = self.results.items
        if not (0 <= self.selected_index < len(items)):
            return None
        return items[self.selected_index]

    def _on_item_detail_closed(self, line: CartLine | None) -> None:
        if line is None:
            return
        self.cart_selected_index = self.cart.add(line)
        self.system_status = f"Added {line.name}"
        self.call_after_refresh(self._refresh_all)

    def _on_cart_changed(self, _cart: CartStore) -> None:
        self._refresh_cart()

    def _move_cart_selection(self, delta: int) -> None:
        if self.cart.is_empty:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(self.cart) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(self.cart)
        self._refresh_cart()

    def _selected_line_index(self) -> int | None:
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(self.cart)):
            return None
        return self.cart_selected_index

    def _adjust_selected_line(self, delta: int) -> None:
        idx = self._selected_line_index()
        if idx is None:
            return
        if delta > 0:
            self.cart.increment(idx)
        else:
            self.cart.decrement(idx)

    def _confirm_remove_selected(self) -> None:
        idx = self._selected_line_index()
        if idx is None:
            return
        line = self.cart.lines[idx]

        def remove(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.cart.remove_at(idx)
            self.system_status = f"Removed {line.name}"
            if self.cart.is_empty:
                self.cart_selected_index = None
            else:
                self.cart_selected_index = min(idx, len(self.cart) - 1)
            self.call_after_refresh(self._refresh_all)

        self.push_screen(
            ConfirmModal("Remove item?", f"Are you sure you want to remove {line.name} from your cart?"),
            callback=remove,
        )

    def _confirm_clear_cart(self) -> None:
        if self.cart.is_empty:
            return

        def clear(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.cart.clear()
            self.system_status = "Cart cleared"
            self.call_after_refresh(self._refresh_all)

        self.push_screen(
            ConfirmModal("Clear cart?", "Remove every item from your cart?", confirm_label="Clear cart"),
            callback=clear,
        )

    def _open_checkout(self) -> None:
        self.search_debouncer.cancel()
        self.push_screen(CheckoutScreen(self.cart), callback=self._on_checkout_closed)

    def _on_checkout_closed(self, confirmation: OrderConfirmation | None) -> None:
        if confirmation is None:
            self.call_after_refresh(self._refresh_all)
            return
        self.cart_selected_index = None
        self.system_status = f"Order {confirmation.order_id} placed"
        self.call_after_refresh(self._refresh_all)
        self.push_screen(ConfirmationModal(confirmation))

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_search()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_cart(self) -> None:
        try:
            title_widget = self.query_one("#cart-title", Static)
            cart_widget = self.query_one("#cart-list", Static)
            totals_widget = self.query_one("#cart-totals", Static)
        except NoMatches:
            return
        title_widget.update(format_cart_title(self.cart))
        totals_widget.update(format_totals(self.cart))

        if self.cart.is_empty:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(self.cart):
            self.cart_selected_index = len(self.cart) - 1

        lines = self.cart.lines
        # Each cart row may take two terminal lines.
        visible_rows = max(1, self._visible_rows(cart_widget) // 2)
        start, end = self._window_bounds(len(lines), visible_rows, self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append_text(format_cart_line(lines[idx]))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        cart_widget.update(text)

    def _refresh_search(self) -> None:
        self._refresh_category_tabs()
        self._refresh_search_bar()
        self._refresh_results()

    def _refresh_category_tabs(self) -> None:
        try:
            tabs_widget = self.query_one("#category-tabs", Static)
        except NoMatches:
            return
        tabs_widget.update(format_category_tabs(self.catalog.tab_categories(), self.category_index))

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        if self.input_state == "normal":
            shown = f"Search: {self.search_query}" if self.search_query else "/ search, ←/→ category"
            bar.update(f"{shown}  ·  Enter customize, C checkout\n{status}")
            return

        text = Text()
        text.append("Search", style="bold #0b1f0f on #5fbf72")
        text.append(f": {self.search_query}|")
        text.append(f"\n{status}", style="dim")
        bar.update(text)

    def _refresh_results(self) -> None:
        try:
            results_widget = self.query_one("#results", Static)
            preview_widget = self.query_one("#item-preview", Static)
        except NoMatches:
            return

        items = self.results.items
        if not items:
            preview_widget.update("")
            if self.search_query.strip():
                results_widget.update(format_suggestions(self.results.suggestions))
            else:
                results_widget.update("No items")
            return

        if self.selected_index >= len(items):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(items), visible_rows, self.selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            text.append(pointer)
            text.append_text(format_menu_item(items[idx]))

        if end < len(items):
            text.append("\n⋮", style="dim")

        results_widget.update(text)
        preview_widget.update(items[self.selected_index].description)
