"""Item detail modal: pick options, write notes, add to cart."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from ace_order.constant import OPTION_GROUP_LABELS
from ace_order.models import CartLine, MenuItem
from ace_order.rendering import format_currency


class ItemDetailModal(ModalScreen[CartLine | None]):
    """Centered modal showing one menu item and its single-select option groups."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Select"),
        ("a", "add_to_cart", "Add to cart"),
    ]

    CSS = """
    ItemDetailModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        color: white;
    }

    #item-description {
        margin-bottom: 1;
        color: #dddddd;
    }

    #item-body {
        margin-bottom: 1;
        color: white;
    }

    #item-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _OPTION_KIND = "option"
    _NOTES_KIND = "notes"

    def __init__(self, item: MenuItem) -> None:
        super().__init__()
        self.item = item
        self.selected: dict[str, str | None] = {attr: None for attr in OPTION_GROUP_LABELS}
        self.notes = ""
        self.typing_notes = False

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(id="item-title")
            yield Static(id="item-description")
            yield Static(id="item-body")
            yield Static(id="item-help")

    def on_mount(self) -> None:
        title = Text(self.item.name, style="bold white")
        title.append(f"  {format_currency(self.item.price)}", style="bold #5fbf72")
        self.query_one("#item-title", Static).update(title)
        self.query_one("#item-description", Static).update(self.item.description)
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if not self.typing_notes:
            return

        if event.key == "escape":
            self.typing_notes = False
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self.typing_notes = False
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            if self.notes:
                self.notes = self.notes[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.notes += event.character
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def action_close(self) -> None:
        if self.typing_notes:
            self.typing_notes = False
            self._refresh_content()
            return
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if self.typing_notes:
            return
        rows = self._rows()
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        if self.typing_notes:
            return
        row_kind, attr, value = self._rows()[self.cursor_index]

        if row_kind == self._NOTES_KIND:
            self.typing_notes = True
            self._refresh_content()
            return

        self.selected[attr] = None if self.selected[attr] == value else value
        self._refresh_content()

    def action_add_to_cart(self) -> None:
        if self.typing_notes:
            return
        self.dismiss(
            CartLine.from_menu_item(
                self.item,
                size=self.selected["size"],
                crust=self.selected["crust"],
                topping=self.selected["topping"],
                notes=self.notes,
            )
        )

    def _option_values(self, attr: str) -> tuple[str, ...]:
        return {"size": self.item.sizes, "crust": self.item.crusts, "topping": self.item.toppings}[attr]

    def _rows(self) -> list[tuple[str, str, str]]:
        rows: list[tuple[str, str, str]] = []
        for attr in OPTION_GROUP_LABELS:
            rows.extend((self._OPTION_KIND, attr, value) for value in self._option_values(attr))
        rows.append((self._NOTES_KIND, "notes", ""))
        return rows

    def _refresh_content(self) -> None:
        body = self.query_one("#item-body", Static)
        help_text = self.query_one("#item-help", Static)

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = len(rows) - 1

        content = Text(style="white")
        current_group = None
        for idx, (row_kind, attr, value) in enumerate(rows):
            pointer = "➤ " if idx == self.cursor_index else "  "
            if row_kind == self._OPTION_KIND:
                if attr != current_group:
                    if current_group is not None:
                        content.append("\n")
                    content.append(f"{OPTION_GROUP_LABELS[attr]}\n", style="bold #dddddd")
                    current_group = attr
                is_checked = self.selected[attr] == value
                checked = "(•)" if is_checked else "( )"
                content.append(f"{pointer}{checked} {value}\n", style="bold white" if is_checked else "white")
                continue

            if current_group is not None:
                content.append("\n")
            if self.typing_notes:
                content.append(f"{pointer}Notes: {self.notes}|", style="bold white")
            else:
                content.append(f"{pointer}Notes: {self.notes or '(none)'}", style="white")

        if self.typing_notes:
            help_text.update("Type notes, Enter confirm, Esc stop typing")
        else:
            help_text.update("J/K/↑/↓ move, Enter select/edit, A add to cart, Esc/q close")
        body.update(content)
