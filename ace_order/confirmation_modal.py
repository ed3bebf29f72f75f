"""Thank-you modal shown after an order is placed."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from ace_order.models import OrderConfirmation
from ace_order.rendering import format_currency


class ConfirmationModal(ModalScreen[None]):
    """Order number, ETA and a way back to the menu."""

    BINDINGS = [
        ("escape", "close", "Back to menu"),
        ("enter", "close", "Back to menu"),
        ("t", "track", "Track order"),
    ]

    CSS = """
    ConfirmationModal {
        align: center middle;
        background: $background 60%;
    }

    #confirmation-dialog {
        width: 60;
        height: auto;
        border: round $success;
        background: $panel;
        padding: 1 2;
    }

    #confirmation-body {
        color: white;
    }

    #confirmation-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, confirmation: OrderConfirmation) -> None:
        super().__init__()
        self.confirmation = confirmation

    def compose(self) -> ComposeResult:
        with Container(id="confirmation-dialog"):
            yield Static(id="confirmation-body")
            yield Static("Enter/Esc back to menu, T track order", id="confirmation-help")

    def on_mount(self) -> None:
        order = self.confirmation
        body = Text()
        body.append(f"Thanks, {order.customer_name}! Your order has been placed.\n\n", style="bold")
        body.append(f"Order #{order.order_id}\n")
        body.append(f"Order total: {format_currency(order.total)}\n")
        body.append(f"Estimated delivery: {order.eta_text}")
        self.query_one("#confirmation-body", Static).update(body)

    def action_track(self) -> None:
        self.app.notify("Tracking not implemented yet.")

    def action_close(self) -> None:
        self.dismiss()
