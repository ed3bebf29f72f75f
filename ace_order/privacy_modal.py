"""Privacy & terms modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from ace_order.constant import PRIVACY_TERMS_TEXT


class PrivacyTermsModal(ModalScreen[None]):
    """Static privacy policy and terms text."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "OK"),
        ("q", "close", "Close"),
    ]

    CSS = """
    PrivacyTermsModal {
        align: center middle;
        background: $background 60%;
    }

    #privacy-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #privacy-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #privacy-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="privacy-dialog"):
            yield Static("Privacy & Terms", id="privacy-title")
            yield Static(PRIVACY_TERMS_TEXT, id="privacy-body")
            yield Static("Enter OK / Esc close", id="privacy-help")

    def action_close(self) -> None:
        self.dismiss()
