# finance_tracker/ui/widgets/confirmation_modal.py
"""
Modal screen for yes/no confirmations.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen[bool]):
    """Asks a question; dismisses with True when confirmed."""

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
    }

    #confirmation-container {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }

    #confirmation-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #confirmation-buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("enter", "confirm", "Confirm"),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        confirm_label: str = "Delete",
        *,
        id: str | None = None,
        name: str | None = None,
        classes: str | None = None,
    ):
        """
        Initialize the confirmation modal.

        Args:
            title: Title of the confirmation dialog
            message: Message to display
            confirm_label: Text of the confirming button
        """
        super().__init__(id=id, name=name, classes=classes)
        self.title_text = title
        self.message = message
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Container(id="confirmation-container"):
            yield Label(self.title_text, id="confirmation-title")
            yield Label(self.message, id="confirmation-message")

            with Horizontal(id="confirmation-buttons"):
                yield Button("Cancel", variant="primary", id="no-button")
                yield Button(self.confirm_label, variant="error", id="yes-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes-button")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
