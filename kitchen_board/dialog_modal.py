"""Blocking confirm / error dialog screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from kitchen_board.constant import DIALOG_CANCEL_LABEL, DIALOG_CONFIRM_LABEL


class DialogModal(ModalScreen[bool]):
    """Title, message and a confirm action with an optional cancel action.

    Dismisses with True on confirm and False on cancel. Without a cancel
    action every close key counts as confirm, like an alert.
    """

    CSS = """
    DialogModal {
        align: center middle;
        background: $background 60%;
    }

    #dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #dialog-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #dialog-message {
        color: white;
        margin-bottom: 1;
    }

    #dialog-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, message: str, cancellable: bool = False) -> None:
        super().__init__()
        self.title_text = title
        self.message_text = message
        self.cancellable = cancellable

    def compose(self) -> ComposeResult:
        with Container(id="dialog"):
            yield Static(self.title_text, id="dialog-title")
            yield Static(self.message_text, id="dialog-message")
            yield Static(self._help_text(), id="dialog-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"enter", "y"}:
            self.dismiss(True)
            event.stop()
            return

        if event.key in {"escape", "n", "q", "ctrl+c"}:
            self.dismiss(not self.cancellable)
            event.stop()
            return

        # Keep the board's keys from acting underneath the dialog.
        event.stop()

    def _help_text(self) -> str:
        if self.cancellable:
            return f"Enter/Y {DIALOG_CONFIRM_LABEL}   Esc/N {DIALOG_CANCEL_LABEL}"
        return f"Enter/Esc {DIALOG_CONFIRM_LABEL}"
