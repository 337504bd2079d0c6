from __future__ import annotations
from typing import List, Sequence

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import Button, Static

from .errors import DetectionFailedError

class ConfirmModal(ModalScreen[bool]):
    """
    Yes/no question. `details` lines (package names, commands) are shown
    verbatim below it; Escape answers no.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        title: str,
        question: str,
        details: Sequence[str] = (),
        yes_label: str = "OK",
        no_label: str = "Cancel",
    ):
        super().__init__()
        self._title = title
        self._question = question
        self.details = list(details)
        self._yes_label = yes_label
        self._no_label = no_label

    def compose(self) -> ComposeResult:
        parts: List[Widget] = [
            Static(f"[b]{self._title}[/b]"),
            Static(self._question, markup=False),
        ]
        if self.details:
            parts.append(Static("\n".join(self.details), classes="codebox", markup=False))
        parts.append(
            Horizontal(
                Button(self._no_label, id="no", variant="error"),
                Button(self._yes_label, id="yes", variant="success"),
            )
        )
        yield Container(*parts, id="modal")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_cancel(self) -> None:
        self.dismiss(False)

class FailureModal(ModalScreen[None]):
    """Unexpected detection failure, with the type of the underlying error."""

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, error: DetectionFailedError):
        super().__init__()
        self.error = error

    def compose(self) -> ComposeResult:
        yield Container(
            Static("[b]Detection failed[/b]"),
            Static(str(self.error), markup=False),
            Static(f"Cause: {type(self.error.cause).__name__}", classes="errorbox", markup=False),
            Static("The traceback was logged; run with --log-file to keep it.", markup=False),
            Button("Close", id="close", variant="primary"),
            id="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
