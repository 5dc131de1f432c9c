"""Confirmation modal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Label

from kanterm.board.inputs import KeyPressed
from kanterm.keybindings import CONFIRM_BINDINGS

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from kanterm.board.overlay import ConfirmFrame


class ConfirmModal(ModalScreen[None]):
    """View of a ``ConfirmFrame``: the question followed by ``(y/n)``."""

    BINDINGS = CONFIRM_BINDINGS

    def __init__(self, frame: ConfirmFrame, **kwargs) -> None:
        super().__init__(**kwargs)
        self.frame = frame

    @property
    def frame_id(self) -> int:
        return self.frame.frame_id

    def compose(self) -> ComposeResult:
        with Container(id="confirm-container"):
            yield Label(self.frame.prompt, classes="confirm-title", markup=False)

    def on_mount(self) -> None:
        self._apply_size()

    def on_resize(self, event: events.Resize) -> None:
        self._apply_size()

    def sync(self, frame: ConfirmFrame) -> None:
        self.frame = frame

    def _apply_size(self) -> None:
        width, height = self.frame.required_size(self.app.size.width, self.app.size.height)
        container = self.query_one("#confirm-container", Container)
        container.styles.width = width
        container.styles.height = height

    def action_forward_key(self, key: str) -> None:
        self.app.dispatch(KeyPressed(key))
