"""Ticket editor modal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, TextArea

from kanterm.board.inputs import EditorField, EditorTextChanged, KeyPressed
from kanterm.keybindings import EDITOR_BINDINGS, EDITOR_HINTS
from kanterm.ui.widgets.hints import KeybindingHint

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from kanterm.board.overlay import EditorFrame


class EditorModal(ModalScreen[None]):
    """View of an ``EditorFrame``. Text edits and keys go back to the board."""

    BINDINGS = EDITOR_BINDINGS

    def __init__(self, frame: EditorFrame, **kwargs) -> None:
        super().__init__(**kwargs)
        self.frame = frame

    @property
    def frame_id(self) -> int:
        return self.frame.frame_id

    def compose(self) -> ComposeResult:
        with Vertical(id="editor-container"):
            yield Label(self.frame.heading, id="editor-heading", markup=False)
            yield Label("Title", classes="editor-label")
            yield Input(value=self.frame.title, placeholder="Title", id="editor-title")
            yield Label("Description", classes="editor-label")
            yield TextArea(self.frame.description, id="editor-description")
            hints = KeybindingHint(id="editor-hints")
            hints.show_hints(EDITOR_HINTS)
            yield hints

    def on_mount(self) -> None:
        self._apply_size()
        self._apply_focus()

    def on_resize(self, event: events.Resize) -> None:
        self._apply_size()

    def sync(self, frame: EditorFrame) -> None:
        """Adopt a newer version of the same frame."""
        focus_changed = frame.focus is not self.frame.focus
        self.frame = frame
        if focus_changed:
            self._apply_focus()

    def _apply_size(self) -> None:
        width, height = self.frame.required_size(self.app.size.width, self.app.size.height)
        container = self.query_one("#editor-container", Vertical)
        container.styles.width = width
        container.styles.height = height

    def _apply_focus(self) -> None:
        if self.frame.focus is EditorField.TITLE:
            self.query_one("#editor-title", Input).focus()
        else:
            self.query_one("#editor-description", TextArea).focus()

    def action_forward_key(self, key: str) -> None:
        self.app.dispatch(KeyPressed(key))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.app.dispatch(EditorTextChanged(self.frame_id, EditorField.TITLE, event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.app.dispatch(KeyPressed("enter"))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.app.dispatch(
            EditorTextChanged(self.frame_id, EditorField.DESCRIPTION, event.text_area.text)
        )
