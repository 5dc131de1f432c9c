"""Main board screen: loading spinner, failure view, or the three columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Label, LoadingIndicator

from kanterm.board.board import Phase
from kanterm.board.inputs import KeyPressed, Resized
from kanterm.constants import COLUMN_ORDER
from kanterm.keybindings import BOARD_HINTS, FILTER_HINTS, FILTERED_HINTS
from kanterm.ui.widgets.column import ColumnView
from kanterm.ui.widgets.hints import KeybindingHint

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from kanterm.board.board import BoardState


class BoardScreen(Screen):
    """Forwards every key to the board state machine and renders its state."""

    def compose(self) -> ComposeResult:
        yield LoadingIndicator(id="loading")
        with Vertical(id="failure"):
            yield Label("", id="failure-title", markup=False)
            yield Label("", id="failure-error", markup=False)
        with Horizontal(id="board"):
            for index, status in enumerate(COLUMN_ORDER):
                yield ColumnView(index, status)
        yield KeybindingHint(id="hints")

    def on_mount(self) -> None:
        self.render_state(self.app.state)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.dispatch(KeyPressed(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        self.app.dispatch(Resized(event.size.width, event.size.height))

    def render_state(self, state: BoardState) -> None:
        loading = self.query_one("#loading", LoadingIndicator)
        failure = self.query_one("#failure", Vertical)
        board = self.query_one("#board", Horizontal)
        hints = self.query_one("#hints", KeybindingHint)

        loading.display = state.phase is Phase.LOADING
        failure.display = state.phase is Phase.FAILED
        board.display = state.phase is Phase.READY
        hints.display = state.phase is Phase.READY

        if state.failure is not None:
            self.query_one("#failure-title", Label).update(state.failure.friendly_text or "Failed")
            self.query_one("#failure-error", Label).update(state.failure.error)
            return

        if state.phase is not Phase.READY:
            return

        for view, column in zip(self.query(ColumnView), state.columns, strict=True):
            view.sync(column)

        focused = state.focused_column
        if focused is not None and focused.capturing:
            hints.show_hints(FILTER_HINTS)
        elif focused is not None and focused.listing.is_filtered:
            hints.show_hints(FILTERED_HINTS)
        else:
            hints.show_hints(BOARD_HINTS)
