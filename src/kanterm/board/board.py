"""Board state machine.

``update(state, event)`` is a pure transition: it returns the next state and the
effects to run. Effects come back as result events through the same function.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

from kanterm.board.column import ColumnState
from kanterm.board.effects import Exit, LoadTickets, OpenStore
from kanterm.board.inputs import (
    EditorTextChanged,
    KeyPressed,
    MousePressed,
    MouseScrolled,
    Resized,
)
from kanterm.board.overlay import OverlayStack
from kanterm.constants import COLUMN_ORDER, DEFAULT_DOUBLE_CLICK_MS
from kanterm.core.events import CriticalFailure, StoreReady, TicketsUpdated

if TYPE_CHECKING:
    from kanterm.board.column import ColumnOutcome
    from kanterm.board.effects import Effect
    from kanterm.board.inputs import BoardEvent

type Transition = tuple[BoardState, tuple[Effect, ...]]


class Phase(StrEnum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    QUITTING = "quitting"


@dataclass(frozen=True, slots=True)
class BoardState:
    phase: Phase = Phase.LOADING
    width: int = 0
    height: int = 0
    columns: tuple[ColumnState, ...] = ()
    overlay: OverlayStack = OverlayStack()
    failure: CriticalFailure | None = None
    revision: int = 0
    double_click_interval: float = DEFAULT_DOUBLE_CLICK_MS / 1000

    @classmethod
    def initial(cls, *, double_click_interval: float | None = None) -> Transition:
        """Start loading: the first effect migrates and opens the database."""
        state = cls()
        if double_click_interval is not None:
            state = replace(state, double_click_interval=double_click_interval)
        return state, (OpenStore(),)

    @property
    def column_width(self) -> int:
        if not self.columns:
            return self.width
        return self.width // len(self.columns)

    @property
    def focus_index(self) -> int:
        for index, column in enumerate(self.columns):
            if column.focused:
                return index
        return 0

    @property
    def focused_column(self) -> ColumnState | None:
        if not self.columns:
            return None
        return self.columns[self.focus_index]

    def with_column(self, index: int, column: ColumnState) -> BoardState:
        columns = list(self.columns)
        columns[index] = column
        return replace(self, columns=tuple(columns))

    def with_focus(self, index: int) -> BoardState:
        columns = tuple(
            column.with_focus(position == index) for position, column in enumerate(self.columns)
        )
        return replace(self, columns=columns)


def _quit(state: BoardState) -> Transition:
    return replace(state, phase=Phase.QUITTING), (Exit(),)


def _apply_column(state: BoardState, index: int, outcome: ColumnOutcome) -> Transition:
    state = state.with_column(index, outcome.column)
    if outcome.push is not None:
        state = replace(state, overlay=state.overlay.push(outcome.push))
    return state, outcome.effects


def _handle_key(state: BoardState, event: KeyPressed) -> Transition:
    if state.overlay:
        overlay, effects = state.overlay.handle_key(event)
        state = replace(state, overlay=overlay)
        if any(isinstance(effect, Exit) for effect in effects):
            return _quit(state)
        return state, effects

    column = state.focused_column
    if column is None:
        return state, ()
    capturing = column.capturing
    focus = state.focus_index

    match event.key:
        case "ctrl+c":
            return _quit(state)
        case "q" if not capturing:
            return _quit(state)
        case "left" | "h" if not capturing:
            return state.with_focus((focus - 1) % len(state.columns)), ()
        case "right" | "l" if not capturing:
            return state.with_focus((focus + 1) % len(state.columns)), ()

    return _apply_column(state, focus, column.handle_key(event))


def _handle_mouse(state: BoardState, event: MousePressed | MouseScrolled) -> Transition:
    if state.overlay or not 0 <= event.column < len(state.columns):
        return state, ()
    if isinstance(event, MouseScrolled):
        column = state.columns[event.column].handle_scroll(event.direction)
        return state.with_column(event.column, column), ()

    if event.button == 1:
        state = state.with_focus(event.column)
    outcome = state.columns[event.column].handle_click(
        event, double_click_interval=state.double_click_interval
    )
    return _apply_column(state, event.column, outcome)


def update(state: BoardState, event: BoardEvent) -> Transition:
    """Apply one event to the board."""
    if isinstance(event, Resized):
        return replace(state, width=event.width, height=event.height), ()

    match state.phase:
        case Phase.QUITTING:
            return state, ()
        case Phase.FAILED:
            if isinstance(event, KeyPressed):
                return _quit(state)
            return state, ()

    match event:
        case CriticalFailure():
            return (
                replace(state, phase=Phase.FAILED, failure=event, overlay=state.overlay.clear()),
                (),
            )
        case StoreReady() if state.phase is Phase.LOADING:
            columns = tuple(
                ColumnState(status=status, focused=index == 0)
                for index, status in enumerate(COLUMN_ORDER)
            )
            return replace(state, phase=Phase.READY, columns=columns), (LoadTickets(),)

    if state.phase is not Phase.READY:
        return state, ()

    match event:
        case TicketsUpdated(tickets=tickets, revision=revision):
            if revision <= state.revision:
                return state, ()
            columns = tuple(column.set_tickets(tickets) for column in state.columns)
            return replace(state, columns=columns, revision=revision), ()
        case EditorTextChanged():
            return replace(state, overlay=state.overlay.handle_text(event)), ()
        case KeyPressed():
            return _handle_key(state, event)
        case MousePressed() | MouseScrolled():
            return _handle_mouse(state, event)
    return state, ()
