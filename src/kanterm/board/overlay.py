"""Modal frames and the stack that owns input while any frame is open."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from kanterm.board.effects import CreateTicket, Exit, UpdateTicketContent
from kanterm.board.inputs import EditorField
from kanterm.constants import (
    CONFIRM_FRAME_HEIGHT,
    CONFIRM_FRAME_WIDTH,
    EDITOR_CONFIRM_DISCARD,
    OVERLAY_HORIZONTAL_MARGIN,
    OVERLAY_VERTICAL_MARGIN,
)

if TYPE_CHECKING:
    from kanterm.board.effects import Effect
    from kanterm.board.inputs import EditorTextChanged, KeyPressed
    from kanterm.core.models import Ticket


@dataclass(frozen=True, slots=True)
class FrameOutcome:
    """Result of a frame handling one key.

    ``pop`` frames are closed (counting the frame itself), then ``push`` is opened.
    """

    frame: OverlayFrame
    pop: int = 0
    push: OverlayFrame | None = None
    effects: tuple[Effect, ...] = ()


@dataclass(frozen=True, slots=True)
class EditorFrame:
    """Ticket editor for a new ticket (``ticket`` is None) or an existing one."""

    ticket: Ticket | None = None
    title: str = ""
    description: str = ""
    focus: EditorField = EditorField.TITLE
    frame_id: int = 0

    @classmethod
    def for_ticket(cls, ticket: Ticket | None = None) -> EditorFrame:
        if ticket is None:
            return cls()
        return cls(ticket=ticket, title=ticket.title, description=ticket.description)

    @property
    def heading(self) -> str:
        if self.ticket is None:
            return "New ticket"
        return f"{self.ticket.id} {self.ticket.title}"

    @property
    def has_changes(self) -> bool:
        title = self.title.strip()
        description = self.description.strip()
        if self.ticket is None:
            return bool(title or description)
        return title != self.ticket.title or description != self.ticket.description

    def with_text(self, field: EditorField, value: str) -> EditorFrame:
        if field is EditorField.TITLE:
            return replace(self, title=value)
        return replace(self, description=value)

    def _commit(self) -> Effect:
        title = self.title.strip()
        description = self.description.strip()
        if self.ticket is None:
            return CreateTicket(title=title, description=description)
        return UpdateTicketContent(ticket_id=self.ticket.id, title=title, description=description)

    def handle_key(self, event: KeyPressed) -> FrameOutcome:
        match event.key:
            case "ctrl+c":
                return FrameOutcome(self, effects=(Exit(),))
            case "ctrl+s":
                return FrameOutcome(self, pop=1, effects=(self._commit(),))
            case "escape":
                if self.has_changes:
                    return FrameOutcome(
                        self, push=ConfirmFrame(question=EDITOR_CONFIRM_DISCARD, closes=2)
                    )
                return FrameOutcome(self, pop=1)
            case "enter" if self.focus is EditorField.TITLE:
                return FrameOutcome(replace(self, focus=EditorField.DESCRIPTION))
            case "tab":
                focus = (
                    EditorField.DESCRIPTION
                    if self.focus is EditorField.TITLE
                    else EditorField.TITLE
                )
                return FrameOutcome(replace(self, focus=focus))
            case "shift+tab":
                return FrameOutcome(replace(self, focus=EditorField.TITLE))
        return FrameOutcome(self)

    def required_size(self, window_width: int, window_height: int) -> tuple[int, int]:
        return (
            max(0, window_width - 2 * OVERLAY_HORIZONTAL_MARGIN),
            max(0, window_height - 2 * OVERLAY_VERTICAL_MARGIN),
        )


@dataclass(frozen=True, slots=True)
class ConfirmFrame:
    """Yes/no question. Accepting runs ``effects`` and closes ``closes`` frames."""

    question: str
    effects: tuple[Effect, ...] = ()
    closes: int = 1
    frame_id: int = 0

    @property
    def prompt(self) -> str:
        return f"{self.question} (y/n)"

    def handle_key(self, event: KeyPressed) -> FrameOutcome:
        match event.key:
            case "y":
                return FrameOutcome(self, pop=self.closes, effects=self.effects)
            case "n" | "escape":
                return FrameOutcome(self, pop=1)
            case "ctrl+c":
                return FrameOutcome(self, effects=(Exit(),))
        return FrameOutcome(self)

    def required_size(self, window_width: int, window_height: int) -> tuple[int, int]:
        width = min(len(self.prompt) + CONFIRM_FRAME_WIDTH, window_width)
        height = min(1 + CONFIRM_FRAME_HEIGHT, window_height)
        return max(0, width), max(0, height)


type OverlayFrame = EditorFrame | ConfirmFrame


@dataclass(frozen=True, slots=True)
class OverlayStack:
    """Open frames, bottom first. Frame ids are assigned on push and never reused."""

    frames: tuple[OverlayFrame, ...] = ()
    next_frame_id: int = 1

    def __bool__(self) -> bool:
        return bool(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def top(self) -> OverlayFrame | None:
        return self.frames[-1] if self.frames else None

    def push(self, frame: OverlayFrame) -> OverlayStack:
        frame = replace(frame, frame_id=self.next_frame_id)
        return OverlayStack(frames=(*self.frames, frame), next_frame_id=self.next_frame_id + 1)

    def pop(self, count: int = 1) -> OverlayStack:
        keep = max(0, len(self.frames) - count)
        return replace(self, frames=self.frames[:keep])

    def clear(self) -> OverlayStack:
        return replace(self, frames=())

    def handle_key(self, event: KeyPressed) -> tuple[OverlayStack, tuple[Effect, ...]]:
        """Give the key to the topmost frame and apply what it asks for."""
        if not self.frames:
            return self, ()
        outcome = self.frames[-1].handle_key(event)
        stack = replace(self, frames=(*self.frames[:-1], outcome.frame))
        if outcome.pop:
            stack = stack.pop(outcome.pop)
        if outcome.push is not None:
            stack = stack.push(outcome.push)
        return stack, outcome.effects

    def handle_text(self, event: EditorTextChanged) -> OverlayStack:
        frames = tuple(
            frame.with_text(event.field, event.value)
            if isinstance(frame, EditorFrame) and frame.frame_id == event.frame_id
            else frame
            for frame in self.frames
        )
        return replace(self, frames=frames)
