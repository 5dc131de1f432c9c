"""Input events consumed by the board state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kanterm.core.events import CriticalFailure, StoreReady, TicketsUpdated
    from kanterm.core.models import TicketId


class EditorField(StrEnum):
    TITLE = "title"
    DESCRIPTION = "description"


@dataclass(frozen=True, slots=True)
class KeyPressed:
    """A key press, named the way Textual names keys (``ctrl+s``, ``shift+up``, ``K``)."""

    key: str
    character: str | None = None

    @property
    def printable(self) -> str | None:
        """The typed character, if the key produces visible text."""
        if self.character and self.character.isprintable():
            return self.character
        return None


@dataclass(frozen=True, slots=True)
class MousePressed:
    """A mouse button press inside a column.

    ``at`` is a monotonic timestamp in seconds, used for double-click detection.
    """

    column: int
    button: int = 1
    ticket_id: TicketId | None = None
    at: float = 0.0


@dataclass(frozen=True, slots=True)
class MouseScrolled:
    column: int
    direction: int  # -1 up, 1 down


@dataclass(frozen=True, slots=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class EditorTextChanged:
    """Text widget content of an open editor frame changed."""

    frame_id: int
    field: EditorField
    value: str


type InputEvent = KeyPressed | MousePressed | MouseScrolled | Resized | EditorTextChanged
type BoardEvent = InputEvent | StoreReady | TicketsUpdated | CriticalFailure
