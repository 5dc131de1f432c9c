"""Result events delivered back to the board after a store effect completes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kanterm.core.models import Ticket


@dataclass(frozen=True, slots=True)
class StoreReady:
    """The database was migrated and opened."""


@dataclass(frozen=True, slots=True)
class TicketsUpdated:
    """Full ordered ticket snapshot after a store operation."""

    tickets: tuple[Ticket, ...]
    revision: int


@dataclass(frozen=True, slots=True)
class CriticalFailure:
    """Unrecoverable failure; the board shows it and waits for a key to quit."""

    friendly_text: str
    error: str


type ResultEvent = StoreReady | TicketsUpdated | CriticalFailure
