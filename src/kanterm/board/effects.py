"""Side effects requested by the board, as inert data.

The board never performs I/O itself. ``kanterm.runner.EffectRunner`` executes
these and turns each outcome into a result event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kanterm.core.models import TicketId


@dataclass(frozen=True, slots=True)
class OpenStore:
    """Migrate and open the database."""


@dataclass(frozen=True, slots=True)
class LoadTickets:
    pass


@dataclass(frozen=True, slots=True)
class CreateTicket:
    title: str
    description: str


@dataclass(frozen=True, slots=True)
class UpdateTicketContent:
    ticket_id: TicketId
    title: str
    description: str


@dataclass(frozen=True, slots=True)
class MoveToNextStatus:
    ticket_id: TicketId


@dataclass(frozen=True, slots=True)
class MoveToPreviousStatus:
    ticket_id: TicketId


@dataclass(frozen=True, slots=True)
class RankBefore:
    ticket_id: TicketId
    before_id: TicketId


@dataclass(frozen=True, slots=True)
class RankAfter:
    ticket_id: TicketId
    after_id: TicketId


@dataclass(frozen=True, slots=True)
class DeleteTicket:
    ticket_id: TicketId


@dataclass(frozen=True, slots=True)
class Exit:
    """Leave the application."""


type StoreEffect = (
    OpenStore
    | LoadTickets
    | CreateTicket
    | UpdateTicketContent
    | MoveToNextStatus
    | MoveToPreviousStatus
    | RankBefore
    | RankAfter
    | DeleteTicket
)
type Effect = StoreEffect | Exit
