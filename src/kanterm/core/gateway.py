"""Storage contract consumed by the ticket store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class TicketRow:
    """A persisted ticket as the gateway returns it."""

    id: int
    title: str
    description: str | None
    status: str
    rank: int


class TicketGateway(Protocol):
    """Row-level ticket persistence keyed by ticket id.

    Implementations raise ``GatewayError`` when the backing store fails.
    """

    async def get_tickets(self) -> list[TicketRow]:
        """Return every ticket ordered by rank."""
        ...

    async def add_ticket(self, title: str, description: str | None) -> TicketRow:
        """Insert a ticket ranked after all others and return the stored row."""
        ...

    async def update_ticket_content(
        self, ticket_id: int, title: str, description: str | None
    ) -> None: ...

    async def update_status(self, ticket_id: int, status: str) -> None: ...

    async def update_rank(self, ticket_id: int, rank: int) -> None: ...

    async def delete_ticket(self, ticket_id: int) -> None: ...
