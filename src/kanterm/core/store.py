"""Ranked ticket store: the ordered in-memory ticket list and its persistence."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from kanterm.core.errors import (
    GatewayError,
    InsufficientRankSpace,
    RankPreconditionError,
    StoreError,
)
from kanterm.core.events import TicketsUpdated
from kanterm.core.models import Ticket, TicketId, TicketStatus
from kanterm.core.ranking import compute_rank

if TYPE_CHECKING:
    from kanterm.core.gateway import TicketGateway, TicketRow

logger = logging.getLogger(__name__)


def _nullable(description: str) -> str | None:
    return description or None


def _ticket_from_row(row: TicketRow) -> Ticket:
    return Ticket(
        id=TicketId(row.id),
        status=TicketStatus(row.status),
        title=row.title,
        description=row.description or "",
        rank=row.rank,
    )


class TicketStore:
    """Single-writer owner of the globally ranked ticket list.

    Every public operation holds one lock for its whole duration, so locating
    tickets, computing ranks, persisting and mutating memory happen as one step
    relative to other operations. Writes go to the gateway first and touch memory
    only when the gateway succeeded.

    Operations return a ``TicketsUpdated`` snapshot, or ``None`` when nothing was
    done, and raise ``StoreError`` on failure.
    """

    def __init__(self, gateway: TicketGateway) -> None:
        self._gateway = gateway
        self._tickets: list[Ticket] = []
        self._lock = asyncio.Lock()
        self._revision = 0

    @property
    def tickets(self) -> tuple[Ticket, ...]:
        return tuple(self._tickets)

    @property
    def gateway(self) -> TicketGateway:
        return self._gateway

    def _updated(self) -> TicketsUpdated:
        self._revision += 1
        return TicketsUpdated(tickets=tuple(self._tickets), revision=self._revision)

    def _index_of(self, ticket_id: TicketId) -> int | None:
        for index, ticket in enumerate(self._tickets):
            if ticket.id == ticket_id:
                return index
        return None

    async def load(self) -> TicketsUpdated:
        """Replace the in-memory list with every persisted ticket."""
        async with self._lock:
            try:
                rows = await self._gateway.get_tickets()
            except GatewayError as exc:
                raise StoreError(str(exc), friendly_text="Failed to load tickets") from exc
            try:
                tickets = [_ticket_from_row(row) for row in rows]
            except ValueError as exc:
                raise StoreError(str(exc), friendly_text="Failed to load tickets") from exc
            self._tickets = tickets
            logger.debug(f"Store: loaded {len(self._tickets)} tickets")
            return self._updated()

    async def create(self, title: str, description: str = "") -> TicketsUpdated:
        """Persist a new TODO ticket ranked after every other ticket."""
        async with self._lock:
            try:
                row = await self._gateway.add_ticket(title, _nullable(description))
            except GatewayError as exc:
                raise StoreError(
                    str(exc), friendly_text="Failed to write new ticket to db"
                ) from exc
            ticket = Ticket(
                id=TicketId(row.id),
                status=TicketStatus.TODO,
                title=title,
                description=description,
                rank=row.rank,
            )
            self._tickets.append(ticket)
            logger.debug(f"Store: created {ticket.id} at rank {ticket.rank}")
            return self._updated()

    async def update_content(
        self, ticket_id: TicketId, title: str, description: str
    ) -> TicketsUpdated:
        """Change title and description. An unknown id changes nothing."""
        async with self._lock:
            index = self._index_of(ticket_id)
            if index is not None:
                try:
                    await self._gateway.update_ticket_content(
                        ticket_id.number, title, _nullable(description)
                    )
                except GatewayError as exc:
                    raise StoreError(str(exc), friendly_text="Failed to update ticket") from exc
                self._tickets[index] = self._tickets[index].with_content(title, description)
            return self._updated()

    async def update_status(self, ticket_id: TicketId, status: TicketStatus) -> TicketsUpdated:
        """Change the status of a ticket. An unknown id changes nothing."""
        async with self._lock:
            return await self._update_status(ticket_id, status)

    async def _update_status(self, ticket_id: TicketId, status: TicketStatus) -> TicketsUpdated:
        index = self._index_of(ticket_id)
        if index is not None:
            try:
                await self._gateway.update_status(ticket_id.number, status.value)
            except GatewayError as exc:
                raise StoreError(
                    str(exc), friendly_text="Failed to update ticket status"
                ) from exc
            self._tickets[index] = self._tickets[index].with_status(status)
        return self._updated()

    async def move_to_next_status(self, ticket_id: TicketId) -> TicketsUpdated | None:
        async with self._lock:
            index = self._index_of(ticket_id)
            if index is None:
                return None
            status = TicketStatus.next_status(self._tickets[index].status)
            if status is None:
                return None
            return await self._update_status(ticket_id, status)

    async def move_to_previous_status(self, ticket_id: TicketId) -> TicketsUpdated | None:
        async with self._lock:
            index = self._index_of(ticket_id)
            if index is None:
                return None
            status = TicketStatus.prev_status(self._tickets[index].status)
            if status is None:
                return None
            return await self._update_status(ticket_id, status)

    async def rank_before(self, ticket_id: TicketId, before_id: TicketId) -> TicketsUpdated | None:
        """Place a ticket directly before ``before_id``, which must currently precede it."""
        async with self._lock:
            index = self._index_of(ticket_id)
            before_index = self._index_of(before_id)
            if index is None or before_index is None:
                return None
            if index <= before_index:
                raise RankPreconditionError(
                    f"{ticket_id} is already before {before_id}",
                    friendly_text="Failed to update rank",
                )
            return await self._move(index, before_index)

    async def rank_after(self, ticket_id: TicketId, after_id: TicketId) -> TicketsUpdated | None:
        """Place a ticket directly after ``after_id``, which must currently follow it."""
        async with self._lock:
            index = self._index_of(ticket_id)
            after_index = self._index_of(after_id)
            if index is None or after_index is None:
                return None
            if index >= after_index:
                raise RankPreconditionError(
                    f"{ticket_id} is already after {after_id}",
                    friendly_text="Failed to update rank",
                )
            return await self._move(index, after_index + 1)

    async def _move(self, current_index: int, target_index: int) -> TicketsUpdated:
        try:
            rank = compute_rank([t.rank for t in self._tickets], current_index, target_index)
        except InsufficientRankSpace as exc:
            raise StoreError(str(exc), friendly_text="Failed to update rank") from exc

        ticket = self._tickets[current_index]
        try:
            await self._gateway.update_rank(ticket.id.number, rank)
        except GatewayError as exc:
            raise StoreError(str(exc), friendly_text="Failed to update rank") from exc

        moved = ticket.with_rank(rank)
        if target_index > current_index:
            self._tickets.insert(target_index, moved)
            del self._tickets[current_index]
        else:
            del self._tickets[current_index]
            self._tickets.insert(target_index, moved)
        logger.debug(f"Store: ranked {ticket.id} at {rank}")
        return self._updated()

    async def delete(self, ticket_id: TicketId) -> TicketsUpdated:
        async with self._lock:
            try:
                await self._gateway.delete_ticket(ticket_id.number)
            except GatewayError as exc:
                raise StoreError(str(exc), friendly_text="Failed to delete ticket") from exc
            self._tickets = [t for t in self._tickets if t.id != ticket_id]
            return self._updated()
