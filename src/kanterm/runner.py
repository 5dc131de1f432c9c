"""Executes board effects against the database and reports result events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kanterm.adapters.db.gateway import SqlTicketGateway
from kanterm.adapters.db.migrations import run_migrations
from kanterm.board.effects import (
    CreateTicket,
    DeleteTicket,
    LoadTickets,
    MoveToNextStatus,
    MoveToPreviousStatus,
    OpenStore,
    RankAfter,
    RankBefore,
    UpdateTicketContent,
)
from kanterm.core.errors import GatewayError, MigrationError, StoreError
from kanterm.core.events import CriticalFailure, StoreReady
from kanterm.core.store import TicketStore

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from kanterm.board.effects import StoreEffect
    from kanterm.core.events import ResultEvent, TicketsUpdated
    from kanterm.core.gateway import TicketGateway

logger = logging.getLogger(__name__)

type GatewayOpener = Callable[[], Awaitable[TicketGateway]]


class EffectRunner:
    """Runs store effects. Each call returns one result event, or None for no-ops.

    Calls may overlap; the store serializes them.
    """

    def __init__(
        self,
        db_path: Path,
        *,
        remigrate_count: int = 0,
        open_gateway: GatewayOpener | None = None,
    ) -> None:
        self._db_path = db_path
        self._remigrate_count = remigrate_count
        self._open_gateway = open_gateway
        self._store: TicketStore | None = None

    @property
    def store(self) -> TicketStore | None:
        return self._store

    async def close(self) -> None:
        if self._store is not None and isinstance(self._store.gateway, SqlTicketGateway):
            await self._store.gateway.close()

    async def _open(self) -> ResultEvent:
        if self._open_gateway is not None:
            try:
                gateway = await self._open_gateway()
            except GatewayError as exc:
                return CriticalFailure("Failed to open database", str(exc))
            self._store = TicketStore(gateway)
            return StoreReady()

        try:
            version = await run_migrations(self._db_path, self._remigrate_count)
        except MigrationError as exc:
            logger.error(f"Migration failed: {exc}")
            return CriticalFailure("Failed to migrate database", str(exc))
        logger.info(f"Database at schema version {version}: {self._db_path}")

        try:
            gateway = await SqlTicketGateway.open(self._db_path)
        except GatewayError as exc:
            logger.error(f"Opening database failed: {exc}")
            return CriticalFailure("Failed to open database", str(exc))
        self._store = TicketStore(gateway)
        return StoreReady()

    async def _dispatch(self, store: TicketStore, effect: StoreEffect) -> TicketsUpdated | None:
        match effect:
            case LoadTickets():
                return await store.load()
            case CreateTicket(title=title, description=description):
                return await store.create(title, description)
            case UpdateTicketContent(ticket_id=ticket_id, title=title, description=description):
                return await store.update_content(ticket_id, title, description)
            case MoveToNextStatus(ticket_id=ticket_id):
                return await store.move_to_next_status(ticket_id)
            case MoveToPreviousStatus(ticket_id=ticket_id):
                return await store.move_to_previous_status(ticket_id)
            case RankBefore(ticket_id=ticket_id, before_id=before_id):
                return await store.rank_before(ticket_id, before_id)
            case RankAfter(ticket_id=ticket_id, after_id=after_id):
                return await store.rank_after(ticket_id, after_id)
            case DeleteTicket(ticket_id=ticket_id):
                return await store.delete(ticket_id)
        raise TypeError(f"Unsupported effect: {effect!r}")

    async def run(self, effect: StoreEffect) -> ResultEvent | None:
        """Execute one effect and describe its outcome as a result event."""
        if isinstance(effect, OpenStore):
            return await self._open()
        if self._store is None:
            return CriticalFailure("Failed", "store used before it was opened")
        try:
            return await self._dispatch(self._store, effect)
        except StoreError as exc:
            logger.error(f"{exc.friendly_text}: {exc}")
            return CriticalFailure(exc.friendly_text, str(exc))
