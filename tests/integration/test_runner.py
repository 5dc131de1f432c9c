"""Integration tests for the effect runner."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from typing import TYPE_CHECKING

import pytest
from tests.helpers.fakes import FakeGateway, row

from kanterm.board.column import ColumnState
from kanterm.board.effects import (
    CreateTicket,
    DeleteTicket,
    LoadTickets,
    MoveToNextStatus,
    OpenStore,
    RankAfter,
    RankBefore,
    UpdateTicketContent,
)
from kanterm.board.inputs import KeyPressed
from kanterm.core.errors import GatewayError
from kanterm.core.events import CriticalFailure, StoreReady, TicketsUpdated
from kanterm.core.models import TicketId, TicketStatus
from kanterm.runner import EffectRunner

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.integration


def _fake_runner(tmp_path: Path, gateway: FakeGateway) -> EffectRunner:
    async def _open() -> FakeGateway:
        return gateway

    return EffectRunner(tmp_path / "unused.db", open_gateway=_open)


class TestOpenStore:
    async def test_open_migrates_and_connects(self, db_path: Path):
        runner = EffectRunner(db_path)
        try:
            assert await runner.run(OpenStore()) == StoreReady()
            assert runner.store is not None
        finally:
            await runner.close()
        assert db_path.exists()

    async def test_migration_failure(self, db_path: Path):
        with sqlite3.connect(db_path) as conn:
            conn.execute("CREATE TABLE tickets (id INTEGER PRIMARY KEY)")
        runner = EffectRunner(db_path)

        result = await runner.run(OpenStore())

        assert isinstance(result, CriticalFailure)
        assert result.friendly_text == "Failed to migrate database"
        assert runner.store is None

    async def test_open_failure(self, tmp_path: Path):
        async def _broken() -> FakeGateway:
            raise GatewayError("disk on fire")

        runner = EffectRunner(tmp_path / "x.db", open_gateway=_broken)

        result = await runner.run(OpenStore())

        assert result == CriticalFailure("Failed to open database", "disk on fire")

    async def test_effect_before_open_fails(self, tmp_path: Path):
        runner = EffectRunner(tmp_path / "x.db")
        result = await runner.run(LoadTickets())
        assert isinstance(result, CriticalFailure)


class TestStoreEffects:
    async def test_full_session_over_sqlite(self, db_path: Path):
        runner = EffectRunner(db_path)
        try:
            await runner.run(OpenStore())
            await runner.run(LoadTickets())
            await runner.run(CreateTicket(title="a", description=""))
            await runner.run(CreateTicket(title="b", description="second"))
            await runner.run(UpdateTicketContent(ticket_id=TicketId(1), title="A", description=""))
            await runner.run(RankBefore(ticket_id=TicketId(2), before_id=TicketId(1)))
            result = await runner.run(MoveToNextStatus(ticket_id=TicketId(1)))
        finally:
            await runner.close()

        assert isinstance(result, TicketsUpdated)
        assert [(t.id.number, t.title, t.status) for t in result.tickets] == [
            (2, "b", TicketStatus.TODO),
            (1, "A", TicketStatus.IN_PROGRESS),
        ]

    async def test_noop_effect_returns_none(self, tmp_path: Path):
        gateway = FakeGateway().seed(row(1, status="DONE"))
        runner = _fake_runner(tmp_path, gateway)
        await runner.run(OpenStore())
        await runner.run(LoadTickets())

        assert await runner.run(MoveToNextStatus(ticket_id=TicketId(1))) is None

    async def test_store_error_becomes_critical_failure(self, tmp_path: Path):
        gateway = FakeGateway().seed(row(1), row(2))
        runner = _fake_runner(tmp_path, gateway)
        await runner.run(OpenStore())
        await runner.run(LoadTickets())
        gateway.fail.add("delete_ticket")

        result = await runner.run(DeleteTicket(ticket_id=TicketId(1)))

        assert isinstance(result, CriticalFailure)
        assert result.friendly_text == "Failed to delete ticket"
        assert "injected failure" in result.error

    async def test_rank_precondition_is_critical(self, tmp_path: Path):
        gateway = FakeGateway().seed(row(1), row(2))
        runner = _fake_runner(tmp_path, gateway)
        await runner.run(OpenStore())
        await runner.run(LoadTickets())

        result = await runner.run(RankAfter(ticket_id=TicketId(2), after_id=TicketId(1)))

        assert isinstance(result, CriticalFailure)
        assert result.friendly_text == "Failed to update rank"

    async def test_rank_gesture_repeated_before_refresh_ends_session(self, tmp_path: Path):
        """A second K pressed before the first move lands re-sends a stale request.

        The store rejects it as a precondition failure and the session ends.
        """
        gateway = FakeGateway().seed(row(1), row(2), row(3))
        runner = _fake_runner(tmp_path, gateway)
        await runner.run(OpenStore())
        loaded = await runner.run(LoadTickets())
        column = ColumnState(status=TicketStatus.TODO, focused=True).set_tickets(loaded.tickets)
        column = replace(column, listing=column.listing.select_index(2))

        first = column.handle_key(KeyPressed("K", "K")).effects
        second = column.handle_key(KeyPressed("K", "K")).effects
        assert first == second == (RankBefore(ticket_id=TicketId(3), before_id=TicketId(2)),)

        moved = await runner.run(first[0])
        assert isinstance(moved, TicketsUpdated)
        assert [t.id.number for t in moved.tickets] == [1, 3, 2]

        result = await runner.run(second[0])

        assert isinstance(result, CriticalFailure)
        assert result.friendly_text == "Failed to update rank"
        assert [t.id.number for t in runner.store.tickets] == [1, 3, 2]
