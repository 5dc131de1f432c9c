"""SQLite ticket gateway on SQLModel and the async SQLAlchemy engine."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import col, delete, select

from kanterm.adapters.db.engine import create_db_engine
from kanterm.adapters.db.schema import TicketRecord
from kanterm.constants import RANK_GAP
from kanterm.core.errors import GatewayError
from kanterm.core.gateway import TicketRow
from kanterm.core.models import TicketStatus

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.warning(f"Gateway: {operation} failed: {exc}")
        raise GatewayError(f"{operation}: {exc}") from exc


def _to_row(record: TicketRecord) -> TicketRow:
    assert record.id is not None
    return TicketRow(
        id=record.id,
        title=record.title,
        description=record.description,
        status=record.status,
        rank=record.rank,
    )


class SqlTicketGateway:
    """Async gateway for ticket rows."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine: AsyncEngine | None = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    async def open(cls, db_path: str | Path) -> SqlTicketGateway:
        """Connect to an already migrated database and verify it answers."""
        with _translate_errors("open database"):
            engine = await create_db_engine(db_path)
            try:
                async with engine.connect() as conn:
                    await conn.exec_driver_sql("SELECT 1 FROM tickets LIMIT 1")
            except SQLAlchemyError:
                await engine.dispose()
                raise
        return cls(engine)

    async def close(self) -> None:
        """Close engine and release resources."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    def _get_session(self) -> AsyncSession:
        if self._engine is None:
            raise GatewayError("gateway is closed")
        return self._session_factory()

    async def get_tickets(self) -> list[TicketRow]:
        with _translate_errors("get tickets"):
            async with self._get_session() as session:
                result = await session.execute(
                    select(TicketRecord).order_by(col(TicketRecord.rank).asc())
                )
                return [_to_row(record) for record in result.scalars().all()]

    async def add_ticket(self, title: str, description: str | None) -> TicketRow:
        with _translate_errors("add ticket"):
            async with self._get_session() as session:
                result = await session.execute(select(func.max(col(TicketRecord.rank))))
                current_max = result.scalar_one_or_none()
                rank = 0 if current_max is None else current_max + RANK_GAP
                record = TicketRecord(
                    title=title,
                    description=description,
                    status=TicketStatus.TODO.value,
                    rank=rank,
                )
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return _to_row(record)

    async def update_ticket_content(
        self, ticket_id: int, title: str, description: str | None
    ) -> None:
        with _translate_errors("update ticket content"):
            async with self._get_session() as session:
                await session.execute(
                    update(TicketRecord)
                    .where(col(TicketRecord.id) == ticket_id)
                    .values(title=title, description=description)
                )
                await session.commit()

    async def update_status(self, ticket_id: int, status: str) -> None:
        with _translate_errors("update status"):
            async with self._get_session() as session:
                await session.execute(
                    update(TicketRecord)
                    .where(col(TicketRecord.id) == ticket_id)
                    .values(status=status)
                )
                await session.commit()

    async def update_rank(self, ticket_id: int, rank: int) -> None:
        with _translate_errors("update rank"):
            async with self._get_session() as session:
                await session.execute(
                    update(TicketRecord).where(col(TicketRecord.id) == ticket_id).values(rank=rank)
                )
                await session.commit()

    async def delete_ticket(self, ticket_id: int) -> None:
        with _translate_errors("delete ticket"):
            async with self._get_session() as session:
                await session.execute(delete(TicketRecord).where(col(TicketRecord.id) == ticket_id))
                await session.commit()
