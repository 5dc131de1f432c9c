"""Async SQLite engine for the tickets database."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from kanterm.paths import get_database_path

MEMORY = ":memory:"

# Migrations and the gateway use separate engines on one file.
BUSY_TIMEOUT_MS = 5000


def _install_pragmas(engine: AsyncEngine, *, file_backed: bool) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
        if file_backed:
            cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()


async def create_db_engine(db_path: str | Path | None = None) -> AsyncEngine:
    """Create an engine for ``db_path`` (``:memory:`` allowed), using WAL for files."""
    target = str(db_path) if db_path else str(get_database_path())

    if target == MEMORY:
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{MEMORY}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _install_pragmas(engine, file_backed=False)
        return engine

    location = Path(target)
    location.parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{location}",
        connect_args={"check_same_thread": False},
    )
    _install_pragmas(engine, file_backed=True)
    async with engine.connect() as conn:
        await conn.exec_driver_sql("PRAGMA journal_mode=WAL")
    return engine
