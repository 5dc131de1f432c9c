"""Versioned schema migrations for the tickets database.

Each migration has ``up`` and ``down`` statements. The applied version is tracked
with ``PRAGMA user_version``, so version N means migrations 1..N have run.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from kanterm.adapters.db.engine import create_db_engine
from kanterm.constants import RANK_GAP
from kanterm.core.errors import MigrationError

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

logger = logging.getLogger(__name__)

# Maximum number of backup files to keep
MAX_BACKUPS = 3


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    name: str
    up: tuple[str, ...]
    down: tuple[str, ...]


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        name="create tickets",
        up=(
            """
            CREATE TABLE tickets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT,
                status TEXT NOT NULL DEFAULT 'TODO'
            )
            """,
        ),
        down=("DROP TABLE tickets",),
    ),
    Migration(
        version=2,
        name="add ticket rank",
        up=(
            "ALTER TABLE tickets ADD COLUMN rank INTEGER NOT NULL DEFAULT 0",
            f"UPDATE tickets SET rank = id * {RANK_GAP}",
            "CREATE UNIQUE INDEX ix_tickets_rank ON tickets (rank)",
        ),
        down=(
            "DROP INDEX ix_tickets_rank",
            "ALTER TABLE tickets DROP COLUMN rank",
        ),
    ),
)

SCHEMA_VERSION = MIGRATIONS[-1].version


async def get_schema_version(conn: AsyncConnection) -> int:
    result = await conn.exec_driver_sql("PRAGMA user_version")
    row = result.first()
    return int(row[0]) if row else 0


async def _apply(conn: AsyncConnection, statements: tuple[str, ...], version: int) -> None:
    for statement in statements:
        await conn.exec_driver_sql(statement)
    await conn.exec_driver_sql(f"PRAGMA user_version = {version}")


async def migrate(
    engine: AsyncEngine,
    remigrate_count: int = 0,
    db_path: Path | None = None,
) -> int:
    """Roll back ``remigrate_count`` migrations, then apply all pending ones.

    Args:
        engine: Engine bound to the tickets database
        remigrate_count: Number of applied migrations to undo first
        db_path: Path to database file (for backup creation before rolling back)

    Returns:
        The schema version after migration

    Raises:
        MigrationError: A migration step failed.
    """
    by_version = {migration.version: migration for migration in MIGRATIONS}
    remigrate_count = max(0, remigrate_count)

    try:
        async with engine.connect() as conn:
            version = await get_schema_version(conn)
            if remigrate_count and version:
                await conn.exec_driver_sql("PRAGMA wal_checkpoint(TRUNCATE)")
    except SQLAlchemyError as exc:
        raise MigrationError(f"failed to read schema version: {exc}") from exc

    if remigrate_count and version and db_path is not None and db_path.exists():
        _create_backup(db_path)

    if remigrate_count:
        logger.info(f"Running down migrations (remigrate_count={remigrate_count})")
    for _ in range(remigrate_count):
        if version == 0:
            break
        migration = by_version.get(version)
        if migration is None:
            raise MigrationError(f"unknown schema version {version}", version=version)
        try:
            async with engine.begin() as conn:
                await _apply(conn, migration.down, version - 1)
        except SQLAlchemyError as exc:
            raise MigrationError(
                f"down migration {version} ({migration.name}) failed: {exc}", version=version
            ) from exc
        logger.debug(f"Migration: reverted {version} ({migration.name})")
        version -= 1

    logger.info("Running up migrations")
    for migration in MIGRATIONS:
        if migration.version <= version:
            continue
        try:
            async with engine.begin() as conn:
                await _apply(conn, migration.up, migration.version)
        except SQLAlchemyError as exc:
            raise MigrationError(
                f"up migration {migration.version} ({migration.name}) failed: {exc}",
                version=migration.version,
            ) from exc
        logger.debug(f"Migration: applied {migration.version} ({migration.name})")
        version = migration.version

    return version


async def run_migrations(db_path: Path, remigrate_count: int = 0) -> int:
    """Open the database at ``db_path``, migrate it, and release the engine."""
    try:
        engine = await create_db_engine(db_path)
    except (SQLAlchemyError, OSError) as exc:
        raise MigrationError(f"failed to open database connection: {exc}") from exc
    try:
        return await migrate(engine, remigrate_count, db_path)
    finally:
        await engine.dispose()


def _create_backup(db_path: Path) -> Path | None:
    """Create a timestamped backup before rolling back migrations.

    Keeps only the last MAX_BACKUPS backup files to avoid disk bloat.
    """
    try:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = db_path.with_suffix(f".db.backup_{timestamp}")
        shutil.copy2(db_path, backup_path)
        logger.debug(f"Migration: Created backup at {backup_path}")

        backup_pattern = db_path.stem + ".db.backup_*"
        backups = sorted(db_path.parent.glob(backup_pattern), reverse=True)
        for old_backup in backups[MAX_BACKUPS:]:
            old_backup.unlink()
            logger.debug(f"Migration: Removed old backup {old_backup}")

        return backup_path
    except OSError as e:
        logger.warning(f"Migration: Could not create backup: {e}")
        return None
