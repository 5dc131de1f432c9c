"""Pytest fixtures for kanterm tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="kanterm-tests-"))
os.environ["KANTERM_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["KANTERM_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from kanterm.adapters.db.gateway import SqlTicketGateway
    from kanterm.core.store import TicketStore
    from tests.helpers.fakes import FakeGateway


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """In-memory gateway with failure injection."""
    from tests.helpers.fakes import FakeGateway

    return FakeGateway()


@pytest.fixture
def store(fake_gateway: FakeGateway) -> TicketStore:
    """Store backed by the in-memory gateway."""
    from kanterm.core.store import TicketStore

    return TicketStore(fake_gateway)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "kanterm.db"


@pytest.fixture
async def sql_gateway(db_path: Path) -> AsyncGenerator[SqlTicketGateway, None]:
    """Gateway over a freshly migrated SQLite file."""
    from kanterm.adapters.db import SqlTicketGateway, run_migrations

    await run_migrations(db_path)
    gateway = await SqlTicketGateway.open(db_path)
    yield gateway
    await gateway.close()
