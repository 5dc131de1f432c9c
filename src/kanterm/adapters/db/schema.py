"""SQLModel table mapping for tickets."""

# NOTE: Avoid `from __future__ import annotations` because SQLModel evaluates
# field annotations at class creation time.

from sqlmodel import Field, SQLModel


class TicketRecord(SQLModel, table=True):
    """Row in the tickets table. The table itself is created by migrations."""

    __tablename__ = "tickets"  # type: ignore[bad-override]

    id: int | None = Field(default=None, primary_key=True)
    title: str
    description: str | None = Field(default=None)
    status: str = Field(default="TODO")
    rank: int = Field(unique=True, index=True)
