"""Core ticket models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import ClassVar


class TicketStatus(StrEnum):
    """Ticket status values for Kanban columns."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def next_status(cls, current: TicketStatus) -> TicketStatus | None:
        """Return the next status in the workflow."""
        from kanterm.constants import COLUMN_ORDER

        idx = COLUMN_ORDER.index(current)
        if idx < len(COLUMN_ORDER) - 1:
            return COLUMN_ORDER[idx + 1]
        return None

    @classmethod
    def prev_status(cls, current: TicketStatus) -> TicketStatus | None:
        """Return the previous status in the workflow."""
        from kanterm.constants import COLUMN_ORDER

        idx = COLUMN_ORDER.index(current)
        if idx > 0:
            return COLUMN_ORDER[idx - 1]
        return None

    @property
    def label(self) -> str:
        """Column title."""
        from kanterm.constants import STATUS_LABELS

        return STATUS_LABELS[self]


@dataclass(frozen=True, slots=True, order=True)
class TicketId:
    """Opaque ticket handle. Number 0 means no ticket."""

    number: int

    INVALID: ClassVar[TicketId]

    @property
    def is_valid(self) -> bool:
        return self.number > 0

    def __str__(self) -> str:
        if not self.is_valid:
            return "INVALID"
        return f"TK-{self.number}"


TicketId.INVALID = TicketId(0)


@dataclass(frozen=True, slots=True)
class Ticket:
    """A single ticket on the board."""

    id: TicketId
    status: TicketStatus
    title: str
    description: str = ""
    rank: int = 0

    def with_content(self, title: str, description: str) -> Ticket:
        return replace(self, title=title, description=description)

    def with_status(self, status: TicketStatus) -> Ticket:
        return replace(self, status=status)

    def with_rank(self, rank: int) -> Ticket:
        return replace(self, rank=rank)

    @property
    def search_text(self) -> str:
        """Text a column filter matches against."""
        return f"{self.title} {self.id}"
