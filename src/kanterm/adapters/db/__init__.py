"""SQLite persistence for tickets."""

from kanterm.adapters.db.gateway import SqlTicketGateway
from kanterm.adapters.db.migrations import migrate, run_migrations

__all__ = ["SqlTicketGateway", "migrate", "run_migrations"]
