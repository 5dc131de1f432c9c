"""Exception hierarchy for kanterm."""

from __future__ import annotations


class KantermError(Exception):
    """Base for all kanterm errors."""


class GatewayError(KantermError):
    """Raised when the database gateway cannot complete an operation."""


class MigrationError(KantermError):
    """Raised when a schema migration step fails."""

    def __init__(self, message: str, *, version: int | None = None) -> None:
        super().__init__(message)
        self.version = version


class InsufficientRankSpace(KantermError):
    """Raised when no integer rank exists between two neighbors."""

    def __init__(self, lower: int, upper: int) -> None:
        super().__init__(f"ran out of room between tickets (ranks {lower} and {upper})")
        self.lower = lower
        self.upper = upper


class StoreError(KantermError):
    """Store failure carrying a short operator-facing description."""

    def __init__(self, message: str, *, friendly_text: str) -> None:
        super().__init__(message)
        self.friendly_text = friendly_text


class RankPreconditionError(StoreError):
    """Raised when a rank move targets a ticket already on the requested side."""
