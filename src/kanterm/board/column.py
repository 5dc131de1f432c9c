"""Per-status column: selection, filtering and the ticket shortcuts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from kanterm.board.effects import (
    DeleteTicket,
    MoveToNextStatus,
    MoveToPreviousStatus,
    RankAfter,
    RankBefore,
)
from kanterm.board.listing import ListState
from kanterm.board.overlay import ConfirmFrame, EditorFrame
from kanterm.constants import DEFAULT_DOUBLE_CLICK_MS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kanterm.board.effects import Effect
    from kanterm.board.inputs import KeyPressed, MousePressed
    from kanterm.board.overlay import OverlayFrame
    from kanterm.core.models import Ticket, TicketId, TicketStatus


@dataclass(frozen=True, slots=True)
class LastClick:
    ticket_id: TicketId
    at: float


@dataclass(frozen=True, slots=True)
class ColumnOutcome:
    column: ColumnState
    effects: tuple[Effect, ...] = ()
    push: OverlayFrame | None = None


@dataclass(frozen=True, slots=True)
class ColumnState:
    """Tickets of one status, in global rank order, with local UI state."""

    status: TicketStatus
    listing: ListState = field(default_factory=ListState)
    focused: bool = False
    last_click: LastClick | None = None

    @property
    def capturing(self) -> bool:
        return self.listing.capturing

    @property
    def selected(self) -> Ticket | None:
        return self.listing.selected

    def set_tickets(self, tickets: Iterable[Ticket]) -> ColumnState:
        """Take this column's tickets from the full ordered list."""
        mine = tuple(ticket for ticket in tickets if ticket.status == self.status)
        return replace(self, listing=self.listing.with_items(mine))

    def with_focus(self, focused: bool) -> ColumnState:
        return replace(self, focused=focused)

    def _rank_up(self, index: int, new_index: int) -> tuple[Effect, ...]:
        visible = self.listing.visible
        if index == new_index or not (0 <= index < len(visible) and 0 <= new_index < len(visible)):
            return ()
        return (RankBefore(ticket_id=visible[index].id, before_id=visible[new_index].id),)

    def _rank_down(self, index: int, new_index: int) -> tuple[Effect, ...]:
        visible = self.listing.visible
        if index == new_index or not (0 <= index < len(visible) and 0 <= new_index < len(visible)):
            return ()
        return (RankAfter(ticket_id=visible[index].id, after_id=visible[new_index].id),)

    def handle_key(self, event: KeyPressed) -> ColumnOutcome:
        if self.listing.capturing:
            listing, _ = self.listing.handle_key(event)
            return ColumnOutcome(replace(self, listing=listing))

        selected = self.listing.selected
        index = self.listing.index
        last = len(self.listing.visible) - 1

        match event.key:
            case "escape":
                if self.listing.is_filtered:
                    return ColumnOutcome(replace(self, listing=self.listing.clear_filter()))
                return ColumnOutcome(self)
            case "c":
                return ColumnOutcome(self, push=EditorFrame.for_ticket(None))
            case "e" | "space":
                if selected is None:
                    return ColumnOutcome(self)
                return ColumnOutcome(self, push=EditorFrame.for_ticket(selected))
            case "d":
                if selected is None:
                    return ColumnOutcome(self)
                confirm = ConfirmFrame(
                    question=f"Are you sure you want to delete {selected.id}?",
                    effects=(DeleteTicket(ticket_id=selected.id),),
                )
                return ColumnOutcome(self, push=confirm)
            case "b":
                if selected is None:
                    return ColumnOutcome(self)
                return ColumnOutcome(self, effects=(MoveToPreviousStatus(ticket_id=selected.id),))
            case "n":
                if selected is None:
                    return ColumnOutcome(self)
                return ColumnOutcome(self, effects=(MoveToNextStatus(ticket_id=selected.id),))
            case "K" | "shift+up":
                return ColumnOutcome(self, effects=self._rank_up(index, index - 1))
            case "J" | "shift+down":
                return ColumnOutcome(self, effects=self._rank_down(index, index + 1))
            case "T":
                return ColumnOutcome(self, effects=self._rank_up(index, 0))
            case "B":
                return ColumnOutcome(self, effects=self._rank_down(index, last))

        listing, _ = self.listing.handle_key(event)
        return ColumnOutcome(replace(self, listing=listing))

    def handle_click(
        self,
        event: MousePressed,
        *,
        double_click_interval: float = DEFAULT_DOUBLE_CLICK_MS / 1000,
    ) -> ColumnOutcome:
        """Select the clicked ticket. A second click on it within the interval opens it."""
        if event.button != 1 or event.ticket_id is None:
            return ColumnOutcome(self)
        clicked = next((t for t in self.listing.visible if t.id == event.ticket_id), None)
        if clicked is None:
            return ColumnOutcome(self)
        listing = self.listing.select_ticket(clicked.id)
        previous = self.last_click
        if (
            previous is not None
            and previous.ticket_id == clicked.id
            and event.at - previous.at < double_click_interval
        ):
            column = replace(self, listing=listing, last_click=None)
            return ColumnOutcome(column, push=EditorFrame.for_ticket(clicked))
        column = replace(self, listing=listing, last_click=LastClick(event.ticket_id, event.at))
        return ColumnOutcome(column)

    def handle_scroll(self, direction: int) -> ColumnState:
        return replace(self, listing=self.listing.move(1 if direction > 0 else -1))
