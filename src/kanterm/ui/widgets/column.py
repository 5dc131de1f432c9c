"""ColumnView widget displaying one status column."""

from __future__ import annotations

import time
from itertools import pairwise
from typing import TYPE_CHECKING

from textual.containers import Vertical, VerticalScroll
from textual.widget import Widget
from textual.widgets import Label

from kanterm.board.inputs import MousePressed, MouseScrolled
from kanterm.ui.widgets.card import TicketCard

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from kanterm.board.column import ColumnState
    from kanterm.core.models import TicketStatus


class _NSLabel(Label):
    ALLOW_SELECT = False
    can_focus = False


class _CardList(VerticalScroll):
    """Card container. The wheel moves the selection instead of scrolling."""

    ALLOW_SELECT = False
    can_focus = False

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.prevent_default()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.prevent_default()


class ColumnView(Widget):
    """Renders a ``ColumnState`` and reports mouse input for its column index."""

    ALLOW_SELECT = False
    can_focus = False

    def __init__(self, index: int, status: TicketStatus, **kwargs) -> None:
        super().__init__(id=f"column-{status.value.lower()}", **kwargs)
        self.index = index
        self.status = status

    def compose(self) -> ComposeResult:
        with Vertical(classes="column-header"):
            yield _NSLabel(self.status.label, classes="column-header-text")
            yield _NSLabel("", classes="column-filter", markup=False)
        yield _CardList(classes="column-content")
        yield _NSLabel("No tickets", classes="column-empty")

    def get_cards(self) -> list[TicketCard]:
        return list(self.query(TicketCard))

    def sync(self, column: ColumnState) -> None:
        """Bring cards, selection, focus and filter line in line with ``column``."""
        self.set_class(column.focused, "focused")

        listing = column.listing
        filter_label = self.query_one(".column-filter", _NSLabel)
        if listing.capturing:
            filter_label.update(f"/{listing.filter_text}█")
        elif listing.is_filtered:
            filter_label.update(f"filter: {listing.filter_text}")
        else:
            filter_label.update("")
        filter_label.display = listing.capturing or listing.is_filtered

        visible = listing.visible
        self.query_one(".column-empty", _NSLabel).display = not visible
        content = self.query_one(_CardList)

        current_cards = {card.ticket.id: card for card in self.get_cards() if card.ticket}
        wanted = {ticket.id: ticket for ticket in visible}

        for ticket_id in set(current_cards) - set(wanted):
            current_cards.pop(ticket_id).remove()

        for ticket in visible:
            card = current_cards.get(ticket.id)
            if card is None:
                card = TicketCard(ticket)
                current_cards[ticket.id] = card
                content.mount(card)
            elif card.ticket != ticket:
                card.ticket = ticket

        ordered = [current_cards[ticket.id] for ticket in visible]
        attached = [card for card in ordered if card in content.children]
        for previous, card in pairwise(attached):
            content.move_child(card, after=previous)

        selected = listing.selected
        for card in ordered:
            is_selected = selected is not None and card.ticket is not None and (
                card.ticket.id == selected.id
            )
            card.selected = is_selected
            if is_selected:
                card.call_after_refresh(card.scroll_visible, animate=False)

    def on_ticket_card_pressed(self, message: TicketCard.Pressed) -> None:
        message.stop()
        self.app.dispatch(
            MousePressed(
                column=self.index,
                button=message.button,
                ticket_id=message.ticket_id,
                at=time.monotonic(),
            )
        )

    def on_mouse_down(self, event: events.MouseDown) -> None:
        event.stop()
        self.app.dispatch(MousePressed(column=self.index, button=event.button, at=time.monotonic()))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.app.dispatch(MouseScrolled(column=self.index, direction=1))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.app.dispatch(MouseScrolled(column=self.index, direction=-1))
