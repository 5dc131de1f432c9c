"""TicketCard widget for one ticket in a column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive, var
from textual.widget import Widget
from textual.widgets import Label

if TYPE_CHECKING:
    from textual import events
    from textual.app import ComposeResult

    from kanterm.core.models import Ticket, TicketId

CARD_DESCRIPTION_MAX_LENGTH = 60


def truncate_text(text: str, limit: int) -> str:
    first_line = text.strip().splitlines()[0] if text.strip() else ""
    if len(first_line) <= limit:
        return first_line
    return first_line[: max(0, limit - 1)] + "…"


class TicketCard(Widget):
    """A card showing title, id and the first line of the description."""

    ALLOW_SELECT = False
    can_focus = False

    ticket: reactive[Ticket | None] = reactive(None)
    selected: var[bool] = var(False, toggle_class="selected")

    @dataclass
    class Pressed(Message):
        """Mouse button pressed on the card."""

        ticket_id: TicketId
        button: int

    def __init__(self, ticket: Ticket, **kwargs) -> None:
        super().__init__(id=f"card-{ticket.id.number}", **kwargs)
        self._title_label: Label | None = None
        self._id_label: Label | None = None
        self._description_label: Label | None = None
        self.ticket = ticket

    def compose(self) -> ComposeResult:
        with Vertical():
            with Horizontal(classes="card-row"):
                self._title_label = Label("", classes="card-title", markup=False)
                self._id_label = Label("", classes="card-id")
                yield self._title_label
                yield self._id_label
            self._description_label = Label("", classes="card-desc", markup=False)
            yield self._description_label

    def on_mount(self) -> None:
        self._render_ticket()

    def watch_ticket(self, ticket: Ticket | None) -> None:
        self._render_ticket()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.ticket is None:
            return
        event.stop()
        self.post_message(self.Pressed(self.ticket.id, event.button))

    def _render_ticket(self) -> None:
        ticket = self.ticket
        if ticket is None or self._title_label is None:
            return
        assert self._id_label is not None
        assert self._description_label is not None

        self._title_label.update(ticket.title or "(untitled)")
        self._id_label.update(str(ticket.id))
        if ticket.description:
            self._description_label.update(
                truncate_text(ticket.description, CARD_DESCRIPTION_MAX_LENGTH)
            )
            self._description_label.remove_class("card-desc-empty")
        else:
            self._description_label.update("No description")
            self._description_label.add_class("card-desc-empty")
