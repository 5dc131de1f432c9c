"""Selectable, filterable ticket list used by each column."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from kanterm.constants import LIST_PAGE_SIZE

if TYPE_CHECKING:
    from kanterm.board.inputs import KeyPressed
    from kanterm.core.models import Ticket, TicketId


def _clamp(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


@dataclass(frozen=True, slots=True)
class ListState:
    """Items, selection, and an optional text filter.

    ``index`` points into ``visible``. While ``capturing`` is set the list is
    editing its filter and consumes every key.
    """

    items: tuple[Ticket, ...] = ()
    index: int = 0
    filter_text: str = ""
    capturing: bool = False
    page_size: int = LIST_PAGE_SIZE

    @property
    def visible(self) -> tuple[Ticket, ...]:
        if not self.filter_text:
            return self.items
        needle = self.filter_text.casefold()
        return tuple(item for item in self.items if needle in item.search_text.casefold())

    @property
    def selected(self) -> Ticket | None:
        visible = self.visible
        if not visible:
            return None
        return visible[_clamp(self.index, len(visible))]

    @property
    def is_filtered(self) -> bool:
        return bool(self.filter_text)

    def _reconcile(self, previous: Ticket | None) -> ListState:
        visible = self.visible
        if previous is not None:
            for index, item in enumerate(visible):
                if item.id == previous.id:
                    return replace(self, index=index)
        return replace(self, index=_clamp(self.index, len(visible)))

    def with_items(self, items: tuple[Ticket, ...]) -> ListState:
        """Replace the items, keeping the selected ticket selected when it survives."""
        return replace(self, items=items)._reconcile(self.selected)

    def with_filter(self, filter_text: str) -> ListState:
        return replace(self, filter_text=filter_text)._reconcile(self.selected)

    def clear_filter(self) -> ListState:
        return replace(self, capturing=False).with_filter("")

    def select_index(self, index: int) -> ListState:
        return replace(self, index=_clamp(index, len(self.visible)))

    def select_ticket(self, ticket_id: TicketId) -> ListState:
        for index, item in enumerate(self.visible):
            if item.id == ticket_id:
                return replace(self, index=index)
        return self

    def move(self, delta: int) -> ListState:
        return self.select_index(self.index + delta)

    def handle_key(self, event: KeyPressed) -> tuple[ListState, bool]:
        """Apply a navigation or filter key. Returns the new state and whether it was used."""
        if self.capturing:
            return self._handle_filter_key(event), True

        match event.key:
            case "up" | "k":
                return self.move(-1), True
            case "down" | "j":
                return self.move(1), True
            case "home" | "g":
                return self.select_index(0), True
            case "end" | "G":
                return self.select_index(len(self.visible) - 1), True
            case "pageup":
                return self.move(-self.page_size), True
            case "pagedown":
                return self.move(self.page_size), True
            case "slash":
                return replace(self, capturing=True).with_filter(""), True
        return self, False

    def _handle_filter_key(self, event: KeyPressed) -> ListState:
        match event.key:
            case "escape":
                return self.clear_filter()
            case "enter":
                return replace(self, capturing=False)
            case "backspace":
                return self.with_filter(self.filter_text[:-1])
        if event.printable:
            return self.with_filter(self.filter_text + event.printable)
        return self
