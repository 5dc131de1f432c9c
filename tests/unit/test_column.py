"""Unit tests for column controllers."""

from __future__ import annotations

from dataclasses import replace

import pytest

from kanterm.board.column import ColumnState
from kanterm.board.effects import (
    DeleteTicket,
    MoveToNextStatus,
    MoveToPreviousStatus,
    RankAfter,
    RankBefore,
)
from kanterm.board.inputs import KeyPressed, MousePressed
from kanterm.board.overlay import ConfirmFrame, EditorFrame
from kanterm.core.models import Ticket, TicketId, TicketStatus

pytestmark = pytest.mark.unit


def _ticket(number: int, status: TicketStatus = TicketStatus.TODO, title: str = "") -> Ticket:
    return Ticket(id=TicketId(number), status=status, title=title or f"Ticket {number}")


ALL = (
    _ticket(1),
    _ticket(2, TicketStatus.DONE),
    _ticket(3),
    _ticket(4, TicketStatus.IN_PROGRESS),
    _ticket(5),
    _ticket(6, title="Fix bug"),
)


@pytest.fixture
def todo() -> ColumnState:
    return ColumnState(status=TicketStatus.TODO, focused=True).set_tickets(ALL)


def _select(column: ColumnState, index: int) -> ColumnState:
    return replace(column, listing=column.listing.select_index(index))


class TestSetTickets:
    def test_keeps_only_own_status_in_global_order(self, todo: ColumnState):
        assert [t.id.number for t in todo.listing.items] == [1, 3, 5, 6]

    def test_empty_column(self):
        column = ColumnState(status=TicketStatus.DONE).set_tickets(())
        assert column.selected is None


class TestTicketShortcuts:
    def test_c_opens_empty_editor(self, todo: ColumnState):
        outcome = todo.handle_key(KeyPressed("c", "c"))
        assert outcome.push == EditorFrame()
        assert outcome.effects == ()

    @pytest.mark.parametrize("key", ["e", "space"])
    def test_edit_opens_editor_for_selection(self, todo: ColumnState, key: str):
        outcome = _select(todo, 1).handle_key(KeyPressed(key))
        assert isinstance(outcome.push, EditorFrame)
        assert outcome.push.ticket == ALL[2]
        assert outcome.push.title == "Ticket 3"

    def test_edit_without_selection_does_nothing(self):
        column = ColumnState(status=TicketStatus.DONE)
        outcome = column.handle_key(KeyPressed("e", "e"))
        assert outcome.push is None

    def test_delete_asks_first(self, todo: ColumnState):
        outcome = todo.handle_key(KeyPressed("d", "d"))
        assert isinstance(outcome.push, ConfirmFrame)
        assert outcome.push.question == "Are you sure you want to delete TK-1?"
        assert outcome.push.effects == (DeleteTicket(ticket_id=TicketId(1)),)
        assert outcome.effects == ()

    def test_status_moves(self, todo: ColumnState):
        column = _select(todo, 2)
        assert column.handle_key(KeyPressed("n", "n")).effects == (
            MoveToNextStatus(ticket_id=TicketId(5)),
        )
        assert column.handle_key(KeyPressed("b", "b")).effects == (
            MoveToPreviousStatus(ticket_id=TicketId(5)),
        )


class TestRankShortcuts:
    def test_rank_up_targets_visible_neighbor(self, todo: ColumnState):
        outcome = _select(todo, 2).handle_key(KeyPressed("K", "K"))
        assert outcome.effects == (RankBefore(ticket_id=TicketId(5), before_id=TicketId(3)),)

    def test_shift_up_is_rank_up(self, todo: ColumnState):
        outcome = _select(todo, 2).handle_key(KeyPressed("shift+up"))
        assert outcome.effects == (RankBefore(ticket_id=TicketId(5), before_id=TicketId(3)),)

    def test_rank_down(self, todo: ColumnState):
        outcome = _select(todo, 1).handle_key(KeyPressed("J", "J"))
        assert outcome.effects == (RankAfter(ticket_id=TicketId(3), after_id=TicketId(5)),)

    def test_top_and_bottom(self, todo: ColumnState):
        column = _select(todo, 2)
        assert column.handle_key(KeyPressed("T", "T")).effects == (
            RankBefore(ticket_id=TicketId(5), before_id=TicketId(1)),
        )
        assert column.handle_key(KeyPressed("B", "B")).effects == (
            RankAfter(ticket_id=TicketId(5), after_id=TicketId(6)),
        )

    def test_rank_up_at_top_is_noop(self, todo: ColumnState):
        assert todo.handle_key(KeyPressed("K", "K")).effects == ()
        assert todo.handle_key(KeyPressed("T", "T")).effects == ()

    def test_rank_down_at_bottom_is_noop(self, todo: ColumnState):
        column = _select(todo, 3)
        assert column.handle_key(KeyPressed("J", "J")).effects == ()
        assert column.handle_key(KeyPressed("B", "B")).effects == ()

    def test_rank_in_empty_column_is_noop(self):
        column = ColumnState(status=TicketStatus.DONE)
        assert column.handle_key(KeyPressed("K", "K")).effects == ()

    def test_rank_uses_filtered_neighbors(self):
        tickets = (_ticket(1, title="fix a"), _ticket(2, title="other"), _ticket(3, title="fix b"))
        column = ColumnState(status=TicketStatus.TODO).set_tickets(tickets)
        column = column.handle_key(KeyPressed("slash")).column
        for char in "fix":
            column = column.handle_key(KeyPressed(char, char)).column
        column = column.handle_key(KeyPressed("enter")).column
        column = column.handle_key(KeyPressed("j", "j")).column

        outcome = column.handle_key(KeyPressed("K", "K"))

        assert outcome.effects == (RankBefore(ticket_id=TicketId(3), before_id=TicketId(1)),)


class TestFilterMode:
    def test_shortcut_letters_type_into_filter(self, todo: ColumnState):
        column = todo.handle_key(KeyPressed("slash")).column
        outcome = column.handle_key(KeyPressed("d", "d"))
        assert outcome.push is None
        assert outcome.column.listing.filter_text == "d"

    def test_escape_clears_applied_filter(self, todo: ColumnState):
        column = todo.handle_key(KeyPressed("slash")).column
        column = column.handle_key(KeyPressed("x", "x")).column
        column = column.handle_key(KeyPressed("enter")).column
        assert column.listing.is_filtered

        column = column.handle_key(KeyPressed("escape")).column

        assert not column.listing.is_filtered


class TestMouse:
    def test_click_selects_ticket(self, todo: ColumnState):
        outcome = todo.handle_click(MousePressed(column=0, ticket_id=TicketId(5), at=1.0))
        assert outcome.column.selected == ALL[4]
        assert outcome.push is None

    def test_double_click_opens_editor(self, todo: ColumnState):
        first = todo.handle_click(MousePressed(column=0, ticket_id=TicketId(5), at=1.0))
        second = first.column.handle_click(
            MousePressed(column=0, ticket_id=TicketId(5), at=1.3), double_click_interval=0.5
        )
        assert isinstance(second.push, EditorFrame)
        assert second.push.ticket == ALL[4]
        assert second.column.last_click is None

    def test_slow_second_click_only_selects(self, todo: ColumnState):
        first = todo.handle_click(MousePressed(column=0, ticket_id=TicketId(5), at=1.0))
        second = first.column.handle_click(
            MousePressed(column=0, ticket_id=TicketId(5), at=1.5), double_click_interval=0.5
        )
        assert second.push is None

    def test_clicks_on_different_tickets_do_not_combine(self, todo: ColumnState):
        first = todo.handle_click(MousePressed(column=0, ticket_id=TicketId(5), at=1.0))
        second = first.column.handle_click(MousePressed(column=0, ticket_id=TicketId(3), at=1.1))
        assert second.push is None
        assert second.column.selected == ALL[2]

    def test_right_click_ignored(self, todo: ColumnState):
        outcome = todo.handle_click(MousePressed(column=0, button=3, ticket_id=TicketId(5)))
        assert outcome.column is todo

    def test_scroll_moves_selection(self, todo: ColumnState):
        assert todo.handle_scroll(1).selected == ALL[2]
        assert todo.handle_scroll(-1).selected == ALL[0]
