"""Board-wide constants and limits."""

from __future__ import annotations

from kanterm.core.models import TicketStatus

RANK_GAP = 1_000_000
"""Distance between a new end-of-list rank and its neighbor."""

DEFAULT_DOUBLE_CLICK_MS = 500

MAX_LOG_MESSAGE_LENGTH = 4000

COLUMN_ORDER = (
    TicketStatus.TODO,
    TicketStatus.IN_PROGRESS,
    TicketStatus.DONE,
)

STATUS_LABELS = {
    TicketStatus.TODO: "TODO",
    TicketStatus.IN_PROGRESS: "IN PROGRESS",
    TicketStatus.DONE: "DONE",
}

OVERLAY_HORIZONTAL_MARGIN = 2
OVERLAY_VERTICAL_MARGIN = 1

# Border (1 each side) plus padding of the confirm dialog box.
CONFIRM_FRAME_WIDTH = 2 + 4
CONFIRM_FRAME_HEIGHT = 2 + 2

LIST_PAGE_SIZE = 5

EDITOR_CONFIRM_DISCARD = "Are you sure you want to exit editing?"
