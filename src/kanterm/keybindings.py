"""Keybindings and key hints for the kanterm TUI.

The board itself receives raw keys; these bindings exist where Textual widgets
would otherwise consume the key first (modal text fields, app-level ctrl+c).
"""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_BINDINGS: list[BindingType] = [
    Binding("ctrl+c", "forward_key('ctrl+c')", "Quit", show=False, priority=True),
]

EDITOR_BINDINGS: list[BindingType] = [
    Binding("escape", "forward_key('escape')", "Cancel", priority=True),
    Binding("ctrl+s", "forward_key('ctrl+s')", "Save", priority=True),
    Binding("tab", "forward_key('tab')", "Next field", show=False, priority=True),
    Binding("shift+tab", "forward_key('shift+tab')", "Previous field", show=False, priority=True),
]

CONFIRM_BINDINGS: list[BindingType] = [
    Binding("y", "forward_key('y')", "Yes"),
    Binding("n", "forward_key('n')", "No"),
    Binding("escape", "forward_key('escape')", "Cancel"),
]

BOARD_HINTS: list[tuple[str, str]] = [
    ("c", "new"),
    ("e", "edit"),
    ("d", "delete"),
    ("b/n", "move"),
    ("K/J", "rank"),
    ("T/B", "top/bottom"),
    ("/", "filter"),
    ("h/l", "column"),
    ("q", "quit"),
]

FILTER_HINTS: list[tuple[str, str]] = [
    ("enter", "apply"),
    ("esc", "cancel"),
]

FILTERED_HINTS: list[tuple[str, str]] = [
    ("esc", "clear filter"),
    *BOARD_HINTS,
]

EDITOR_HINTS: list[tuple[str, str]] = [
    ("ctrl+s", "save"),
    ("tab", "next field"),
    ("esc", "cancel"),
]
