"""Key hint bar."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.reactive import reactive
from textual.widgets import Static

if TYPE_CHECKING:
    from collections.abc import Iterable

type Hint = tuple[str, str]


def render_hints(hints: Iterable[Hint], separator: str = "  ") -> str:
    """Join ``(key, action)`` pairs into one markup line, keys in bold."""
    return separator.join(
        f"[b]{key}[/b] {action}".rstrip() for key, action in hints if key
    )


class KeybindingHint(Static):
    """Single line listing the keys available in the current mode."""

    hints: reactive[tuple[Hint, ...]] = reactive(())

    def watch_hints(self, hints: tuple[Hint, ...]) -> None:
        self.update(render_hints(hints))

    def show_hints(self, hints: Iterable[Hint]) -> None:
        self.hints = tuple(hints)
