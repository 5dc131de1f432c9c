"""Textual themes for kanterm and terminal color detection."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from textual.theme import Theme

if TYPE_CHECKING:
    from collections.abc import Mapping

# Terminals whose TERM_PROGRAM settles truecolor support either way. Checked before
# COLORTERM, which some shell configs export regardless of the terminal.
_TERM_PROGRAM_TRUECOLOR = {
    "apple_terminal": False,
    "iterm.app": True,
    "vscode": True,
    "alacritty": True,
    "kitty": True,
    "wezterm": True,
    "ghostty": True,
}

KANTERM_THEME = Theme(
    name="kanterm",
    primary="#7aa2f7",
    secondary="#e0af68",
    accent="#73daca",
    foreground="#c0caf5",
    background="#16161e",
    surface="#1a1b26",
    panel="#24283b",
    warning="#e0af68",
    error="#f7768e",
    success="#9ece6a",
    dark=True,
    variables={
        "border": "#3b4261",
        "border-blurred": "#3b426180",
        "text-muted": "#565f89",
        "input-cursor-background": "#e0af68",
        "input-selection-background": "#7aa2f733",
        "scrollbar": "#3b4261",
        "scrollbar-hover": "#7aa2f7",
    },
)

# Same palette snapped to the xterm-256 colors
KANTERM_THEME_256 = Theme(
    name="kanterm-256",
    primary="#87afff",  # color(111)
    secondary="#d7af5f",  # color(179)
    accent="#87d7d7",  # color(116)
    foreground="#d0d0ff",  # color(189)
    background="#121212",  # color(233)
    surface="#1c1c1c",  # color(234)
    panel="#303030",  # color(236)
    warning="#d7af5f",  # color(179)
    error="#ff87af",  # color(211)
    success="#afd75f",  # color(149)
    dark=True,
    variables={
        "border": "#444444",  # color(238)
        "border-blurred": "#44444480",
        "text-muted": "#5f5f87",  # color(60)
        "input-cursor-background": "#d7af5f",
        "input-selection-background": "#87afff33",
        "scrollbar": "#444444",
        "scrollbar-hover": "#87afff",
    },
)

THEMES = (KANTERM_THEME, KANTERM_THEME_256)


def supports_truecolor(environ: Mapping[str, str] | None = None) -> bool:
    """Guess whether the terminal renders 24-bit color.

    ``TEXTUAL_COLOR_SYSTEM=truecolor`` wins, then a known ``TERM_PROGRAM``,
    then ``COLORTERM``, then Windows Terminal's ``WT_SESSION``.
    """
    env = os.environ if environ is None else environ
    if env.get("TEXTUAL_COLOR_SYSTEM", "").lower() == "truecolor":
        return True
    known = _TERM_PROGRAM_TRUECOLOR.get(env.get("TERM_PROGRAM", "").lower())
    if known is not None:
        return known
    if env.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return True
    return bool(env.get("WT_SESSION"))


def resolve_theme_name(configured: str, environ: Mapping[str, str] | None = None) -> str:
    """Map the configured theme (``auto`` included) to a registered theme name."""
    if configured != "auto":
        return configured
    return KANTERM_THEME.name if supports_truecolor(environ) else KANTERM_THEME_256.name
