"""Main kanterm TUI application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from textual.app import App
from textual.message import Message

from kanterm.board.board import BoardState, Phase, update
from kanterm.board.effects import Exit
from kanterm.board.inputs import KeyPressed
from kanterm.board.overlay import ConfirmFrame, EditorFrame
from kanterm.config import KantermConfig
from kanterm.debug_log import log
from kanterm.keybindings import APP_BINDINGS
from kanterm.runner import EffectRunner
from kanterm.theme import THEMES, resolve_theme_name
from kanterm.ui.modals.confirm import ConfirmModal
from kanterm.ui.modals.editor import EditorModal
from kanterm.ui.screens.board import BoardScreen

if TYPE_CHECKING:
    from pathlib import Path

    from kanterm.board.effects import Effect, StoreEffect
    from kanterm.board.inputs import BoardEvent
    from kanterm.board.overlay import OverlayFrame
    from kanterm.core.events import ResultEvent

type FrameModal = EditorModal | ConfirmModal


class KantermApp(App):
    """kanterm TUI application: a three-column Kanban board."""

    TITLE = "kanterm"
    CSS_PATH = "styles/kanterm.tcss"

    BINDINGS = APP_BINDINGS

    @dataclass
    class StoreResult(Message):
        """A store effect finished."""

        event: ResultEvent

    def __init__(
        self,
        config: KantermConfig | None = None,
        *,
        db_path: Path | None = None,
        remigrate_count: int = 0,
        runner: EffectRunner | None = None,
    ) -> None:
        super().__init__()
        self.config = config or KantermConfig()

        for theme in THEMES:
            self.register_theme(theme)
        self.theme = resolve_theme_name(self.config.ui.theme)

        self.db_path = db_path or self.config.database_path
        self.runner = runner or EffectRunner(self.db_path, remigrate_count=remigrate_count)
        self.state, self._startup_effects = BoardState.initial(
            double_click_interval=self.config.ui.double_click_interval
        )

    async def on_mount(self) -> None:
        log.info("Starting kanterm", db_path=str(self.db_path))
        await self.push_screen(BoardScreen())
        self._run_effects(self._startup_effects)

    async def on_unmount(self) -> None:
        await self.runner.close()

    def dispatch(self, event: BoardEvent) -> None:
        """Feed one event through the board and apply the resulting state and effects."""
        previous = self.state
        self.state, effects = update(self.state, event)
        if self.state is not previous:
            if self.state.phase is not previous.phase:
                log.debug("Board phase", phase=self.state.phase.value)
            self._render_state()
        self._run_effects(effects)

    def action_forward_key(self, key: str) -> None:
        self.dispatch(KeyPressed(key))

    def on_kanterm_app_store_result(self, message: StoreResult) -> None:
        self.dispatch(message.event)

    def _run_effects(self, effects: tuple[Effect, ...]) -> None:
        for effect in effects:
            if isinstance(effect, Exit):
                log.info("Quitting")
                self.exit(message="Goodbye!")
                return
            self.run_worker(self._execute(effect), group="store")

    async def _execute(self, effect: StoreEffect) -> None:
        event = await self.runner.run(effect)
        if event is not None:
            self.post_message(self.StoreResult(event))

    def _render_state(self) -> None:
        if self.state.phase is Phase.QUITTING:
            return
        board = self._board_screen()
        if board is not None:
            board.render_state(self.state)
        self._sync_overlay()

    def _board_screen(self) -> BoardScreen | None:
        for screen in self.screen_stack:
            if isinstance(screen, BoardScreen):
                return screen
        return None

    def _sync_overlay(self) -> None:
        """Make the modal screens on top of the board mirror the overlay stack."""
        frames = self.state.overlay.frames
        modals: list[FrameModal] = [
            screen for screen in self.screen_stack if isinstance(screen, EditorModal | ConfirmModal)
        ]

        keep = 0
        while (
            keep < len(modals)
            and keep < len(frames)
            and modals[keep].frame_id == frames[keep].frame_id
        ):
            keep += 1

        for _ in modals[keep:]:
            self.pop_screen()
        for modal, frame in zip(modals[:keep], frames, strict=False):
            modal.sync(frame)  # type: ignore[arg-type]
        for frame in frames[keep:]:
            self.push_screen(_modal_for(frame))


def _modal_for(frame: OverlayFrame) -> FrameModal:
    match frame:
        case EditorFrame():
            return EditorModal(frame)
        case ConfirmFrame():
            return ConfirmModal(frame)
    raise TypeError(f"Unsupported overlay frame: {frame!r}")
