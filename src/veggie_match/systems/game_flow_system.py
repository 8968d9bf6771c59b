"""High-level coordinator for screen transitions and level attempts."""
from __future__ import annotations

import random

from esper import World

from veggie_match.board.board import Board
from veggie_match.components.game_state import GameMode
from veggie_match.components.play_session import PlaySession
from veggie_match.events.bus import EVENT_LEVEL_STARTED, EventBus
from veggie_match.factories.levels import find_level, get_level
from veggie_match.utils.game_state import (
    get_game_state,
    get_level_progress,
    get_session,
    replace_session,
    set_game_mode,
)


class GameFlowSystem:
    """Moves the game between menu, level select, intro, play and result screens.

    Every level start builds a fresh :class:`PlaySession` and board; nothing
    from a previous attempt carries over except the star progress.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    def back_to_menu(self) -> None:
        replace_session(self.world, None)
        set_game_mode(self.world, self.event_bus, GameMode.MENU)

    def open_level_select(self) -> None:
        set_game_mode(self.world, self.event_bus, GameMode.LEVEL_SELECT)

    def open_level_intro(self, level_number: int) -> bool:
        """Show the intro for an unlocked level. Returns False for locked or unknown levels."""
        if find_level(level_number) is None:
            return False
        if not get_level_progress(self.world).is_unlocked(level_number):
            return False
        get_game_state(self.world).level_number = level_number
        set_game_mode(self.world, self.event_bus, GameMode.LEVEL_INTRO)
        return True

    def start_level(self, level_number: int | None = None) -> PlaySession:
        state = get_game_state(self.world)
        if level_number is not None:
            state.level_number = level_number
        level = get_level(state.level_number)
        board = Board(level.grid_rows, level.grid_cols, level.veggie_types, rng=self._rng)
        session = PlaySession.start(level, board)
        replace_session(self.world, session)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(
            EVENT_LEVEL_STARTED, level_number=level.level_number, rows=board.rows, cols=board.cols,
        )
        return session

    def pause(self) -> bool:
        session = get_session(self.world)
        if self.mode != GameMode.PLAYING or session is None or session.turn_in_progress:
            return False
        set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        return True

    def resume(self) -> bool:
        if self.mode != GameMode.PAUSED:
            return False
        session = get_session(self.world)
        if session is not None:
            session.reset_hint()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        return True

    def retry(self) -> PlaySession:
        return self.start_level(get_game_state(self.world).level_number)

    def next_level(self) -> bool:
        """From a completed level, move to the next level's intro if there is one."""
        if self.mode != GameMode.LEVEL_COMPLETE:
            return False
        return self.open_level_intro(get_game_state(self.world).level_number + 1)
