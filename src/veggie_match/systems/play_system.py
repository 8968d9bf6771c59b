"""Turn controller for a level attempt.

Consumes tile clicks and ticks from the event bus, drives a swap through the
cascade iterator, keeps score, move and target bookkeeping on the
:class:`PlaySession`, and decides win, loss and dead-board shuffles at the
end of each turn.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from esper import World

from veggie_match.components.cell import CellRecord, Position
from veggie_match.components.game_state import GameMode
from veggie_match.components.play_session import PlaySession
from veggie_match.constants import HINT_DELAY, LOW_MOVES_WARNING
from veggie_match.events.bus import (
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_HINT_AVAILABLE,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_FAILED,
    EVENT_LOW_MOVES_WARNING,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_SPECIAL_ACTIVATED,
    EVENT_SPECIAL_CREATED,
    EVENT_STAR_EARNED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_VALID,
    EventBus,
)
from veggie_match.systems.cascade_steps import CascadeStep, iter_cascade
from veggie_match.systems.scoring import combo_multiplier, flat_points, points_for_events, stars_for
from veggie_match.utils.game_state import get_game_state, get_level_progress, get_session, set_game_mode

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SwapOutcome:
    accepted: bool
    reason: str = ""
    special: bool = False
    points: int = 0
    steps: List[CascadeStep] = field(default_factory=list)


class PlaySystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _playing_session(self) -> Optional[PlaySession]:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return None
        return get_session(self.world)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        session = self._playing_session()
        if session is None or session.turn_in_progress:
            return
        board = session.board
        if not board.in_bounds(row, col):
            return
        session.reset_hint()
        selected = session.selected
        if selected is None:
            if board.get_cell(row, col) is None:
                return
            session.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif selected == (row, col):
            session.selected = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='same_tile')
        elif board.is_adjacent(selected[0], selected[1], row, col):
            session.selected = None
            self.attempt_swap(selected[0], selected[1], row, col)
        else:
            session.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0) or 0.0
        session = self._playing_session()
        if session is None or session.turn_in_progress:
            return
        session.hint_timer += dt
        if session.hint_move is not None or session.hint_timer < HINT_DELAY:
            return
        move = session.board.find_valid_move()
        if move is None:
            return
        session.hint_move = move
        self.event_bus.emit(EVENT_HINT_AVAILABLE, move=move)

    # ------------------------------------------------------------------
    # Swapping
    # ------------------------------------------------------------------

    def attempt_swap(self, r1: int, c1: int, r2: int, c2: int) -> SwapOutcome:
        src, dst = (r1, c1), (r2, c2)
        session = self._playing_session()
        if session is None:
            return SwapOutcome(False, reason='not_playing')
        if session.turn_in_progress:
            return SwapOutcome(False, reason='busy')
        board = session.board
        if not (board.in_bounds(r1, c1) and board.in_bounds(r2, c2)) or not board.is_adjacent(r1, c1, r2, c2):
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='not_adjacent')
            return SwapOutcome(False, reason='not_adjacent')
        if board.get_cell(r1, c1) is None or board.get_cell(r2, c2) is None:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='empty')
            return SwapOutcome(False, reason='empty')
        session.selected = None
        session.reset_hint()

        special_swap = board.check_special_swap(r1, c1, r2, c2)
        if not special_swap.is_special_swap:
            board.swap(r1, c1, r2, c2)
            if not board.find_matches():
                board.swap(r1, c1, r2, c2)
                self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='no_match')
                return SwapOutcome(False, reason='no_match')

        outcome = SwapOutcome(True, special=special_swap.is_special_swap)
        session.turn_in_progress = True
        try:
            self._consume_move(session)
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, special=outcome.special)
            swap_pos: Position | None = dst
            if outcome.special:
                board.swap(r1, c1, r2, c2)
                # The rainbow has moved onto the other cell's square.
                rainbow_pos = dst if special_swap.rainbow_pos == src else src
                result = board.activate_special(rainbow_pos[0], rainbow_pos[1], special_swap.target_type)
                outcome.points += self._add_score(session, flat_points(result.score_event), 1.0)
                self._track_eliminations(session, result.removed)
                self.event_bus.emit(
                    EVENT_SPECIAL_ACTIVATED, position=rainbow_pos, special='rainbow', removed=result.removed,
                )
                swap_pos = None
            for step in iter_cascade(board, swap_pos):
                outcome.points += self._apply_step(session, step)
                outcome.steps.append(step)
            depth = max((step.level + 1 for step in outcome.steps if not step.is_settle), default=0)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
        finally:
            session.turn_in_progress = False
        self._finish_turn(session)
        return outcome

    def _consume_move(self, session: PlaySession) -> None:
        session.moves_left -= 1
        if session.moves_left <= LOW_MOVES_WARNING and not session.low_moves_warned:
            session.low_moves_warned = True
            self.event_bus.emit(EVENT_LOW_MOVES_WARNING, moves_left=session.moves_left)

    def _apply_step(self, session: PlaySession, step: CascadeStep) -> int:
        session.cascade_level = step.level
        gained = 0
        if not step.is_settle:
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.level + 1, step=step)
            self.event_bus.emit(EVENT_MATCH_FOUND, matches=step.matches, depth=step.level + 1)
            multiplier = combo_multiplier(step.level)
            gained += self._add_score(
                session, points_for_events(step.result.score_events, step.level), multiplier,
            )
            self._track_eliminations(session, step.result.removed)
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                removed=step.result.removed,
                score_events=step.result.score_events,
                depth=step.level + 1,
            )
            if step.result.specials:
                self.event_bus.emit(EVENT_SPECIAL_CREATED, specials=step.result.specials)
            for activation in step.activations:
                gained += self._add_score(session, flat_points(activation.result.score_event), 1.0)
                self._track_eliminations(session, activation.result.removed)
                self.event_bus.emit(
                    EVENT_SPECIAL_ACTIVATED,
                    position=activation.source.position,
                    special=activation.source.special.value,
                    removed=activation.result.removed,
                )
        if step.gravity_moves:
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=step.gravity_moves)
        if step.new_cells:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_cells=step.new_cells)
        return gained

    def _add_score(self, session: PlaySession, delta: int, multiplier: float) -> int:
        if delta <= 0:
            return 0
        session.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta, multiplier=multiplier)
        return delta

    @staticmethod
    def _track_eliminations(session: PlaySession, removed: Iterable[CellRecord]) -> None:
        for record in removed:
            if record.type in session.eliminated:
                session.eliminated[record.type] += 1

    # ------------------------------------------------------------------
    # Turn end
    # ------------------------------------------------------------------

    def _finish_turn(self, session: PlaySession) -> None:
        session.cascade_level = 0
        level = session.level
        if session.targets_met() and session.score >= level.target_score:
            stars = stars_for(session.score, level.star_thresholds)
            get_level_progress(self.world).record(level.level_number, stars)
            set_game_mode(self.world, self.event_bus, GameMode.LEVEL_COMPLETE)
            self.event_bus.emit(
                EVENT_LEVEL_COMPLETE, level_number=level.level_number, score=session.score, stars=stars,
            )
            return
        if session.moves_left <= 0:
            set_game_mode(self.world, self.event_bus, GameMode.LEVEL_FAILED)
            self.event_bus.emit(EVENT_LEVEL_FAILED, level_number=level.level_number, score=session.score)
            return
        if session.board.find_valid_move() is None:
            logger.info("No valid moves left on level %d; shuffling", level.level_number)
            session.board.shuffle()
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason='dead_board')
        session.reset_hint()
        stars = stars_for(session.score, level.star_thresholds)
        if stars > session.last_star_level:
            session.last_star_level = stars
            self.event_bus.emit(EVENT_STAR_EARNED, stars=stars)
