"""Match-three board engine.

``Board`` owns a :class:`Grid` and exposes every operation the play layer
needs: swapping, match detection, match processing, special activation,
gravity, refill, valid move search and shuffling. Nothing here waits or
schedules; each call runs to completion, so cascades can be stepped through
synchronously (see ``veggie_match.systems.cascade_steps``).
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from veggie_match.board import gravity, match_finder, solver, specials
from veggie_match.board.cascade import process_matches
from veggie_match.board.grid import Grid
from veggie_match.components.cell import Cell, CellRecord, Position, SpecialKind, VeggieKind, to_veggie_kind
from veggie_match.components.match import (
    ActivationResult,
    GravityMove,
    Match,
    Move,
    NewCell,
    ProcessResult,
    SpecialSwap,
)
from veggie_match.constants import MAX_FILL_ATTEMPTS, MAX_REINIT_DEPTH, MAX_SHUFFLE_ATTEMPTS

logger = logging.getLogger(__name__)


class Board:
    def __init__(
        self,
        rows: int,
        cols: int,
        veggie_types: Iterable,
        *,
        rng: random.Random | None = None,
        populate: bool = True,
    ):
        self.rows = rows
        self.cols = cols
        self.veggie_types: List[VeggieKind] = [to_veggie_kind(t) for t in veggie_types]
        if not self.veggie_types or any(not t.is_veggie for t in self.veggie_types):
            raise ValueError("Board needs at least one concrete veggie type")
        self.rng = rng if rng is not None else random.Random()
        self.grid = Grid(rows, cols)
        self._reinit_depth = 0
        if populate:
            self.init_grid()

    @classmethod
    def from_layout(
        cls,
        layout: Sequence[Sequence],
        veggie_types: Iterable | None = None,
        *,
        rng: random.Random | None = None,
    ) -> "Board":
        """Build a board from literal rows of cells, type names, or None.

        The layout is taken as-is: no match avoidance and no shuffling.
        """
        rows = len(layout)
        cols = len(layout[0]) if rows else 0
        cells = [[_coerce_cell(value) for value in row] for row in layout]
        if veggie_types is None:
            seen: List[VeggieKind] = []
            for row in cells:
                for cell in row:
                    if cell is not None and cell.type.is_veggie and cell.type not in seen:
                        seen.append(cell.type)
            veggie_types = seen or [VeggieKind.TOMATO]
        board = cls(rows, cols, veggie_types, rng=rng, populate=False)
        for r, row in enumerate(cells):
            for c, cell in enumerate(row):
                board.grid.set(r, c, cell)
        return board

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def init_grid(self) -> None:
        """Fill the grid without placing any cell that completes a run, then ensure a move exists."""
        self.grid.reset()
        for row in range(self.rows):
            for col in range(self.cols):
                self.grid.set(row, col, Cell(type=self._random_type_no_match(row, col)))
        if self.find_valid_move() is None:
            self.shuffle()

    def _random_type_no_match(self, row: int, col: int) -> VeggieKind:
        for _ in range(MAX_FILL_ATTEMPTS):
            candidate = self.rng.choice(self.veggie_types)
            if self._completes_run(row, col, candidate):
                continue
            return candidate
        # Accept a possible latent match rather than looping forever.
        logger.debug("Fill fallback at (%d, %d) after %d draws", row, col, MAX_FILL_ATTEMPTS)
        return self.veggie_types[0]

    def _completes_run(self, row: int, col: int, candidate: VeggieKind) -> bool:
        left1, left2 = self.grid.get(row, col - 1), self.grid.get(row, col - 2)
        if left1 is not None and left2 is not None and left1.type == candidate and left2.type == candidate:
            return True
        up1, up2 = self.grid.get(row - 1, col), self.grid.get(row - 2, col)
        return up1 is not None and up2 is not None and up1.type == candidate and up2.type == candidate

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        return self.grid.get(row, col)

    def set_cell(self, row: int, col: int, cell) -> None:
        """Overwrite a single cell. Intended for tools and tests."""
        self.grid.set(row, col, _coerce_cell(cell))

    @staticmethod
    def is_adjacent(r1: int, c1: int, r2: int, c2: int) -> bool:
        return abs(r1 - r2) + abs(c1 - c2) == 1

    def in_bounds(self, row: int, col: int) -> bool:
        return self.grid.in_bounds(row, col)

    def has_empty(self) -> bool:
        return self.grid.has_empty()

    def swap(self, r1: int, c1: int, r2: int, c2: int) -> None:
        self.grid.swap((r1, c1), (r2, c2))

    # ------------------------------------------------------------------
    # Matching and clearing
    # ------------------------------------------------------------------

    def find_matches(self) -> List[Match]:
        return match_finder.find_matches(self.grid)

    def process_matches(self, matches: List[Match], swap_pos: Optional[Position] = None) -> ProcessResult:
        return process_matches(self.grid, matches, swap_pos)

    def activate_special(self, row: int, col: int, target_type=None) -> ActivationResult:
        target = to_veggie_kind(target_type) if target_type is not None else None
        return specials.activate_special(self.grid, row, col, target)

    def activate_consumed(self, record: CellRecord) -> ActivationResult:
        """Fire a stripe that was removed as part of a match.

        The stripe cell is already gone, so this clears the line through the
        position it occupied. Consumed rainbows have no target and do nothing.
        """
        return specials.activate_stripe(self.grid, record.special, record.row, record.col)

    def check_special_swap(self, r1: int, c1: int, r2: int, c2: int) -> SpecialSwap:
        cell1 = self.grid.get(r1, c1)
        cell2 = self.grid.get(r2, c2)
        if cell1 is None or cell2 is None:
            return SpecialSwap()
        if cell1.special is SpecialKind.RAINBOW:
            return SpecialSwap(True, (r1, c1), cell2.type)
        if cell2.special is SpecialKind.RAINBOW:
            return SpecialSwap(True, (r2, c2), cell1.type)
        return SpecialSwap()

    # ------------------------------------------------------------------
    # Gravity and refill
    # ------------------------------------------------------------------

    def apply_gravity(self) -> List[GravityMove]:
        return gravity.apply_gravity(self.grid)

    def fill_empty(self) -> List[NewCell]:
        return gravity.fill_empty(self.grid, self.veggie_types, self.rng)

    # ------------------------------------------------------------------
    # Solvability
    # ------------------------------------------------------------------

    def find_valid_move(self) -> Optional[Move]:
        return solver.find_valid_move(self.grid)

    def shuffle(self) -> None:
        """Shuffle plain cells until the board is match-free and playable, else rebuild it."""
        if solver.shuffle_until_playable(self.grid, self.rng, MAX_SHUFFLE_ATTEMPTS):
            return
        if self._reinit_depth >= MAX_REINIT_DEPTH:
            logger.warning(
                "Board %dx%d with %d types still unplayable after %d rebuilds",
                self.rows, self.cols, len(self.veggie_types), MAX_REINIT_DEPTH,
            )
            return
        logger.info("Shuffle failed after %d attempts; rebuilding board", MAX_SHUFFLE_ATTEMPTS)
        self._reinit_depth += 1
        try:
            self.init_grid()
        finally:
            self._reinit_depth -= 1

    def get_snapshot(self) -> List[List[Optional[dict]]]:
        return self.grid.snapshot()


def _coerce_cell(value) -> Optional[Cell]:
    if value is None or isinstance(value, Cell):
        return value
    if isinstance(value, dict):
        special = SpecialKind(value.get("special", SpecialKind.NONE))
        if special is SpecialKind.RAINBOW:
            return Cell.rainbow()
        return Cell(type=to_veggie_kind(value["type"]), special=special)
    kind = to_veggie_kind(value)
    if kind is VeggieKind.RAINBOW:
        return Cell.rainbow()
    return Cell(type=kind)
