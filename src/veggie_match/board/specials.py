"""Special gem creation policy and activation effects."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from veggie_match.board.grid import Grid
from veggie_match.components.cell import CellRecord, Position, SpecialKind, VeggieKind
from veggie_match.components.match import ActivationResult, Match, MatchDirection
from veggie_match.components.scoring import ScoreEvent

_STRIPE_FOR_DIRECTION = {
    MatchDirection.HORIZONTAL: SpecialKind.STRIPE_H,
    MatchDirection.VERTICAL: SpecialKind.STRIPE_V,
}


@dataclass(frozen=True, slots=True)
class SpecialPlan:
    """Outcome of the creation policy: which special to place, where, and with what type."""

    special: SpecialKind
    position: Position
    type: VeggieKind


def special_position(match: Match, swap_pos: Optional[Position]) -> Position:
    """The moved cell when it belongs to the match, otherwise the middle of the cell list."""
    if swap_pos is not None and match.contains(swap_pos):
        return swap_pos
    return match.cells[len(match.cells) // 2]


def determine_special(match: Match, swap_pos: Optional[Position] = None) -> Optional[SpecialPlan]:
    length = match.length
    if length >= 5:
        return SpecialPlan(SpecialKind.RAINBOW, special_position(match, swap_pos), VeggieKind.RAINBOW)
    if match.direction.is_shape:
        # Small shapes only earn the shape bonus.
        return None
    if length == 4:
        stripe = _STRIPE_FOR_DIRECTION[match.direction]
        return SpecialPlan(stripe, special_position(match, swap_pos), match.type)
    return None


def score_event_for(match: Match) -> ScoreEvent:
    if match.direction.is_shape:
        return ScoreEvent.MATCH_L_T
    if match.length >= 5:
        return ScoreEvent.MATCH_5
    if match.length == 4:
        return ScoreEvent.MATCH_4
    return ScoreEvent.MATCH_3


def _clear_positions(grid: Grid, positions: List[Position]) -> List[CellRecord]:
    removed: List[CellRecord] = []
    for row, col in positions:
        cell = grid.clear(row, col)
        if cell is None:
            continue
        removed.append(CellRecord(row, col, cell.type, cell.special))
    return removed


def clear_row(grid: Grid, row: int) -> List[CellRecord]:
    return _clear_positions(grid, [(row, col) for col in range(grid.cols)])


def clear_column(grid: Grid, col: int) -> List[CellRecord]:
    return _clear_positions(grid, [(row, col) for row in range(grid.rows)])


def clear_type(grid: Grid, target_type: VeggieKind) -> List[CellRecord]:
    positions: List[Position] = []
    for pos in grid.positions():
        cell = grid.get(*pos)
        if cell is not None and cell.type == target_type:
            positions.append(pos)
    return _clear_positions(grid, positions)


def activate_stripe(grid: Grid, special: SpecialKind, row: int, col: int) -> ActivationResult:
    """Clear the line a stripe covers. Works whether or not the stripe cell is still on the grid."""
    if special is SpecialKind.STRIPE_H:
        return ActivationResult(removed=clear_row(grid, row), score_event=ScoreEvent.STRIPE_ACTIVATE.value)
    if special is SpecialKind.STRIPE_V:
        return ActivationResult(removed=clear_column(grid, col), score_event=ScoreEvent.STRIPE_ACTIVATE.value)
    return ActivationResult()


def activate_special(grid: Grid, row: int, col: int, target_type: Optional[VeggieKind] = None) -> ActivationResult:
    """Run the clearing effect of the special gem at (row, col).

    Empty cells and plain cells are a no-op. A rainbow clears itself and then
    every cell of ``target_type``; without a concrete veggie target only the
    rainbow goes.
    """
    cell = grid.get(row, col)
    if cell is None:
        return ActivationResult()
    special = cell.special
    if special is SpecialKind.NONE:
        return ActivationResult()
    if special.is_stripe:
        return activate_stripe(grid, special, row, col)
    if special is SpecialKind.RAINBOW:
        removed = _clear_positions(grid, [(row, col)])
        if target_type is not None and target_type.is_veggie:
            removed.extend(clear_type(grid, target_type))
        return ActivationResult(removed=removed, score_event=ScoreEvent.RAINBOW_ACTIVATE.value)
    raise ValueError(f"Unhandled special kind: {special!r}")
