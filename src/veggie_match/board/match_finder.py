"""Run detection and L/T shape merging."""
from __future__ import annotations

from typing import List, Optional

from veggie_match.board.grid import Grid
from veggie_match.components.cell import Position, VeggieKind
from veggie_match.components.match import Match, MatchDirection
from veggie_match.constants import MIN_MATCH_LENGTH


def _matchable_type(grid: Grid, row: int, col: int) -> Optional[VeggieKind]:
    cell = grid.get(row, col)
    if cell is None or not cell.type.is_veggie:
        return None
    return cell.type


def _scan_line(grid: Grid, positions: List[Position], direction: MatchDirection) -> List[Match]:
    """Emit a match for every maximal run of length >= 3 along ``positions``."""
    runs: List[Match] = []
    idx = 0
    while idx < len(positions):
        tval = _matchable_type(grid, *positions[idx])
        if tval is None:
            idx += 1
            continue
        end = idx + 1
        while end < len(positions) and _matchable_type(grid, *positions[end]) == tval:
            end += 1
        if end - idx >= MIN_MATCH_LENGTH:
            runs.append(Match(cells=list(positions[idx:end]), type=tval, direction=direction))
        idx = end
    return runs


def find_horizontal_runs(grid: Grid) -> List[Match]:
    runs: List[Match] = []
    for row in range(grid.rows):
        line = [(row, col) for col in range(grid.cols)]
        runs.extend(_scan_line(grid, line, MatchDirection.HORIZONTAL))
    return runs


def find_vertical_runs(grid: Grid) -> List[Match]:
    runs: List[Match] = []
    for col in range(grid.cols):
        line = [(row, col) for row in range(grid.rows)]
        runs.extend(_scan_line(grid, line, MatchDirection.VERTICAL))
    return runs


def _shape_direction(h_run: Match, v_run: Match, shared: Position) -> MatchDirection:
    # A corner (shared cell at an end of both runs) is an L; anything crossing a run's interior is a T.
    # The label is informational: both shapes score match_L_T and earn a rainbow.
    h_end = shared in (h_run.cells[0], h_run.cells[-1])
    v_end = shared in (v_run.cells[0], v_run.cells[-1])
    if h_end and v_end:
        return MatchDirection.L_SHAPE
    return MatchDirection.T_SHAPE


def merge_runs(horizontal: List[Match], vertical: List[Match]) -> List[Match]:
    """Merge same-type horizontal/vertical pairs sharing a cell into shape matches.

    Each run takes part in at most one merge; pairs are considered in scan
    order. Merged shapes come first, then the unmerged horizontal runs, then
    the unmerged vertical runs.
    """
    merged: List[Match] = []
    used_h = [False] * len(horizontal)
    used_v = [False] * len(vertical)
    for hi, h_run in enumerate(horizontal):
        for vi, v_run in enumerate(vertical):
            if used_h[hi] or used_v[vi]:
                continue
            if h_run.type != v_run.type:
                continue
            shared = next((pos for pos in h_run.cells if pos in v_run.cells), None)
            if shared is None:
                continue
            cells = list(h_run.cells)
            cells.extend(pos for pos in v_run.cells if pos not in h_run.cells)
            merged.append(Match(cells=cells, type=h_run.type, direction=_shape_direction(h_run, v_run, shared)))
            used_h[hi] = True
            used_v[vi] = True
    merged.extend(run for hi, run in enumerate(horizontal) if not used_h[hi])
    merged.extend(run for vi, run in enumerate(vertical) if not used_v[vi])
    return merged


def find_matches(grid: Grid) -> List[Match]:
    """Detect every match on the grid. Pure read; rainbow and empty cells never match."""
    return merge_runs(find_horizontal_runs(grid), find_vertical_runs(grid))


def has_match(grid: Grid) -> bool:
    return bool(find_horizontal_runs(grid) or find_vertical_runs(grid))
