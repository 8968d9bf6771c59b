"""Valid move search and solvable shuffling."""
from __future__ import annotations

import random
from typing import List, Optional

from veggie_match.board.grid import Grid
from veggie_match.board.match_finder import has_match
from veggie_match.components.cell import Position, SpecialKind
from veggie_match.components.match import Move


def swap_creates_match(grid: Grid, src: Position, dst: Position) -> bool:
    """Trial-swap two cells, scan, and swap back. The grid is left unchanged."""
    grid.swap(src, dst)
    try:
        return has_match(grid)
    finally:
        grid.swap(src, dst)


def _rainbow_move(grid: Grid, row: int, col: int) -> Optional[Move]:
    for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
        if grid.get(row + dr, col + dc) is not None:
            return Move(row, col, row + dr, col + dc)
    return None


def find_valid_move(grid: Grid) -> Optional[Move]:
    """Return the first move in row-major order that produces a match, or None.

    Right neighbours are tried before down neighbours. A rainbow gem is a valid
    move with any occupied neighbour.
    """
    for row in range(grid.rows):
        for col in range(grid.cols):
            cell = grid.get(row, col)
            if cell is None:
                continue
            if grid.get(row, col + 1) is not None and swap_creates_match(grid, (row, col), (row, col + 1)):
                return Move(row, col, row, col + 1)
            if grid.get(row + 1, col) is not None and swap_creates_match(grid, (row, col), (row + 1, col)):
                return Move(row, col, row + 1, col)
            if cell.special is SpecialKind.RAINBOW:
                move = _rainbow_move(grid, row, col)
                if move is not None:
                    return move
    return None


def shuffle_plain_cells(grid: Grid, rng: random.Random) -> None:
    """Permute the types of all non-special cells in place; specials keep position and kind."""
    positions: List[Position] = []
    types = []
    for pos in grid.positions():
        cell = grid.get(*pos)
        if cell is None or cell.is_special:
            continue
        positions.append(pos)
        types.append(cell.type)
    rng.shuffle(types)
    for pos, type_ in zip(positions, types):
        grid.set(pos[0], pos[1], grid.get(*pos).with_type(type_))


def shuffle_until_playable(grid: Grid, rng: random.Random, max_attempts: int) -> bool:
    """Shuffle until the grid has no existing match and at least one valid move.

    Returns False when the attempt budget runs out; the grid is then left in
    its last shuffled state.
    """
    for _ in range(max_attempts):
        shuffle_plain_cells(grid, rng)
        if has_match(grid):
            continue
        if find_valid_move(grid) is None:
            continue
        return True
    return False
