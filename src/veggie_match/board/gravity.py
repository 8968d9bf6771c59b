from __future__ import annotations

import random
from typing import List, Sequence

from veggie_match.board.grid import Grid
from veggie_match.components.cell import Cell, VeggieKind
from veggie_match.components.match import GravityMove, NewCell


def apply_gravity(grid: Grid) -> List[GravityMove]:
    """Compact every column downward, keeping the relative order of its cells."""
    moves: List[GravityMove] = []
    for col in range(grid.cols):
        write_row = grid.rows - 1
        for row in range(grid.rows - 1, -1, -1):
            cell = grid.get(row, col)
            if cell is None:
                continue
            if row != write_row:
                grid.set(write_row, col, cell)
                grid.set(row, col, None)
                moves.append(GravityMove(source=(row, col), target=(write_row, col), type=cell.type))
            write_row -= 1
    return moves


def fill_empty(grid: Grid, veggie_types: Sequence[VeggieKind], rng: random.Random) -> List[NewCell]:
    """Fill every empty slot with a plain random veggie, top-down per column."""
    spawned: List[NewCell] = []
    for col in range(grid.cols):
        column = grid.column_cells(col)
        empty_count = sum(1 for cell in column if cell is None)
        fill_idx = 0
        for row, cell in enumerate(column):
            if cell is not None:
                continue
            type_ = rng.choice(veggie_types)
            grid.set(row, col, Cell(type=type_))
            spawned.append(NewCell(row=row, col=col, type=type_, entry_row=-(empty_count - fill_idx)))
            fill_idx += 1
    return spawned
