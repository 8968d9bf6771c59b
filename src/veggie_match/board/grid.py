from __future__ import annotations

from typing import Iterator, List, Optional

from veggie_match.components.cell import Cell, Position


class Grid:
    """Fixed-size cell storage backed by a flat row-major list.

    ``None`` marks an empty slot; it only appears while a cascade is being
    resolved. Out-of-bounds reads return ``None`` and out-of-bounds writes are
    ignored, so callers never need to guard coordinates themselves.
    """

    __slots__ = ("rows", "cols", "_cells")

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._cells: List[Optional[Cell]] = [None] * (rows * cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def get(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return self._cells[self._index(row, col)]

    def set(self, row: int, col: int, cell: Optional[Cell]) -> None:
        if not self.in_bounds(row, col):
            return
        self._cells[self._index(row, col)] = cell

    def clear(self, row: int, col: int) -> Optional[Cell]:
        """Empty a slot and return what it held."""
        cell = self.get(row, col)
        self.set(row, col, None)
        return cell

    def swap(self, a: Position, b: Position) -> None:
        if not (self.in_bounds(*a) and self.in_bounds(*b)):
            return
        ia = self._index(*a)
        ib = self._index(*b)
        self._cells[ia], self._cells[ib] = self._cells[ib], self._cells[ia]

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def row_cells(self, row: int) -> List[Optional[Cell]]:
        start = self._index(row, 0)
        return self._cells[start:start + self.cols]

    def column_cells(self, col: int) -> List[Optional[Cell]]:
        return [self._cells[self._index(row, col)] for row in range(self.rows)]

    def has_empty(self) -> bool:
        return any(cell is None for cell in self._cells)

    def reset(self) -> None:
        self._cells = [None] * (self.rows * self.cols)

    def snapshot(self) -> List[List[Optional[dict]]]:
        return [
            [cell.to_dict() if cell is not None else None for cell in self.row_cells(row)]
            for row in range(self.rows)
        ]
