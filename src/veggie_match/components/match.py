from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from veggie_match.components.cell import CellRecord, Position, VeggieKind


class MatchDirection(str, Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"
    L_SHAPE = "L"
    T_SHAPE = "T"

    @property
    def is_shape(self) -> bool:
        return self in (MatchDirection.L_SHAPE, MatchDirection.T_SHAPE)


@dataclass(slots=True)
class Match:
    """Three or more unique same-type cells.

    Straight matches list their cells in scan order; merged shapes list the
    horizontal run first followed by the vertical cells not already present.
    """

    cells: List[Position]
    type: VeggieKind
    direction: MatchDirection

    @property
    def length(self) -> int:
        return len(self.cells)

    def contains(self, pos: Position) -> bool:
        return pos in self.cells


@dataclass(frozen=True, slots=True)
class Move:
    r1: int
    c1: int
    r2: int
    c2: int

    @property
    def src(self) -> Position:
        return (self.r1, self.c1)

    @property
    def dst(self) -> Position:
        return (self.r2, self.c2)


@dataclass(frozen=True, slots=True)
class GravityMove:
    source: Position
    target: Position
    type: VeggieKind


@dataclass(frozen=True, slots=True)
class NewCell:
    """A refilled cell. ``entry_row`` is negative: where it falls in from above the board."""

    row: int
    col: int
    type: VeggieKind
    entry_row: int


@dataclass(slots=True)
class SpecialSwap:
    is_special_swap: bool = False
    rainbow_pos: Position | None = None
    target_type: VeggieKind | None = None


@dataclass(slots=True)
class ProcessResult:
    removed: List[CellRecord] = field(default_factory=list)
    specials: List[CellRecord] = field(default_factory=list)
    score_events: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ActivationResult:
    removed: List[CellRecord] = field(default_factory=list)
    score_event: str | None = None
