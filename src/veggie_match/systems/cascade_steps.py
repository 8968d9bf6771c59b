"""Cascade resolution as a pull-based sequence of steps.

``iter_cascade`` yields one :class:`CascadeStep` per cascade level so the
caller can interleave its own pacing (animation, sound, scoring) between
steps. Each step is: find matches, process them, fire stripes consumed by the
match, drop cells, refill. The sequence ends once the board is full and
match-free.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from veggie_match.board.board import Board
from veggie_match.components.cell import CellRecord, Position
from veggie_match.components.match import ActivationResult, GravityMove, Match, NewCell, ProcessResult


@dataclass(slots=True)
class SpecialActivation:
    source: CellRecord
    result: ActivationResult


@dataclass(slots=True)
class CascadeStep:
    level: int
    matches: List[Match] = field(default_factory=list)
    result: ProcessResult = field(default_factory=ProcessResult)
    activations: List[SpecialActivation] = field(default_factory=list)
    gravity_moves: List[GravityMove] = field(default_factory=list)
    new_cells: List[NewCell] = field(default_factory=list)

    @property
    def is_settle(self) -> bool:
        """True for a gravity/refill-only step that cleared no match."""
        return not self.matches

    def all_removed(self) -> List[CellRecord]:
        removed = list(self.result.removed)
        for activation in self.activations:
            removed.extend(activation.result.removed)
        return removed


def iter_cascade(board: Board, swap_pos: Optional[Position] = None) -> Iterator[CascadeStep]:
    """Resolve the board one cascade level at a time.

    ``swap_pos`` only steers special placement for the first level. Holes left
    by an earlier direct activation are settled first with a match-free step
    that does not advance the cascade level.
    """
    level = 0
    while True:
        matches = board.find_matches()
        if not matches:
            if not board.has_empty():
                return
            yield CascadeStep(level=level, gravity_moves=board.apply_gravity(), new_cells=board.fill_empty())
            continue
        result = board.process_matches(matches, swap_pos if level == 0 else None)
        activations = [
            SpecialActivation(source=record, result=board.activate_consumed(record))
            for record in result.removed
            if record.special.is_stripe
        ]
        yield CascadeStep(
            level=level,
            matches=matches,
            result=result,
            activations=activations,
            gravity_moves=board.apply_gravity(),
            new_cells=board.fill_empty(),
        )
        level += 1


def resolve_cascade(board: Board, swap_pos: Optional[Position] = None) -> List[CascadeStep]:
    """Drain ``iter_cascade`` in one go."""
    return list(iter_cascade(board, swap_pos))
