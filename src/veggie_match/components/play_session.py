from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from veggie_match.board.board import Board
from veggie_match.components.cell import Position, VeggieKind
from veggie_match.components.level import LevelConfig
from veggie_match.components.match import Move


@dataclass(slots=True)
class PlaySession:
    """All mutable state of one level attempt.

    Created fresh by the flow system on every start or retry; only the play
    system mutates it afterwards.
    """

    level: LevelConfig
    board: Board
    score: int = 0
    moves_left: int = 0
    eliminated: Dict[VeggieKind, int] = field(default_factory=dict)
    selected: Optional[Position] = None
    cascade_level: int = 0
    last_star_level: int = 0
    low_moves_warned: bool = False
    hint_timer: float = 0.0
    hint_move: Optional[Move] = None
    turn_in_progress: bool = False

    @classmethod
    def start(cls, level: LevelConfig, board: Board) -> "PlaySession":
        return cls(
            level=level,
            board=board,
            moves_left=level.max_moves,
            eliminated={target.veggie: 0 for target in level.targets},
        )

    def targets_met(self) -> bool:
        return all(self.eliminated.get(t.veggie, 0) >= t.count for t in self.level.targets)

    def reset_hint(self) -> None:
        self.hint_timer = 0.0
        self.hint_move = None
