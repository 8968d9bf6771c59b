"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level screens the flow system moves between."""
    MENU = auto()
    LEVEL_SELECT = auto()
    LEVEL_INTRO = auto()
    PLAYING = auto()
    PAUSED = auto()
    LEVEL_COMPLETE = auto()
    LEVEL_FAILED = auto()


@dataclass
class GameState:
    """Singleton component storing the active mode and the level it refers to."""
    mode: GameMode = GameMode.MENU
    level_number: int = 1
