from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode, new_mode
EVENT_LEVEL_STARTED = "level_started"              # payload: level_number=int, rows=int, cols=int
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: level_number=int, score=int, stars=int
EVENT_LEVEL_FAILED = "level_failed"                # payload: level_number=int, score=int


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c), special=bool
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=list[Match], depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: removed=list[CellRecord], score_events=list[str], depth=int
EVENT_SPECIAL_CREATED = "special_created"          # payload: specials=list[CellRecord]
EVENT_SPECIAL_ACTIVATED = "special_activated"      # payload: position=(r,c), special=str, removed=list[CellRecord]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_cells=list[NewCell]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, step=CascadeStep
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str


# ============================================================================
# SCORING & PROGRESS
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, multiplier=float
EVENT_STAR_EARNED = "star_earned"                  # payload: stars=int
EVENT_LOW_MOVES_WARNING = "low_moves_warning"      # payload: moves_left=int
EVENT_HINT_AVAILABLE = "hint_available"            # payload: move=Move
