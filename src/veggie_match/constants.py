# Match-avoiding fill: random draws per cell before falling back to the first allowed type.
MAX_FILL_ATTEMPTS = 100
# Shuffle permutations tried before the grid is rebuilt from scratch.
MAX_SHUFFLE_ATTEMPTS = 50
# Full rebuilds a single shuffle may trigger before giving up on solvability.
MAX_REINIT_DEPTH = 10

MIN_MATCH_LENGTH = 3

# Points per score event tag (see components.scoring.ScoreEvent).
SCORE_EVENTS = {
    "match_3": 50,
    "match_4": 120,
    "match_5": 300,
    "match_L_T": 200,
    "special_stripe_activate": 150,
    "special_rainbow_activate": 500,
}

# Cascade multiplier: base + increment * cascade_level, capped at max.
COMBO_BASE_MULTIPLIER = 1.0
COMBO_INCREMENT = 0.5
COMBO_MAX_MULTIPLIER = 5.0

# Seconds of idle play before a hint is offered.
HINT_DELAY = 5.0

# Remaining moves at which the one-off low moves warning fires.
LOW_MOVES_WARNING = 3

MAX_STARS = 3
