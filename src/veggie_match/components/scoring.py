from enum import Enum


class ScoreEvent(str, Enum):
    """Score tags reported by the board; point values live in constants.SCORE_EVENTS."""

    MATCH_3 = "match_3"
    MATCH_4 = "match_4"
    MATCH_5 = "match_5"
    MATCH_L_T = "match_L_T"
    STRIPE_ACTIVATE = "special_stripe_activate"
    RAINBOW_ACTIVATE = "special_rainbow_activate"
