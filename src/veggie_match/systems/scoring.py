from __future__ import annotations

import math
from typing import Iterable

from veggie_match.components.level import StarThresholds
from veggie_match.constants import (
    COMBO_BASE_MULTIPLIER,
    COMBO_INCREMENT,
    COMBO_MAX_MULTIPLIER,
    SCORE_EVENTS,
)


def combo_multiplier(cascade_level: int) -> float:
    return min(COMBO_BASE_MULTIPLIER + COMBO_INCREMENT * max(0, cascade_level), COMBO_MAX_MULTIPLIER)


def points_for(event: str, cascade_level: int = 0) -> int:
    """Points for one match score event at the given cascade depth (0 = the swap itself)."""
    return math.floor(SCORE_EVENTS.get(str(event), 0) * combo_multiplier(cascade_level))


def points_for_events(events: Iterable[str], cascade_level: int = 0) -> int:
    return sum(points_for(event, cascade_level) for event in events)


def flat_points(event: str | None) -> int:
    """Special activations score their base value with no combo multiplier."""
    if event is None:
        return 0
    return SCORE_EVENTS.get(str(event), 0)


def stars_for(score: int, thresholds: StarThresholds | None) -> int:
    if thresholds is None:
        return 0
    if score >= thresholds.star_3:
        return 3
    if score >= thresholds.star_2:
        return 2
    if score >= thresholds.star_1:
        return 1
    return 0
