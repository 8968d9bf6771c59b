from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from veggie_match.components.cell import VeggieKind


@dataclass(frozen=True, slots=True)
class LevelTarget:
    veggie: VeggieKind
    count: int


@dataclass(frozen=True, slots=True)
class StarThresholds:
    star_1: int
    star_2: int
    star_3: int


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Static description of one level: board shape, spawnable types and goals."""

    level_number: int
    grid_rows: int
    grid_cols: int
    veggie_types: Tuple[VeggieKind, ...]
    max_moves: int
    target_score: int
    targets: Tuple[LevelTarget, ...] = field(default_factory=tuple)
    star_thresholds: StarThresholds | None = None
    description: str = ""
