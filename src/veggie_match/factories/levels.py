from __future__ import annotations

from typing import Iterable, Mapping

from veggie_match.components.cell import VeggieKind as V
from veggie_match.components.level import LevelConfig, LevelTarget, StarThresholds


def _targets(*pairs) -> tuple:
    return tuple(LevelTarget(veggie=veggie, count=count) for veggie, count in pairs)


_BASIC = (V.TOMATO, V.CARROT, V.EGGPLANT, V.BROCCOLI)
_WITH_CORN = _BASIC + (V.CORN,)
_ALL = _WITH_CORN + (V.CHILI,)

_LEVELS: Mapping[int, LevelConfig] = {
    1: LevelConfig(
        level_number=1,
        description="Welcome to the garden",
        grid_rows=6,
        grid_cols=6,
        veggie_types=_BASIC,
        max_moves=25,
        target_score=1000,
        targets=_targets((V.TOMATO, 10), (V.CARROT, 10)),
        star_thresholds=StarThresholds(1000, 2000, 3000),
    ),
    2: LevelConfig(
        level_number=2,
        description="Harvest season",
        grid_rows=7,
        grid_cols=7,
        veggie_types=_WITH_CORN,
        max_moves=22,
        target_score=2000,
        targets=_targets((V.TOMATO, 15), (V.BROCCOLI, 15), (V.CORN, 10)),
        star_thresholds=StarThresholds(2000, 4000, 6000),
    ),
    3: LevelConfig(
        level_number=3,
        description="Vegetable convention",
        grid_rows=8,
        grid_cols=8,
        veggie_types=_WITH_CORN,
        max_moves=20,
        target_score=3500,
        targets=_targets((V.EGGPLANT, 20), (V.CORN, 20), (V.CARROT, 15)),
        star_thresholds=StarThresholds(3500, 6000, 9000),
    ),
    4: LevelConfig(
        level_number=4,
        description="Here come the chilis",
        grid_rows=8,
        grid_cols=8,
        veggie_types=_ALL,
        max_moves=18,
        target_score=5000,
        targets=_targets((V.CHILI, 15), (V.TOMATO, 20), (V.BROCCOLI, 20), (V.EGGPLANT, 15)),
        star_thresholds=StarThresholds(5000, 8000, 12000),
    ),
    5: LevelConfig(
        level_number=5,
        description="The great garden harvest",
        grid_rows=9,
        grid_cols=9,
        veggie_types=_ALL,
        max_moves=15,
        target_score=7000,
        targets=_targets(
            (V.TOMATO, 25), (V.CARROT, 25), (V.EGGPLANT, 20),
            (V.BROCCOLI, 20), (V.CORN, 15), (V.CHILI, 15),
        ),
        star_thresholds=StarThresholds(7000, 11000, 16000),
    ),
}


def all_levels() -> Iterable[LevelConfig]:
    return _LEVELS.values()


def level_count() -> int:
    return len(_LEVELS)


def find_level(level_number: int) -> LevelConfig | None:
    return _LEVELS.get(level_number)


def get_level(level_number: int) -> LevelConfig:
    level = _LEVELS.get(level_number)
    if level is None:
        raise ValueError(f"Unknown level number: {level_number}")
    return level
