from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from veggie_match.constants import MAX_STARS


@dataclass(slots=True)
class LevelProgress:
    """Best star rating reached per level number."""

    stars: Dict[int, int] = field(default_factory=dict)

    def record(self, level_number: int, stars: int) -> bool:
        """Keep the better rating. Returns True when the stored value improved."""
        stars = max(0, min(MAX_STARS, int(stars)))
        if stars <= self.stars.get(level_number, 0):
            return False
        self.stars[level_number] = stars
        return True

    def best(self, level_number: int) -> int:
        return self.stars.get(level_number, 0)

    def is_unlocked(self, level_number: int) -> bool:
        if level_number <= 1:
            return True
        return self.best(level_number - 1) >= 1

    def to_dict(self) -> Dict[str, int]:
        return {str(level): stars for level, stars in sorted(self.stars.items())}

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "LevelProgress":
        progress = cls()
        for key, value in (data or {}).items():
            try:
                progress.record(int(key), int(value))
            except (TypeError, ValueError):
                continue
        return progress
