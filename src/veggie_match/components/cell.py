from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]


class VeggieKind(str, Enum):
    """Cell types. ``RAINBOW`` is the only non-veggie member and never matches."""

    TOMATO = "tomato"
    CARROT = "carrot"
    EGGPLANT = "eggplant"
    BROCCOLI = "broccoli"
    CORN = "corn"
    CHILI = "chili"
    RAINBOW = "rainbow"

    @property
    def is_veggie(self) -> bool:
        return self is not VeggieKind.RAINBOW


class SpecialKind(str, Enum):
    NONE = "none"
    STRIPE_H = "stripe_h"
    STRIPE_V = "stripe_v"
    RAINBOW = "rainbow"

    @property
    def is_stripe(self) -> bool:
        return self in (SpecialKind.STRIPE_H, SpecialKind.STRIPE_V)


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable board cell.

    Cells are value objects, so handing one out never lets a caller mutate the
    grid behind the board's back. A rainbow gem always carries the rainbow type;
    stripe gems keep the veggie type of the match that created them.
    """

    type: VeggieKind
    special: SpecialKind = SpecialKind.NONE

    def __post_init__(self) -> None:
        if self.special is SpecialKind.RAINBOW and self.type is not VeggieKind.RAINBOW:
            object.__setattr__(self, "type", VeggieKind.RAINBOW)

    @classmethod
    def rainbow(cls) -> "Cell":
        return cls(type=VeggieKind.RAINBOW, special=SpecialKind.RAINBOW)

    @property
    def is_special(self) -> bool:
        return self.special is not SpecialKind.NONE

    def with_type(self, type_: VeggieKind) -> "Cell":
        return replace(self, type=type_)

    def to_dict(self) -> dict:
        return {"type": self.type.value, "special": self.special.value}


@dataclass(frozen=True, slots=True)
class CellRecord:
    """A cell together with the coordinate it occupied (removed or created)."""

    row: int
    col: int
    type: VeggieKind
    special: SpecialKind = SpecialKind.NONE

    @property
    def position(self) -> Position:
        return (self.row, self.col)


def to_veggie_kind(value) -> VeggieKind:
    if isinstance(value, VeggieKind):
        return value
    return VeggieKind(str(value))
