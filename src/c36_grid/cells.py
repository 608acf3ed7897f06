"""Cell content classification for the exploration grid.

Classification is a pure function of the coordinate and cheap enough to call
for every visible cell on every frame, so nothing here caches.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .models import CellType, ShopVariant
from .prng import coordinate_seed, seeded_random

_HASH_X = 12.9898
_HASH_Y = 78.233
_HASH_SCALE = 43758.5453

SHOP_VARIANT_OFFSET = 59


@dataclass(frozen=True, slots=True)
class CellBand:
    """Inclusive roll interval mapped to one category."""

    low: int
    high: int
    category: CellType

    def contains(self, roll: int) -> bool:
        return self.low <= roll <= self.high

    @property
    def width(self) -> int:
        return self.high - self.low + 1


# Checked in order; rarest categories first. Together they cover 0..99 exactly once.
CELL_BANDS: tuple[CellBand, ...] = (
    CellBand(90, 99, CellType.HOSTILE),
    CellBand(80, 89, CellType.COIN),
    CellBand(70, 79, CellType.FOOD),
    CellBand(59, 59, CellType.SHOP),
    CellBand(60, 69, CellType.EMPTY),
    CellBand(0, 58, CellType.EMPTY),
)

XP_VALUES = {
    "scan_empty": 1,
    "scan_item": 10,
    "scan_food": 10,
    "buy_detector": 100,
    "buy_sonar": 100,
    "death_penalty": 500,
    "level_threshold": 1000,
}


def cell_roll(cell_x: int, cell_y: int) -> int:
    """Return the integer roll in ``[0, 99]`` for a cell."""
    scrambled = math.sin(cell_x * _HASH_X + cell_y * _HASH_Y) * _HASH_SCALE
    return math.floor((scrambled - math.floor(scrambled)) * 100)


def category_for_roll(roll: int) -> CellType:
    for band in CELL_BANDS:
        if band.contains(roll):
            return band.category
    raise ValueError(f"Roll out of range: {roll}")


def get_cell_type(cell_x: int, cell_y: int) -> CellType:
    return category_for_roll(cell_roll(cell_x, cell_y))


def band_share(category: CellType) -> float:
    """Fraction of the roll space assigned to ``category``."""
    return sum(band.width for band in CELL_BANDS if band.category == category) / 100


def get_shop_variant(cell_x: int, cell_y: int) -> ShopVariant:
    roll = seeded_random(coordinate_seed(cell_x, cell_y) + SHOP_VARIANT_OFFSET)
    return ShopVariant.TOOL_SHOP if roll < 0.5 else ShopVariant.SUPERMARKET


def food_heal_amount(cell_x: int, cell_y: int) -> float:
    return (abs(cell_x) % 10) * 2.5 + 10


def hostile_damage(cell_x: int, cell_y: int) -> int:
    """HP lost per damage tick while standing in a hostile cell."""
    return (abs(cell_y) % 10) + 1


def xp_for_cell(cell_type: CellType) -> int:
    if cell_type == CellType.EMPTY:
        return XP_VALUES["scan_empty"]
    if cell_type == CellType.FOOD:
        return XP_VALUES["scan_food"]
    if cell_type == CellType.COIN:
        return XP_VALUES["scan_item"]
    return 0
