"""Coordinate-seeded coin generation from a design profile.

Every draw uses ``seeded_random(base_seed + offset)`` with a fixed offset per
attribute. The offsets are part of the save format: shared "coin at this
location" reports only stay valid while they never move.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from .models import (
    CoinBorder,
    CoinCondition,
    CoinData,
    CoinSize,
    CoinVisualOverrides,
    DesignProfile,
    Range,
)
from .prng import coordinate_seed, js_round, seeded_random
from .profiles import FALLBACK_METAL, FALLBACK_PATTERN

T = TypeVar("T")

REFERENCE_YEAR = 2025
MIN_YEAR = -500

OFFSET_METAL = 1
OFFSET_YEAR = 2
OFFSET_PATTERN = 3
OFFSET_CONDITION = 4
OFFSET_SIZE = 5
OFFSET_BORDER = 6
OFFSET_SHAPE_JITTER = 10
OFFSET_PETAL_COUNT = 11
OFFSET_PETAL_LENGTH = 12
OFFSET_PETAL_WIDTH = 13
OFFSET_PETAL_SHARPNESS = 14
OFFSET_CENTER_RADIUS = 15

RATIO_STEP = 0.01
COUNT_STEP = 1
JITTER_STEP = 0.1

_SIZES = tuple(CoinSize)
_BORDERS = tuple(CoinBorder)


class _Draw:
    """Offset-addressed random draws for one base seed."""

    __slots__ = ("seed",)

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def rand(self, offset: int) -> float:
        return seeded_random(self.seed + offset)

    def pick(self, values: Sequence[T], offset: int, fallback: T) -> T:
        if not values:
            return fallback
        return values[math.floor(self.rand(offset) * len(values))]

    def sample(self, bounds: Range, offset: int, step: float = RATIO_STEP) -> float:
        raw = bounds.min + self.rand(offset) * (bounds.max - bounds.min)
        snapped = js_round(raw / step) * step
        low, high = sorted((bounds.min, bounds.max))
        return min(max(snapped, low), high)


def condition_for_age(age: int, roll: float) -> CoinCondition:
    """Older coins skew heavily toward worn grades."""
    if age > 1000:
        return CoinCondition.FINE if roll > 0.8 else CoinCondition.POOR
    if age > 200:
        return CoinCondition.VERY_FINE if roll > 0.7 else CoinCondition.GOOD
    return CoinCondition.MINT if roll > 0.9 else CoinCondition.NEAR_MINT


def generate_coin_from_profile(cell_x: int, cell_y: int, profile: DesignProfile) -> CoinData:
    draw = _Draw(coordinate_seed(cell_x, cell_y))

    metal = draw.pick(profile.allowed_metals, OFFSET_METAL, FALLBACK_METAL)
    year = math.floor(draw.sample(profile.year_range, OFFSET_YEAR, COUNT_STEP))
    pattern = draw.pick(profile.allowed_patterns, OFFSET_PATTERN, FALLBACK_PATTERN)
    condition = condition_for_age(REFERENCE_YEAR - year, draw.rand(OFFSET_CONDITION))

    # Size and border are not profile constrained.
    size = draw.pick(_SIZES, OFFSET_SIZE, CoinSize.MEDIUM)
    border = draw.pick(_BORDERS, OFFSET_BORDER, CoinBorder.STANDARD)

    overrides = CoinVisualOverrides(
        shape_jitter=draw.sample(profile.shape_jitter, OFFSET_SHAPE_JITTER, JITTER_STEP),
        petal_count=js_round(draw.sample(profile.petal_count, OFFSET_PETAL_COUNT, COUNT_STEP)),
        petal_length=draw.sample(profile.petal_length, OFFSET_PETAL_LENGTH),
        petal_width=draw.sample(profile.petal_width, OFFSET_PETAL_WIDTH),
        petal_sharpness=draw.sample(profile.petal_sharpness, OFFSET_PETAL_SHARPNESS),
        center_radius=draw.sample(profile.center_radius, OFFSET_CENTER_RADIUS),
        custom_base_color=profile.custom_base_color,
        custom_shine_color=profile.custom_shine_color,
        custom_dark_color=profile.custom_dark_color,
    )

    return CoinData(
        metal=metal,
        year=year,
        condition=condition,
        border=border,
        size=size,
        pattern=pattern,
        visual_overrides=overrides,
    )
