"""Deterministic hashing primitives shared by every generator.

Outputs must match the browser client bit for bit, so all integer mixing is
done with explicit 32-bit wraparound rather than Python's unbounded ints.
"""

from __future__ import annotations

import math

_MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5
_UNIT = 4294967296

SEED_X_FACTOR = 49157
SEED_Y_FACTOR = 98953


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def seeded_random(seed: int) -> float:
    """Hash ``seed`` into a float in ``[0, 1)``.

    Stateless: callers derive one seed per draw by offsetting a base seed.
    """
    t = (seed + _GOLDEN_GAMMA) & _MASK32
    t = _imul(t ^ (t >> 15), t | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
    return ((t ^ (t >> 14)) & _MASK32) / _UNIT


def coordinate_seed(cell_x: int, cell_y: int) -> int:
    return abs(cell_x * SEED_X_FACTOR + cell_y * SEED_Y_FACTOR)


def js_round(value: float) -> int:
    """Round half toward positive infinity."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor
