"""Collector score and market value for coins."""

from __future__ import annotations

import math

from .coin_dna import MIN_YEAR, REFERENCE_YEAR
from .models import CoinCondition, CoinData, CoinMetal

METAL_WEIGHTS: dict[CoinMetal, float] = {
    CoinMetal.COPPER: 1.0,
    CoinMetal.NICKEL: 2.0,
    CoinMetal.ZINC: 3.0,
    CoinMetal.BRASS: 4.0,
    CoinMetal.ALUMINIUM: 5.0,
    CoinMetal.BRONZE: 6.5,
    CoinMetal.SILVER: 8.0,
    CoinMetal.GOLD: 9.5,
    CoinMetal.PLATINUM: 10.0,
}

CONDITION_SCORES: dict[CoinCondition, int] = {
    CoinCondition.POOR: 1,
    CoinCondition.GOOD: 2,
    CoinCondition.FINE: 3,
    CoinCondition.VERY_FINE: 4,
    CoinCondition.NEAR_MINT: 5,
    CoinCondition.MINT: 6,
}

MAX_RAW_SCORE = 30.0
VALUE_BASE = 10
VALUE_EXPONENT = 0.6


def calculate_coin_score(coin: CoinData) -> float:
    """Return the 0-10 collector score.

    Three sub-scores on a 0-10 scale are summed: metal weight, age relative
    to the oldest supported year, and condition grade.
    """
    metal_score = METAL_WEIGHTS[coin.metal]
    age_score = (REFERENCE_YEAR - coin.year) / (REFERENCE_YEAR - MIN_YEAR) * 10
    condition_score = CONDITION_SCORES[coin.condition] / 6 * 10
    return (metal_score + age_score + condition_score) / MAX_RAW_SCORE * 10


def value_for_score(score: float) -> int:
    # score 0 -> $1, score 5 -> $1,000, score 10 -> $1,000,000
    return math.floor(VALUE_BASE ** (score * VALUE_EXPONENT))


def calculate_coin_value(coin: CoinData) -> int:
    return value_for_score(calculate_coin_score(coin))


def format_year(year: int) -> str:
    return f"{year} AD" if year > 0 else f"{abs(year)} BC"
