from __future__ import annotations

import pytest

from c36_grid.models import CoinBorder, CoinCondition, CoinData, CoinMetal, CoinPattern, CoinSize
from c36_grid.scoring import (
    CONDITION_SCORES,
    METAL_WEIGHTS,
    calculate_coin_score,
    calculate_coin_value,
    format_year,
    value_for_score,
)


def _coin(metal: CoinMetal = CoinMetal.SILVER, year: int = 1200, condition: CoinCondition = CoinCondition.FINE) -> CoinData:
    return CoinData(
        metal=metal,
        year=year,
        condition=condition,
        border=CoinBorder.STANDARD,
        size=CoinSize.MEDIUM,
        pattern=CoinPattern.FLORAL,
    )


def test_best_possible_coin_scores_ten() -> None:
    coin = _coin(metal=CoinMetal.PLATINUM, year=-500, condition=CoinCondition.MINT)

    assert calculate_coin_score(coin) == pytest.approx(10.0)
    assert calculate_coin_value(coin) == 1_000_000


def test_value_curve_anchors() -> None:
    assert value_for_score(0) == 1
    assert value_for_score(5) == 1_000
    assert value_for_score(10) == 1_000_000


@pytest.mark.parametrize("metal", list(CoinMetal))
@pytest.mark.parametrize("condition", list(CoinCondition))
@pytest.mark.parametrize("year", [-500, -1, 0, 1000, 1800, 2025])
def test_score_stays_in_bounds(metal: CoinMetal, condition: CoinCondition, year: int) -> None:
    score = calculate_coin_score(_coin(metal=metal, year=year, condition=condition))
    assert 0.0 <= score <= 10.0


def test_value_is_monotonic_in_metal_weight() -> None:
    metals = sorted(CoinMetal, key=METAL_WEIGHTS.__getitem__)
    values = [calculate_coin_value(_coin(metal=metal)) for metal in metals]
    assert values == sorted(values)


def test_value_is_monotonic_in_age() -> None:
    years = [2025, 1800, 1000, 0, -250, -500]
    values = [calculate_coin_value(_coin(year=year)) for year in years]
    assert values == sorted(values)


def test_value_is_monotonic_in_condition() -> None:
    conditions = sorted(CoinCondition, key=CONDITION_SCORES.__getitem__)
    values = [calculate_coin_value(_coin(condition=condition)) for condition in conditions]
    assert values == sorted(values)


def test_format_year() -> None:
    assert format_year(1500) == "1500 AD"
    assert format_year(-300) == "300 BC"
