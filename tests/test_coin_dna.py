from __future__ import annotations

from collections import Counter
from dataclasses import replace

import pytest

from c36_grid.coin_dna import REFERENCE_YEAR, condition_for_age, generate_coin_from_profile
from c36_grid.models import (
    CoinBorder,
    CoinCondition,
    CoinData,
    CoinMetal,
    CoinPattern,
    CoinSize,
    CoinVisualOverrides,
    Range,
)
from c36_grid.profiles import GENERATOR_ANCIENT, GENERATOR_CIRCULATION, expand_weights

SAMPLE_CELLS = [(x, y) for x in range(-20, 21, 4) for y in range(-30, 31, 6)]

_EPS = 1e-9


def test_generation_is_deterministic() -> None:
    for x, y in SAMPLE_CELLS:
        assert generate_coin_from_profile(x, y, GENERATOR_ANCIENT) == generate_coin_from_profile(
            x, y, GENERATOR_ANCIENT
        )


def test_ancient_coins_match_browser_client() -> None:
    assert generate_coin_from_profile(5, 5, GENERATOR_ANCIENT) == CoinData(
        metal=CoinMetal.ZINC,
        year=1347,
        condition=CoinCondition.GOOD,
        border=CoinBorder.WIDE,
        size=CoinSize.LARGE,
        pattern=CoinPattern.OCEAN,
        visual_overrides=CoinVisualOverrides(
            shape_jitter=2.7,
            petal_count=20,
            petal_length=0.58,
            petal_width=0.5700000000000001,
            petal_sharpness=2,
            center_radius=0.51,
        ),
    )

    coin = generate_coin_from_profile(-12, 7, GENERATOR_ANCIENT)
    assert (coin.metal, coin.year, coin.condition) == (CoinMetal.PLATINUM, 901, CoinCondition.POOR)
    assert (coin.border, coin.size, coin.pattern) == (CoinBorder.STANDARD, CoinSize.SMALL, CoinPattern.MOON)
    assert coin.visual_overrides == CoinVisualOverrides(
        shape_jitter=1.8,
        petal_count=23,
        petal_length=0.45,
        petal_width=0.58,
        petal_sharpness=1.57,
        center_radius=0.29,
    )


def test_single_metal_profile_at_fixed_cell() -> None:
    profile = replace(GENERATOR_ANCIENT, allowed_metals=(CoinMetal.COPPER,), year_range=Range(-500, 1800))

    coin = generate_coin_from_profile(5, 5, profile)

    assert coin.metal == CoinMetal.COPPER
    assert -500 <= coin.year <= 1800
    assert isinstance(coin.year, int)


@pytest.mark.parametrize("profile", [GENERATOR_ANCIENT, GENERATOR_CIRCULATION])
def test_generated_values_respect_profile_ranges(profile) -> None:
    for x, y in SAMPLE_CELLS:
        coin = generate_coin_from_profile(x, y, profile)
        overrides = coin.visual_overrides
        assert overrides is not None

        assert coin.metal in profile.allowed_metals
        assert coin.pattern in profile.allowed_patterns
        assert profile.year_range.min <= coin.year <= profile.year_range.max
        assert isinstance(overrides.petal_count, int)
        for attr in ("shape_jitter", "petal_count", "petal_length", "petal_width", "petal_sharpness", "center_radius"):
            bounds = getattr(profile, attr)
            value = getattr(overrides, attr)
            assert bounds.min - _EPS <= value <= bounds.max + _EPS, attr


def test_values_are_snapped_to_declared_steps() -> None:
    for x, y in SAMPLE_CELLS:
        overrides = generate_coin_from_profile(x, y, GENERATOR_ANCIENT).visual_overrides
        assert overrides is not None
        assert overrides.shape_jitter * 10 == pytest.approx(round(overrides.shape_jitter * 10), abs=1e-6)
        for value in (overrides.petal_length, overrides.petal_width, overrides.petal_sharpness, overrides.center_radius):
            assert value * 100 == pytest.approx(round(value * 100), abs=1e-6)


def test_condition_tracks_age() -> None:
    for x, y in SAMPLE_CELLS:
        coin = generate_coin_from_profile(x, y, GENERATOR_ANCIENT)
        age = REFERENCE_YEAR - coin.year
        if age > 1000:
            assert coin.condition in (CoinCondition.FINE, CoinCondition.POOR)
        elif age > 200:
            assert coin.condition in (CoinCondition.VERY_FINE, CoinCondition.GOOD)
        else:
            assert coin.condition in (CoinCondition.MINT, CoinCondition.NEAR_MINT)


@pytest.mark.parametrize(
    ("age", "roll", "expected"),
    [
        (1500, 0.81, CoinCondition.FINE),
        (1500, 0.8, CoinCondition.POOR),
        (1001, 0.1, CoinCondition.POOR),
        (1000, 0.71, CoinCondition.VERY_FINE),
        (201, 0.7, CoinCondition.GOOD),
        (200, 0.91, CoinCondition.MINT),
        (0, 0.9, CoinCondition.NEAR_MINT),
    ],
)
def test_condition_for_age(age: int, roll: float, expected: CoinCondition) -> None:
    assert condition_for_age(age, roll) == expected


def test_empty_selection_sets_fall_back_without_shifting_other_draws() -> None:
    x, y = 12, -7
    reference = generate_coin_from_profile(x, y, GENERATOR_ANCIENT)
    degraded = generate_coin_from_profile(x, y, replace(GENERATOR_ANCIENT, allowed_metals=(), allowed_patterns=()))

    assert degraded.metal == CoinMetal.COPPER
    assert degraded.pattern == CoinPattern.GEOMETRIC
    assert degraded.year == reference.year
    assert degraded.condition == reference.condition
    assert degraded.size == reference.size
    assert degraded.border == reference.border
    assert degraded.visual_overrides == reference.visual_overrides


def test_fixed_colours_are_copied_verbatim() -> None:
    profile = replace(GENERATOR_ANCIENT, custom_base_color="#ff0000", custom_dark_color="#330000")

    overrides = generate_coin_from_profile(1, 2, profile).visual_overrides

    assert overrides is not None
    assert overrides.custom_base_color == "#ff0000"
    assert overrides.custom_dark_color == "#330000"
    assert overrides.custom_shine_color is None


def test_repeated_entries_weight_selection() -> None:
    profile = replace(GENERATOR_ANCIENT, allowed_metals=expand_weights({CoinMetal.GOLD: 1, CoinMetal.COPPER: 3}))

    counts = Counter(generate_coin_from_profile(x, y, profile).metal for x in range(60) for y in range(50))

    assert set(counts) == {CoinMetal.GOLD, CoinMetal.COPPER}
    assert counts[CoinMetal.COPPER] / sum(counts.values()) == pytest.approx(0.75, abs=0.05)


def test_inverted_range_stays_between_its_bounds() -> None:
    profile = replace(GENERATOR_ANCIENT, shape_jitter=Range(5, 1))

    for x, y in SAMPLE_CELLS:
        overrides = generate_coin_from_profile(x, y, profile).visual_overrides
        assert overrides is not None
        assert 1 <= overrides.shape_jitter <= 5
