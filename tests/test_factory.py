from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from c36_grid.coin_dna import generate_coin_from_profile
from c36_grid.factory import artifact_type_for_region, generate_artifact
from c36_grid.models import Artifact, ArtifactType, CoinData, GridCoordinate, ItemData, ItemEffect
from c36_grid.profiles import GENERATOR_ANCIENT
from c36_grid.scoring import calculate_coin_score, calculate_coin_value

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_artifact_envelope_is_self_describing() -> None:
    artifact = generate_artifact(3, -4, now=NOW)

    assert artifact.id == "art-3--4-1735689600000"
    assert artifact.type == ArtifactType.COIN
    assert artifact.found_at == GridCoordinate(3, -4)
    assert artifact.found_date == NOW
    assert isinstance(artifact.data, CoinData)
    assert artifact.data == generate_coin_from_profile(3, -4, GENERATOR_ANCIENT)
    assert artifact.rarity_score == calculate_coin_score(artifact.data)
    assert artifact.monetary_value == calculate_coin_value(artifact.data)
    assert 0.0 <= artifact.rarity_score <= 10.0
    assert artifact.monetary_value >= 1


def test_replayed_excavation_reproduces_payload() -> None:
    first = generate_artifact(77, 12, now=NOW)
    replay = generate_artifact(77, 12, now=NOW + timedelta(seconds=5))

    assert first.id != replay.id
    assert first.data == replay.data
    assert first.rarity_score == replay.rarity_score
    assert first.monetary_value == replay.monetary_value


def test_region_type_is_defined_for_negative_cells() -> None:
    for x, y in [(0, 0), (-1, -1), (-51, 49), (10_000, -10_000)]:
        assert artifact_type_for_region(x, y) == ArtifactType.COIN


def test_envelope_rejects_mismatched_payload() -> None:
    item = ItemData(name="Medkit", description="", effect_type=ItemEffect.HEAL, effect_value=50)

    with pytest.raises(ValueError):
        Artifact(
            id="bad",
            type=ArtifactType.COIN,
            found_at=GridCoordinate(0, 0),
            found_date=NOW,
            rarity_score=0.0,
            monetary_value=0,
            data=item,
        )

    with pytest.raises(ValueError):
        Artifact(
            id="bad",
            type=ArtifactType.FOOD,
            found_at=GridCoordinate(0, 0),
            found_date=NOW,
            rarity_score=0.0,
            monetary_value=0,
            data=generate_coin_from_profile(0, 0, GENERATOR_ANCIENT),
        )
