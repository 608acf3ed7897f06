"""Artifact factory: wraps generated payloads in the shared envelope."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from .coin_dna import generate_coin_from_profile
from .models import Artifact, ArtifactType, CoinData, GridCoordinate, ItemData
from .profiles import GENERATOR_ANCIENT
from .scoring import calculate_coin_score, calculate_coin_value
from .shop import CatalogEntry

REGION_SIZE = 50

# Types that can be excavated; order feeds the region hash.
EXCAVATION_TYPES: tuple[ArtifactType, ...] = (ArtifactType.COIN,)

_logger = logging.getLogger("c36_grid.factory")


def _generate_coin(cell_x: int, cell_y: int) -> tuple[CoinData, float, int]:
    data = generate_coin_from_profile(cell_x, cell_y, GENERATOR_ANCIENT)
    return data, calculate_coin_score(data), calculate_coin_value(data)


_GENERATORS: dict[ArtifactType, Callable[[int, int], tuple[CoinData | ItemData, float, int]]] = {
    ArtifactType.COIN: _generate_coin,
}


def artifact_type_for_region(cell_x: int, cell_y: int) -> ArtifactType:
    """Pick the artifact family for the 50x50 region containing the cell."""
    region_x = cell_x // REGION_SIZE
    region_y = cell_y // REGION_SIZE
    index = abs(region_x * 31 + region_y * 17) % len(EXCAVATION_TYPES)
    return EXCAVATION_TYPES[index]


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def generate_artifact(cell_x: int, cell_y: int, *, now: datetime | None = None) -> Artifact:
    found_date = now or datetime.now(timezone.utc)
    artifact_type = artifact_type_for_region(cell_x, cell_y)
    data, rarity_score, monetary_value = _GENERATORS[artifact_type](cell_x, cell_y)

    artifact = Artifact(
        id=f"art-{cell_x}-{cell_y}-{_epoch_ms(found_date)}",
        type=artifact_type,
        found_at=GridCoordinate(cell_x, cell_y),
        found_date=found_date,
        rarity_score=rarity_score,
        monetary_value=monetary_value,
        data=data,
    )
    _logger.debug(
        "artifact_generated",
        extra={"artifact_id": artifact.id, "type": artifact_type.value, "value": monetary_value},
    )
    return artifact


def generate_shop_artifact(
    entry: CatalogEntry,
    *,
    found_at: GridCoordinate | None = None,
    now: datetime | None = None,
) -> Artifact:
    """Instantiate a purchased catalog item; its value is the price paid."""
    found_date = now or datetime.now(timezone.utc)
    data = ItemData(
        name=entry.name,
        description=entry.description,
        effect_type=entry.effect_type,
        effect_value=entry.effect_value,
        shelf_life_ms=entry.shelf_life_ms,
        remaining_life_ms=entry.shelf_life_ms,
        icon=entry.icon,
    )
    return Artifact(
        id=f"item-{entry.sku}-{_epoch_ms(found_date)}-{uuid4().hex[:8]}",
        type=entry.artifact_type,
        found_at=found_at or GridCoordinate(0, 0),
        found_date=found_date,
        rarity_score=0.0,
        monetary_value=entry.cost,
        data=data,
    )
