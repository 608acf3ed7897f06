"""Static shop catalog and item spoilage."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .models import Artifact, ArtifactType, ItemData, ItemEffect, ShopVariant

MINUTE_MS = 60 * 1000


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    sku: str
    name: str
    description: str
    cost: int
    artifact_type: ArtifactType
    effect_type: ItemEffect
    effect_value: float
    shelf_life_ms: int | None = None
    icon: str | None = None


METAL_DETECTOR = CatalogEntry(
    sku="metal-detector",
    name="Metal Detector",
    description="Highlights coin cells within range. 10m battery life.",
    cost=5_000,
    artifact_type=ArtifactType.TOOL,
    effect_type=ItemEffect.RANGE_BOOST,
    effect_value=10 * MINUTE_MS,
    icon="scan-line",
)
SONAR_PULSE = CatalogEntry(
    sku="sonar-pulse",
    name="Sonar Pulse",
    description="Reveals the content of surrounding cells for 5 minutes.",
    cost=2_500,
    artifact_type=ArtifactType.TOOL,
    effect_type=ItemEffect.SONAR_BOOST,
    effect_value=5 * MINUTE_MS,
    icon="radar",
)
HAZARD_SUIT = CatalogEntry(
    sku="hazard-suit",
    name="Hazard Suit",
    description="Ignore hostile cell damage for 2 minutes.",
    cost=7_500,
    artifact_type=ArtifactType.TOOL,
    effect_type=ItemEffect.IMMUNITY,
    effect_value=2 * MINUTE_MS,
    icon="shield",
)
FIELD_RATIONS = CatalogEntry(
    sku="field-rations",
    name="Field Rations",
    description="Restores 25 HP. Spoils after 30 minutes of play.",
    cost=150,
    artifact_type=ArtifactType.FOOD,
    effect_type=ItemEffect.HEAL,
    effect_value=25,
    shelf_life_ms=30 * MINUTE_MS,
    icon="utensils",
)
MEDKIT = CatalogEntry(
    sku="medkit",
    name="Medkit",
    description="Restores 50 HP.",
    cost=600,
    artifact_type=ArtifactType.FOOD,
    effect_type=ItemEffect.HEAL,
    effect_value=50,
    icon="cross",
)

CATALOG: tuple[CatalogEntry, ...] = (METAL_DETECTOR, SONAR_PULSE, HAZARD_SUIT, FIELD_RATIONS, MEDKIT)

_VARIANT_STOCK: dict[ShopVariant, tuple[CatalogEntry, ...]] = {
    ShopVariant.TOOL_SHOP: (METAL_DETECTOR, SONAR_PULSE, HAZARD_SUIT),
    ShopVariant.SUPERMARKET: (FIELD_RATIONS, MEDKIT),
}


def catalog_for_variant(variant: ShopVariant) -> tuple[CatalogEntry, ...]:
    return _VARIANT_STOCK[variant]


def find_entry(sku: str) -> CatalogEntry:
    for entry in CATALOG:
        if entry.sku == sku:
            return entry
    raise KeyError(f"Unknown catalog sku: {sku}")


def age_item(artifact: Artifact, elapsed_ms: int) -> Artifact:
    """Return ``artifact`` with its spoilage countdown advanced by ``elapsed_ms``.

    Coins and items without a shelf life come back unchanged.
    """
    data = artifact.data
    if not isinstance(data, ItemData) or data.remaining_life_ms is None:
        return artifact
    remaining = max(0, data.remaining_life_ms - max(0, elapsed_ms))
    return replace(artifact, data=replace(data, remaining_life_ms=remaining))


def is_spoiled(artifact: Artifact) -> bool:
    data = artifact.data
    if not isinstance(data, ItemData) or data.remaining_life_ms is None:
        return False
    return data.remaining_life_ms <= 0
