from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ArtifactType(str, Enum):
    COIN = "COIN"
    FOOD = "FOOD"
    TOOL = "TOOL"


class CoinMetal(str, Enum):
    COPPER = "Copper"
    NICKEL = "Nickel"
    ZINC = "Zinc"
    BRASS = "Brass"
    ALUMINIUM = "Aluminium"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class CoinCondition(str, Enum):
    POOR = "Poor"
    GOOD = "Good"
    FINE = "Fine"
    VERY_FINE = "Very Fine"
    NEAR_MINT = "Near Mint"
    MINT = "Mint"


class CoinBorder(str, Enum):
    THIN = "Thin"
    STANDARD = "Standard"
    WIDE = "Wide"


class CoinSize(str, Enum):
    TINY = "Tiny (10mm)"
    SMALL = "Small (20mm)"
    MEDIUM = "Medium (30mm)"
    LARGE = "Large (40mm)"


class CoinPattern(str, Enum):
    GEOMETRIC = "Geometric"
    FLORAL = "Floral"
    IMPERIAL = "Imperial"
    ABSTRACT = "Abstract"
    RADIAL = "Radial"
    GRID = "Grid"
    DOTS = "Dots"
    WAVES = "Waves"
    CROSSES = "Crosses"
    STARS = "Stars"
    CIRCLES = "Circles"
    TRIANGLES = "Triangles"
    HEXAGONS = "Hexagons"
    DIAMONDS = "Diamonds"
    SCALES = "Scales"
    BRICKS = "Bricks"
    MAZE = "Maze"
    SPIRAL = "Spiral"
    RINGS = "Rings"
    CHECKS = "Checks"
    STRIPES = "Stripes"
    ZIGZAG = "Zigzag"
    CHEVRON = "Chevron"
    MOSAIC = "Mosaic"
    TARGET = "Target"
    SUNBURST = "Sunburst"
    MOON = "Moon"
    SHIELD = "Shield"
    CROWN = "Crown"
    ANCHOR = "Anchor"
    LEAF = "Leaf"
    TREE = "Tree"
    MOUNTAIN = "Mountain"
    OCEAN = "Ocean"
    WIND = "Wind"
    FIRE = "Fire"


class CellType(str, Enum):
    """Content category of a single grid cell."""

    EMPTY = "EMPTY"
    SHOP = "SHOP"
    FOOD = "FOOD"
    COIN = "COIN"
    HOSTILE = "HOSTILE"


class ShopVariant(str, Enum):
    TOOL_SHOP = "tool_shop"
    SUPERMARKET = "supermarket"


class ItemEffect(str, Enum):
    HEAL = "HEAL"
    RANGE_BOOST = "RANGE_BOOST"
    SONAR_BOOST = "SONAR_BOOST"
    IMMUNITY = "IMMUNITY"


@dataclass(frozen=True, slots=True)
class GridCoordinate:
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Range:
    """Closed numeric interval authored in a design profile."""

    min: float
    max: float


@dataclass(frozen=True, slots=True)
class DesignProfile:
    """Constraint space a coin generator samples from.

    ``allowed_metals`` and ``allowed_patterns`` encode weighting by repetition:
    an entry listed ``k`` times out of ``n`` is picked with probability ``k / n``.
    Colour fields left as ``None`` mean "derive from the metal".
    """

    allowed_metals: tuple[CoinMetal, ...]
    year_range: Range
    allowed_patterns: tuple[CoinPattern, ...]
    shape_jitter: Range
    petal_count: Range
    petal_length: Range
    petal_width: Range
    petal_sharpness: Range
    center_radius: Range
    custom_base_color: str | None = None
    custom_shine_color: str | None = None
    custom_dark_color: str | None = None


@dataclass(frozen=True, slots=True)
class CoinVisualOverrides:
    """Continuous parameters handed to the coin renderer."""

    shape_jitter: float
    petal_count: int
    petal_length: float
    petal_width: float
    petal_sharpness: float
    center_radius: float
    custom_base_color: str | None = None
    custom_shine_color: str | None = None
    custom_dark_color: str | None = None


@dataclass(frozen=True, slots=True)
class CoinData:
    metal: CoinMetal
    year: int
    condition: CoinCondition
    border: CoinBorder
    size: CoinSize
    pattern: CoinPattern
    visual_overrides: CoinVisualOverrides | None = None


@dataclass(frozen=True, slots=True)
class ItemData:
    """Payload for consumables and tools bought from a shop."""

    name: str
    description: str
    effect_type: ItemEffect
    effect_value: float
    shelf_life_ms: int | None = None
    remaining_life_ms: int | None = None
    icon: str | None = None


_PAYLOAD_TYPES: dict[ArtifactType, type] = {
    ArtifactType.COIN: CoinData,
    ArtifactType.FOOD: ItemData,
    ArtifactType.TOOL: ItemData,
}


@dataclass(frozen=True, slots=True)
class Artifact:
    """Envelope shared by every collectable; ``type`` tags the ``data`` variant."""

    id: str
    type: ArtifactType
    found_at: GridCoordinate
    found_date: datetime
    rarity_score: float
    monetary_value: int
    data: CoinData | ItemData = field(repr=False)

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.type]
        if not isinstance(self.data, expected):
            raise ValueError(
                f"{self.type.value} artifact requires {expected.__name__} payload, "
                f"got {type(self.data).__name__}"
            )
