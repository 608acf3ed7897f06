"""Built-in design profiles and the JSON shape used by the design tool."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, TypeVar

from .models import CoinMetal, CoinPattern, DesignProfile, Range

T = TypeVar("T")

FALLBACK_METAL = CoinMetal.COPPER
FALLBACK_PATTERN = CoinPattern.GEOMETRIC

_RANGE_FIELDS = {
    "yearRange": "year_range",
    "shapeJitter": "shape_jitter",
    "petalCount": "petal_count",
    "petalLength": "petal_length",
    "petalWidth": "petal_width",
    "petalSharpness": "petal_sharpness",
    "centerRadius": "center_radius",
}
_COLOR_FIELDS = {
    "customBaseColor": "custom_base_color",
    "customShineColor": "custom_shine_color",
    "customDarkColor": "custom_dark_color",
}


class ProfileError(ValueError):
    """Raised when an authored profile payload cannot be turned into a DesignProfile."""


def expand_weights(weights: Mapping[T, int]) -> tuple[T, ...]:
    """Expand ``{value: weight}`` into the repetition table the generator indexes.

    Each value appears ``weight`` times, in mapping order, so selection by
    ``floor(rand * n)`` picks it with probability ``weight / sum(weights)``.
    """
    expanded: list[T] = []
    for value, weight in weights.items():
        if weight < 0:
            raise ValueError(f"Negative weight for {value!r}: {weight}")
        expanded.extend([value] * weight)
    return tuple(expanded)


# Ancient hoards: high jitter, dense floral patterns.
GENERATOR_ANCIENT = DesignProfile(
    allowed_metals=(
        CoinMetal.GOLD,
        CoinMetal.SILVER,
        CoinMetal.BRONZE,
        CoinMetal.COPPER,
        CoinMetal.NICKEL,
        CoinMetal.ZINC,
        CoinMetal.BRASS,
        CoinMetal.ALUMINIUM,
        CoinMetal.PLATINUM,
    ),
    year_range=Range(-500, 1800),
    allowed_patterns=(
        CoinPattern.GEOMETRIC,
        CoinPattern.STARS,
        CoinPattern.CIRCLES,
        CoinPattern.BRICKS,
        CoinPattern.SPIRAL,
        CoinPattern.RINGS,
        CoinPattern.STRIPES,
        CoinPattern.TARGET,
        CoinPattern.SUNBURST,
        CoinPattern.MOON,
        CoinPattern.SHIELD,
        CoinPattern.CROWN,
        CoinPattern.ANCHOR,
        CoinPattern.TREE,
        CoinPattern.OCEAN,
        CoinPattern.FIRE,
    ),
    shape_jitter=Range(0.8, 5.7),
    petal_count=Range(20, 24),
    petal_length=Range(0.4, 0.71),
    petal_width=Range(0.55, 0.59),
    petal_sharpness=Range(1.5, 2),
    center_radius=Range(0.28, 0.6),
)

CIRCULATION_METAL_WEIGHTS: dict[CoinMetal, int] = {
    CoinMetal.COPPER: 27,
    CoinMetal.NICKEL: 20,
    CoinMetal.ZINC: 15,
    CoinMetal.BRASS: 12,
    CoinMetal.ALUMINIUM: 10,
    CoinMetal.BRONZE: 8,
    CoinMetal.SILVER: 5,
    CoinMetal.GOLD: 2,
    CoinMetal.PLATINUM: 1,
}

# Modern pocket change: mostly base metals, tight shapes.
GENERATOR_CIRCULATION = DesignProfile(
    allowed_metals=expand_weights(CIRCULATION_METAL_WEIGHTS),
    year_range=Range(1800, 2025),
    allowed_patterns=tuple(CoinPattern),
    shape_jitter=Range(0, 1),
    petal_count=Range(3, 12),
    petal_length=Range(0.1, 1.0),
    petal_width=Range(0.1, 1.0),
    petal_sharpness=Range(0.1, 2.0),
    center_radius=Range(0.1, 0.5),
)

PROFILES: dict[str, DesignProfile] = {
    "ancient": GENERATOR_ANCIENT,
    "circulation": GENERATOR_CIRCULATION,
}


def get_profile(name: str) -> DesignProfile:
    key = name.strip().lower()
    if key not in PROFILES:
        raise KeyError(f"Unknown design profile: {name} (known: {', '.join(sorted(PROFILES))})")
    return PROFILES[key]


def _parse_range(payload: Mapping[str, Any], key: str) -> Range:
    raw = payload.get(key)
    if not isinstance(raw, Mapping) or "min" not in raw or "max" not in raw:
        raise ProfileError(f"{key} must be an object with min and max")
    try:
        low, high = float(raw["min"]), float(raw["max"])
    except (TypeError, ValueError) as exc:
        raise ProfileError(f"{key} bounds must be numeric") from exc
    if low > high:
        raise ProfileError(f"{key} has min > max ({low} > {high})")
    return Range(low, high)


def _parse_members(payload: Mapping[str, Any], key: str, enum_type: type[T]) -> tuple[T, ...]:
    raw = payload.get(key)
    if not isinstance(raw, list):
        raise ProfileError(f"{key} must be a list")
    try:
        return tuple(enum_type(item) for item in raw)
    except ValueError as exc:
        raise ProfileError(f"{key} contains an unknown value: {exc}") from exc


def profile_from_dict(payload: Mapping[str, Any]) -> DesignProfile:
    """Build a profile from the camelCase payload the design tool saves."""
    kwargs: dict[str, Any] = {
        "allowed_metals": _parse_members(payload, "allowedMetals", CoinMetal),
        "allowed_patterns": _parse_members(payload, "allowedPatterns", CoinPattern),
    }
    for key, attr in _RANGE_FIELDS.items():
        kwargs[attr] = _parse_range(payload, key)
    for key, attr in _COLOR_FIELDS.items():
        value = payload.get(key)
        if value is not None and not isinstance(value, str):
            raise ProfileError(f"{key} must be a colour string")
        kwargs[attr] = value
    return DesignProfile(**kwargs)


def profile_to_dict(profile: DesignProfile) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "allowedMetals": [metal.value for metal in profile.allowed_metals],
        "allowedPatterns": [pattern.value for pattern in profile.allowed_patterns],
    }
    for key, attr in _RANGE_FIELDS.items():
        bounds: Range = getattr(profile, attr)
        payload[key] = {"min": bounds.min, "max": bounds.max}
    for key, attr in _COLOR_FIELDS.items():
        value = getattr(profile, attr)
        if value is not None:
            payload[key] = value
    return payload


def load_profile(path: str | Path) -> DesignProfile:
    """Read a profile JSON file; accepts a bare profile or a saved design project."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProfileError(f"Invalid profile JSON in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ProfileError(f"Profile file {path} is not UTF-8 text: {exc}") from exc

    if isinstance(payload, dict) and isinstance(payload.get("profile"), dict):
        payload = payload["profile"]
    if not isinstance(payload, dict):
        raise ProfileError(f"Profile file {path} must contain a JSON object")
    return profile_from_dict(payload)
