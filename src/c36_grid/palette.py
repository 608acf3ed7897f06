"""Metal colour palettes supplied to the coin renderer."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import CoinData, CoinMetal

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True, slots=True)
class MetalPalette:
    base: str
    dark: str
    shine: str


DEFAULT_PALETTE = MetalPalette(base="#525252", dark="#262626", shine="#737373")

METAL_PALETTES: dict[CoinMetal, MetalPalette] = {
    CoinMetal.PLATINUM: MetalPalette(base="#e2e8f0", dark="#94a3b8", shine="#f8fafc"),
    CoinMetal.GOLD: MetalPalette(base="#fbbf24", dark="#b45309", shine="#fef3c7"),
    CoinMetal.SILVER: MetalPalette(base="#cbd5e1", dark="#64748b", shine="#f1f5f9"),
    CoinMetal.BRONZE: MetalPalette(base="#cd7f32", dark="#7c2d12", shine="#fdba74"),
    CoinMetal.COPPER: MetalPalette(base="#c27c4f", dark="#7c2d12", shine="#fed7aa"),
    CoinMetal.BRASS: MetalPalette(base="#eab308", dark="#854d0e", shine="#fde047"),
    CoinMetal.NICKEL: MetalPalette(base="#a1a1aa", dark="#52525b", shine="#e4e4e7"),
    CoinMetal.ZINC: MetalPalette(base="#71717a", dark="#3f3f46", shine="#a1a1aa"),
    CoinMetal.ALUMINIUM: MetalPalette(base="#d4d4d4", dark="#737373", shine="#ffffff"),
}


def get_metal_palette(metal: CoinMetal | str) -> MetalPalette:
    try:
        return METAL_PALETTES[CoinMetal(metal)]
    except ValueError:
        return DEFAULT_PALETTE


def adjust_color(hex_color: str, amount: int) -> str:
    """Shift every channel by ``amount`` (positive lightens), clamped to 0..255."""
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Not a hex colour: {hex_color!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    channels = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return "#" + "".join(f"{min(255, max(0, value + amount)):02x}" for value in channels)


def resolve_palette(coin: CoinData) -> MetalPalette:
    """Metal palette with any designer-forced colours applied on top."""
    palette = get_metal_palette(coin.metal)
    overrides = coin.visual_overrides
    if overrides is None:
        return palette
    return MetalPalette(
        base=overrides.custom_base_color or palette.base,
        dark=overrides.custom_dark_color or palette.dark,
        shine=overrides.custom_shine_color or palette.shine,
    )
