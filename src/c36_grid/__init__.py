"""Deterministic procedural content for the C-36 exploration grid."""

from .cells import get_cell_type
from .coin_dna import generate_coin_from_profile
from .factory import generate_artifact, generate_shop_artifact
from .prng import seeded_random
from .scoring import calculate_coin_score, calculate_coin_value

__all__ = [
    "calculate_coin_score",
    "calculate_coin_value",
    "generate_artifact",
    "generate_coin_from_profile",
    "generate_shop_artifact",
    "get_cell_type",
    "seeded_random",
]
