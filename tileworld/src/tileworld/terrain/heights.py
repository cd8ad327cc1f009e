"""Per-category height sampling and continuous height queries."""

import math
from typing import Callable

import numpy as np

from ..terrain_types import TerrainCategory, TerrainData
from .config import HeightConfig


class HeightGenerator:
    """Turns categories into TerrainData with randomized heights.

    The random source is injected so a seeded generator reproduces the
    same heights for the same sequence of categories.
    """

    def __init__(
        self,
        config: HeightConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or HeightConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def create_terrain_data(self, category: TerrainCategory) -> TerrainData:
        """Sample a height for `category` and attach its tint."""
        height_range = self.config.ranges[category]
        if height_range.high > height_range.low:
            height = float(self.rng.uniform(height_range.low, height_range.high))
        else:
            height = height_range.low
        return TerrainData(category=category, height=height, tint=height_range.tint)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a * (1.0 - t) + b * t


def interpolate_height(
    height_at: Callable[[int, int], float],
    x: float,
    z: float,
    tile_scale: float = 1.0,
) -> float:
    """Bilinearly interpolate tile heights at a continuous coordinate.

    Args:
        height_at: Returns the stored height at an integer tile, 0 if absent.
        x, z: Continuous tile-space coordinate.
        tile_scale: Multiplier applied to the interpolated height.

    Returns:
        Interpolated height scaled by tile_scale.
    """
    x0 = math.floor(x)
    z0 = math.floor(z)
    x1 = x0 + 1
    z1 = z0 + 1

    h00 = height_at(x0, z0)
    h10 = height_at(x1, z0)
    h01 = height_at(x0, z1)
    h11 = height_at(x1, z1)

    fx = x - x0
    fz = z - z0

    h0 = lerp(h00, h10, fx)
    h1 = lerp(h01, h11, fx)
    return lerp(h0, h1, fz) * tile_scale
