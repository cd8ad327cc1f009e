"""Height smoothing by local averaging over the 8-neighborhood."""

from typing import Callable, Mapping

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..terrain_types import TerrainData

# 3x3 box including the center cell
_BOX_KERNEL = np.ones((3, 3), dtype=np.float64)


def neighborhood_mean(
    heights: NDArray[np.float64],
    present: NDArray[np.bool_],
) -> NDArray[np.float64]:
    """Mean of each cell and its present 8-connected neighbors.

    Absent cells are left out of both the sum and the count, so a missing
    neighbor never pulls the average toward zero.

    Args:
        heights: 2D height array (values at absent cells are ignored).
        present: Boolean mask of cells holding a height.

    Returns:
        Array of means; NaN where the cell itself is absent.
    """
    weights = present.astype(np.float64)
    sums = ndimage.convolve(
        np.where(present, heights, 0.0), _BOX_KERNEL, mode="constant", cval=0.0
    )
    counts = ndimage.convolve(weights, _BOX_KERNEL, mode="constant", cval=0.0)
    with np.errstate(invalid="ignore", divide="ignore"):
        means = sums / counts
    return np.where(present, means, np.nan)


def smooth_heights(
    tiles: Mapping[tuple[int, int], TerrainData],
    width: int,
    height: int,
    padding: Callable[[int, int], float | None] | None = None,
) -> dict[tuple[int, int], TerrainData]:
    """Smooth the heights of a width x height region of tiles.

    Args:
        tiles: Tiles keyed by local (x, y), 0 <= x < width, 0 <= y < height.
        width, height: Region size.
        padding: Optional lookup for heights one cell outside the region,
            in the same local coordinates. Returns None where nothing exists.

    Returns:
        New tiles for the same keys with averaged heights. Category and tint
        are unchanged, and no tile outside the region is emitted.
    """
    heights = np.zeros((height + 2, width + 2), dtype=np.float64)
    present = np.zeros((height + 2, width + 2), dtype=bool)

    for (x, y), tile in tiles.items():
        if 0 <= x < width and 0 <= y < height:
            heights[y + 1, x + 1] = tile.height
            present[y + 1, x + 1] = True

    if padding is not None:
        for x in range(-1, width + 1):
            for y in (-1, height):
                _pad(heights, present, padding, x, y)
        for y in range(height):
            for x in (-1, width):
                _pad(heights, present, padding, x, y)

    means = neighborhood_mean(heights, present)

    smoothed: dict[tuple[int, int], TerrainData] = {}
    for (x, y), tile in tiles.items():
        if 0 <= x < width and 0 <= y < height:
            smoothed[(x, y)] = tile.with_height(float(means[y + 1, x + 1]))
    return smoothed


def _pad(
    heights: NDArray[np.float64],
    present: NDArray[np.bool_],
    padding: Callable[[int, int], float | None],
    x: int,
    y: int,
) -> None:
    value = padding(x, y)
    if value is not None:
        heights[y + 1, x + 1] = value
        present[y + 1, x + 1] = True
