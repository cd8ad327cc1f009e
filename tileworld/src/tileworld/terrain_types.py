"""Terrain categories and the per-tile data record."""

from dataclasses import dataclass, replace
from enum import Enum


class TerrainCategory(str, Enum):
    """Closed set of terrain categories a tile can hold."""

    DIRT = "dirt"
    GRASS = "grass"
    TREE = "tree"
    BUILDING = "building"
    WALL = "wall"
    PATH = "path"
    BRIDGE = "bridge"
    WATER = "water"

    @property
    def index(self) -> int:
        """Position of this category in the option arrays."""
        return _CATEGORY_INDEX[self]

    @property
    def glyph(self) -> str:
        """Single character used in ASCII map previews."""
        return _GLYPHS[self]

    @property
    def model(self) -> str | None:
        """Name of the scenery model placed on top of the tile, if any."""
        return _MODELS.get(self)

    @classmethod
    def from_index(cls, index: int) -> "TerrainCategory":
        """Convert an option-array index back to a category."""
        return CATEGORIES[index]


# Declaration order is the option-array order
CATEGORIES: tuple[TerrainCategory, ...] = tuple(TerrainCategory)
CATEGORY_COUNT = len(CATEGORIES)

_CATEGORY_INDEX = {category: i for i, category in enumerate(CATEGORIES)}

_GLYPHS = {
    TerrainCategory.DIRT: ":",
    TerrainCategory.GRASS: ".",
    TerrainCategory.TREE: "T",
    TerrainCategory.BUILDING: "B",
    TerrainCategory.WALL: "#",
    TerrainCategory.PATH: "=",
    TerrainCategory.BRIDGE: "H",
    TerrainCategory.WATER: "~",
}

_MODELS = {
    TerrainCategory.TREE: "tree",
    TerrainCategory.BUILDING: "building",
}


@dataclass(frozen=True, slots=True)
class TerrainData:
    """Generated terrain for a single tile.

    Only `height` ever changes after creation (smoothing), and that is done
    by building a new record with `with_height`.
    """

    category: TerrainCategory
    height: float
    tint: int  # 0xRRGGBB

    def with_height(self, height: float) -> "TerrainData":
        """Return copy with a new height."""
        return replace(self, height=height)
