"""Terrain generation configuration models."""

from pydantic import BaseModel, Field, model_validator

from ..terrain_types import TerrainCategory


class HeightRange(BaseModel):
    """Height sampling interval and tint for one category."""

    low: float = Field(description="Inclusive lower height bound")
    high: float = Field(description="Exclusive upper height bound (== low for fixed)")
    tint: int = Field(ge=0, le=0xFFFFFF, description="Display tint as 0xRRGGBB")

    @model_validator(mode="after")
    def _check_order(self) -> "HeightRange":
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) must be >= low ({self.low})")
        return self


def default_height_ranges() -> dict[TerrainCategory, HeightRange]:
    """Per-category height ranges used when no override is configured."""
    return {
        TerrainCategory.DIRT: HeightRange(low=0.0, high=0.5, tint=0x8B4513),
        TerrainCategory.GRASS: HeightRange(low=1.5, high=2.0, tint=0x808080),
        TerrainCategory.TREE: HeightRange(low=0.5, high=1.0, tint=0x228B22),
        TerrainCategory.BUILDING: HeightRange(low=1.0, high=1.5, tint=0xA0522D),
        TerrainCategory.WALL: HeightRange(low=0.8, high=1.0, tint=0x808080),
        TerrainCategory.PATH: HeightRange(low=0.1, high=0.1, tint=0xD2B48C),
        TerrainCategory.BRIDGE: HeightRange(low=0.3, high=0.5, tint=0x8B4513),
        TerrainCategory.WATER: HeightRange(low=-0.5, high=-0.3, tint=0x4169E1),
    }


class HeightConfig(BaseModel):
    """Height generation parameters."""

    ranges: dict[TerrainCategory, HeightRange] = Field(
        default_factory=default_height_ranges,
        description="Height range and tint per category",
    )

    @model_validator(mode="after")
    def _fill_missing(self) -> "HeightConfig":
        # Partial overrides from TOML keep defaults for the rest
        defaults = default_height_ranges()
        for category, height_range in defaults.items():
            self.ranges.setdefault(category, height_range)
        return self


class SolverConfig(BaseModel):
    """Constraint solver parameters."""

    max_attempts: int = Field(
        default=10, ge=1, description="Fresh restarts allowed after a contradiction"
    )
    symmetric_rules: bool = Field(
        default=True, description="Close the adjacency table under symmetry"
    )
