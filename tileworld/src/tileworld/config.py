"""World configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .terrain.config import HeightConfig, SolverConfig
from .terrain_types import TerrainCategory


class StreamingConfig(BaseModel):
    """Chunk streaming parameters, fixed for the life of a manager."""

    tile_unit_size: int = Field(default=8, gt=0, description="Tiles per chunk edge")
    square_size: float = Field(default=1.0, gt=0, description="World units per tile")
    visible_range: int = Field(
        default=1, ge=0, description="Chunks kept in each direction from center"
    )
    eviction_margin: int = Field(
        default=1, ge=1, description="Extra chunks retained past visible_range"
    )
    default_category: TerrainCategory = Field(
        default=TerrainCategory.GRASS, description="Category reported for absent tiles"
    )


class Config(BaseModel):
    """Complete configuration for terrain generation and streaming."""

    seed: int | None = Field(default=42, description="Random seed (None = entropy)")
    streaming: StreamingConfig = Field(default_factory=StreamingConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    heights: HeightConfig = Field(default_factory=HeightConfig)


def load_config(config_path: Path) -> Config:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return Config.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. tileworld/configs/{name}.toml
    3. tileworld/configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return [p.stem for p in configs_dir.glob("*.toml")]
