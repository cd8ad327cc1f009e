"""Procedural tile terrain generation and streaming."""

from .applier import BoardSurface, BoardTile, HeadlessBoard, RenderPrimitive, TerrainApplier
from .chunks import (
    ChunkState,
    ChunkStreamer,
    chunk_coords,
    world_coords,
)
from .config import Config, StreamingConfig, load_config
from .exceptions import (
    ContradictionError,
    GenerationFailedError,
    RuleTableError,
    TerrainError,
)
from .store import TileStore
from .terrain_types import TerrainCategory, TerrainData
from .types import Direction, pack_key, unpack_key

__all__ = [
    # Types
    "Direction",
    "pack_key",
    "unpack_key",
    "TerrainCategory",
    "TerrainData",
    # Config
    "Config",
    "StreamingConfig",
    "load_config",
    # Streaming
    "ChunkState",
    "ChunkStreamer",
    "TileStore",
    "chunk_coords",
    "world_coords",
    # Board boundary
    "BoardSurface",
    "BoardTile",
    "HeadlessBoard",
    "RenderPrimitive",
    "TerrainApplier",
    # Exceptions
    "TerrainError",
    "RuleTableError",
    "ContradictionError",
    "GenerationFailedError",
]
