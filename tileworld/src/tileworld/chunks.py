"""Chunk streaming: generate, merge and evict terrain around a moving center."""

import math
from enum import Enum

import numpy as np
import structlog

from .config import Config
from .exceptions import GenerationFailedError
from .store import TileStore
from .terrain.heights import HeightGenerator, interpolate_height
from .terrain.rules import AdjacencyRules
from .terrain.smoothing import smooth_heights
from .terrain.solver import solve_grid
from .terrain_types import TerrainCategory, TerrainData

logger = structlog.get_logger()


def chunk_coords(x: int, z: int, chunk_size: int) -> tuple[int, int]:
    """Convert tile coordinates to chunk coordinates."""
    return (x // chunk_size, z // chunk_size)


def world_coords(
    chunk_x: int, chunk_z: int, local_x: int, local_z: int, chunk_size: int
) -> tuple[int, int]:
    """Convert chunk + local offset to tile coordinates."""
    return (chunk_x * chunk_size + local_x, chunk_z * chunk_size + local_z)


class ChunkState(str, Enum):
    """Lifecycle of a chunk key."""

    UNREQUESTED = "unrequested"
    GENERATING = "generating"
    SMOOTHED = "smoothed"
    MERGED = "merged"
    EVICTED = "evicted"


class ChunkStreamer:
    """Keeps the tiles around a moving center generated.

    Each `update_terrain` call generates every chunk within `visible_range`
    of the center's chunk that is not already in the store, then evicts
    chunks that have drifted out of range. Generation is synchronous: the
    solver and smoother run to completion before the call returns.

    All coordinates are in tile space. Chunk (cx, cz) covers tiles
    [cx * size, (cx + 1) * size) on each axis.
    """

    def __init__(
        self,
        config: Config | None = None,
        rules: AdjacencyRules | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or Config()
        streaming = self.config.streaming
        self.chunk_size = streaming.tile_unit_size
        self.square_size = streaming.square_size
        self.visible_range = streaming.visible_range
        self.default_category = streaming.default_category
        self.eviction_limit = (
            streaming.visible_range + streaming.eviction_margin
        ) * streaming.tile_unit_size

        self.rules = rules or AdjacencyRules.default(
            symmetric=self.config.solver.symmetric_rules
        )
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.heights = HeightGenerator(self.config.heights, self.rng)
        self.store = TileStore(self.chunk_size)

        self._pending: dict[tuple[int, int], ChunkState] = {}
        # Chunks dropped by the most recent eviction pass only
        self._evicted: set[tuple[int, int]] = set()

        self.solver_invocations = 0
        self.chunks_generated = 0
        self.chunks_evicted = 0
        self.tiles_evicted = 0

    def chunk_state(self, chunk_x: int, chunk_z: int) -> ChunkState:
        """Report where a chunk key is in its lifecycle.

        A chunk reads EVICTED until the next `update_terrain` call, then
        falls back to UNREQUESTED.
        """
        key = (chunk_x, chunk_z)
        if self.store.has_chunk(chunk_x, chunk_z):
            return ChunkState.MERGED
        if key in self._pending:
            return self._pending[key]
        if key in self._evicted:
            return ChunkState.EVICTED
        return ChunkState.UNREQUESTED

    def chunks_in_range(self, center_x: float, center_z: float) -> list[tuple[int, int]]:
        """Chunk coordinates within visible_range of the center's chunk."""
        center_cx, center_cz = chunk_coords(
            math.floor(center_x), math.floor(center_z), self.chunk_size
        )
        r = self.visible_range
        chunks = []
        for cz in range(center_cz - r, center_cz + r + 1):
            for cx in range(center_cx - r, center_cx + r + 1):
                chunks.append((cx, cz))
        return chunks

    def update_terrain(self, center_x: float, center_z: float) -> list[tuple[int, int]]:
        """Generate missing chunks around the center and evict distant ones.

        Args:
            center_x, center_z: Center position in tile space.

        Returns:
            Coordinates of chunks generated by this call.

        Raises:
            GenerationFailedError: If the adjacency rules keep contradicting
                themselves. Chunks merged before the failure are kept; the
                failing chunk leaves no tiles behind.
        """
        generated = []
        for cx, cz in self.chunks_in_range(center_x, center_z):
            if self.store.has_chunk(cx, cz):
                continue
            self._generate_chunk(cx, cz)
            generated.append((cx, cz))

        tile_x, tile_z = math.floor(center_x), math.floor(center_z)
        removed, evicted = self.store.evict_beyond(tile_x, tile_z, self.eviction_limit)
        self._evicted = set(evicted)
        if evicted:
            self.chunks_evicted += len(evicted)
            self.tiles_evicted += removed
            logger.debug(
                "tiles_evicted",
                center=(tile_x, tile_z),
                chunks=len(evicted),
                tiles=removed,
            )

        if generated:
            logger.info(
                "terrain_updated",
                center=(tile_x, tile_z),
                generated=len(generated),
                stored_chunks=len(self.store.chunk_keys()),
                stored_tiles=len(self.store),
            )
        return generated

    def _generate_chunk(self, chunk_x: int, chunk_z: int) -> None:
        key = (chunk_x, chunk_z)
        size = self.chunk_size
        self._pending[key] = ChunkState.GENERATING

        try:
            self.solver_invocations += 1
            result = solve_grid(
                size,
                size,
                self.rules,
                self.rng,
                max_attempts=self.config.solver.max_attempts,
            )
        except GenerationFailedError:
            del self._pending[key]
            logger.error("chunk_generation_failed", chunk=key)
            raise

        tiles = result.materialize(self.heights)

        origin_x, origin_z = world_coords(chunk_x, chunk_z, 0, 0, size)

        def neighbor_height(local_x: int, local_z: int) -> float | None:
            tile = self.store.get(origin_x + local_x, origin_z + local_z)
            return tile.height if tile is not None else None

        tiles = smooth_heights(tiles, size, size, padding=neighbor_height)
        self._pending[key] = ChunkState.SMOOTHED

        self.store.merge_chunk(
            chunk_x,
            chunk_z,
            {
                world_coords(chunk_x, chunk_z, lx, lz, size): tile
                for (lx, lz), tile in tiles.items()
            },
        )
        del self._pending[key]
        self._evicted.discard(key)
        self.chunks_generated += 1

        logger.debug(
            "chunk_generated",
            chunk=key,
            attempts=result.stats.attempts,
            collapses=result.stats.collapses,
        )

    def get_tile(self, x: float, z: float) -> TerrainData | None:
        """Stored tile containing (x, z), or None if absent."""
        return self.store.get(math.floor(x), math.floor(z))

    def get_terrain_type(self, x: float, z: float) -> TerrainCategory:
        """Category of the tile containing (x, z), default if absent."""
        tile = self.get_tile(x, z)
        return tile.category if tile is not None else self.default_category

    def get_interpolated_height(self, x: float, z: float) -> float:
        """Bilinear height at (x, z), scaled to world units.

        Missing corner tiles count as height 0.
        """
        return interpolate_height(self.store.height_at, x, z, self.square_size)
