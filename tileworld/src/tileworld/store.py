"""Sparse global tile store keyed by packed tile coordinates."""

from typing import Iterator, Mapping

from .terrain_types import TerrainData
from .types import pack_key, unpack_key


class TileStore:
    """Sparse mapping from integer tile coordinate to TerrainData.

    Tiles enter only through `merge_chunk` and leave only through
    `evict_beyond`, always a whole chunk at a time, so the store never
    holds a partially merged or partially evicted chunk.
    """

    def __init__(self, chunk_size: int):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self._tiles: dict[int, TerrainData] = {}
        self._chunk_tiles: dict[tuple[int, int], list[int]] = {}

    def __len__(self) -> int:
        return len(self._tiles)

    def get(self, x: int, z: int) -> TerrainData | None:
        """Get tile at coordinates, or None if absent."""
        return self._tiles.get(pack_key(x, z))

    def height_at(self, x: int, z: int) -> float:
        """Stored height at a tile, 0 when absent."""
        tile = self._tiles.get(pack_key(x, z))
        return tile.height if tile is not None else 0.0

    def items(self) -> Iterator[tuple[tuple[int, int], TerrainData]]:
        """Iterate over ((x, z), tile) pairs."""
        for key, tile in self._tiles.items():
            yield unpack_key(key), tile

    def has_chunk(self, chunk_x: int, chunk_z: int) -> bool:
        """Whether the chunk has been merged and not evicted since."""
        return (chunk_x, chunk_z) in self._chunk_tiles

    def chunk_keys(self) -> list[tuple[int, int]]:
        """Coordinates of every merged chunk."""
        return list(self._chunk_tiles)

    def merge_chunk(
        self,
        chunk_x: int,
        chunk_z: int,
        tiles: Mapping[tuple[int, int], TerrainData],
    ) -> None:
        """Add a completed chunk's tiles, keyed by world tile coordinate.

        Raises:
            ValueError: If the chunk is already merged or a tile lies
                outside the chunk.
        """
        key = (chunk_x, chunk_z)
        if key in self._chunk_tiles:
            raise ValueError(f"Chunk {key} is already merged")

        x_min = chunk_x * self.chunk_size
        z_min = chunk_z * self.chunk_size
        packed: dict[int, TerrainData] = {}
        for (x, z), tile in tiles.items():
            if not (x_min <= x < x_min + self.chunk_size and z_min <= z < z_min + self.chunk_size):
                raise ValueError(f"Tile ({x}, {z}) lies outside chunk {key}")
            packed[pack_key(x, z)] = tile

        self._tiles.update(packed)
        self._chunk_tiles[key] = list(packed)

    def evict_beyond(
        self, center_x: int, center_z: int, limit: int
    ) -> tuple[int, list[tuple[int, int]]]:
        """Evict every chunk holding a tile farther than `limit` from center.

        Distance is Chebyshev distance in tiles.

        Returns:
            Tuple of (number of tiles removed, evicted chunk coordinates).
        """
        evicted: list[tuple[int, int]] = []
        removed = 0
        size = self.chunk_size

        for chunk_x, chunk_z in list(self._chunk_tiles):
            x0, z0 = chunk_x * size, chunk_z * size
            x1, z1 = x0 + size - 1, z0 + size - 1
            farthest = max(
                abs(x0 - center_x), abs(x1 - center_x),
                abs(z0 - center_z), abs(z1 - center_z),
            )
            if farthest <= limit:
                continue

            for key in self._chunk_tiles.pop((chunk_x, chunk_z)):
                del self._tiles[key]
                removed += 1
            evicted.append((chunk_x, chunk_z))

        return removed, evicted
