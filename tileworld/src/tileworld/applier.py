"""Boundary glue pushing generated terrain onto a rendered board."""

import math
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

import structlog

from .chunks import ChunkStreamer

logger = structlog.get_logger()

# Corners of a unit square, in tile-local units
UNIT_SQUARE_CORNERS: tuple[tuple[float, float], ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (0.0, 1.0),
    (1.0, 1.0),
)


class RenderPrimitive(Protocol):
    """One renderable board square, as seen by the terrain core."""

    @property
    def position(self) -> tuple[float, float]:
        """World (x, z) of the square's origin."""
        ...

    @property
    def vertex_offsets(self) -> Sequence[tuple[float, float]]:
        """Vertex (x, z) offsets from the origin, in world units."""
        ...

    def set_tint(self, tint: int) -> None: ...

    def set_vertex_heights(self, heights: Sequence[float]) -> None: ...

    def set_model(self, model: str | None, base_height: float) -> None:
        """Place `model` on the square, replacing any previous one.

        None removes the current model.
        """
        ...


class BoardSurface(Protocol):
    """Anything that can enumerate its currently loaded primitives."""

    def primitives(self) -> Iterable[RenderPrimitive]: ...


@dataclass
class BoardTile:
    """In-memory render primitive for headless boards."""

    position: tuple[float, float]
    vertex_offsets: Sequence[tuple[float, float]]
    tint: int | None = None
    vertex_heights: list[float] = field(default_factory=list)
    model: tuple[str, float] | None = None

    def set_tint(self, tint: int) -> None:
        self.tint = tint

    def set_vertex_heights(self, heights: Sequence[float]) -> None:
        self.vertex_heights = list(heights)

    def set_model(self, model: str | None, base_height: float) -> None:
        self.model = (model, base_height) if model is not None else None


class HeadlessBoard:
    """A square grid of BoardTiles centered on a tile, with no renderer."""

    def __init__(self, center_x: int, center_z: int, radius: int, square_size: float = 1.0):
        corners = [(ox * square_size, oz * square_size) for ox, oz in UNIT_SQUARE_CORNERS]
        self.tiles = [
            BoardTile(position=(x * square_size, z * square_size), vertex_offsets=corners)
            for z in range(center_z - radius, center_z + radius + 1)
            for x in range(center_x - radius, center_x + radius + 1)
        ]

    def primitives(self) -> Iterable[BoardTile]:
        return iter(self.tiles)


class TerrainApplier:
    """Reads tiles from a streamer's store and updates board primitives.

    This is the only external reader of generated terrain. Primitives over
    tiles that are not in the store are skipped.
    """

    def __init__(self, streamer: ChunkStreamer, board: BoardSurface):
        self.streamer = streamer
        self.board = board

    def apply(self, center_x: float, center_z: float) -> int:
        """Stream terrain around a tile-space center, then update the board.

        Returns:
            Number of primitives updated.
        """
        self.streamer.update_terrain(center_x, center_z)
        return self.apply_to_board()

    def apply_to_board(self) -> int:
        """Update every loaded primitive from the current store contents.

        Returns:
            Number of primitives updated.
        """
        square_size = self.streamer.square_size
        updated = 0
        skipped = 0

        for primitive in self.board.primitives():
            px, pz = primitive.position
            tile_x = math.floor(px / square_size)
            tile_z = math.floor(pz / square_size)
            tile = self.streamer.store.get(tile_x, tile_z)
            if tile is None:
                skipped += 1
                continue

            primitive.set_tint(tile.tint)
            primitive.set_vertex_heights([
                self.streamer.get_interpolated_height(
                    tile_x + ox / square_size, tile_z + oz / square_size
                )
                for ox, oz in primitive.vertex_offsets
            ])

            primitive.set_model(tile.category.model, tile.height * square_size)
            updated += 1

        logger.debug("board_applied", updated=updated, skipped=skipped)
        return updated
