"""Custom exceptions for terrain generation and streaming."""

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .terrain_types import TerrainCategory


class TerrainError(Exception):
    """Base exception for terrain errors."""

    pass


class RuleTableError(TerrainError):
    """Raised when an adjacency rule table is malformed."""

    pass


class ContradictionError(TerrainError):
    """Raised when propagation leaves a cell with no remaining options.

    Attributes:
        x, y: Grid coordinates of the emptied cell.
        direction: (dx, dy) step from the propagating cell to the emptied cell.
        source_options: Categories the propagating cell still allowed.
        target_options: Categories the emptied cell held before restriction.
    """

    def __init__(
        self,
        x: int,
        y: int,
        direction: tuple[int, int],
        source_options: Iterable["TerrainCategory"],
        target_options: Iterable["TerrainCategory"],
    ):
        self.x = x
        self.y = y
        self.direction = direction
        self.source_options = tuple(source_options)
        self.target_options = tuple(target_options)
        source = ", ".join(c.value for c in self.source_options)
        target = ", ".join(c.value for c in self.target_options)
        super().__init__(
            f"Cell ({x}, {y}) emptied by neighbor at offset "
            f"({-direction[0]}, {-direction[1]}): [{source}] permits none of [{target}]"
        )


class GenerationFailedError(TerrainError):
    """Raised when every solver attempt ended in a contradiction."""

    pass
