"""Core coordinate types for the tile world."""

from enum import IntEnum


class Direction(IntEnum):
    """Edge-sharing neighbor directions."""

    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4


# Direction deltas as (dx, dz)
# Coordinate system: +X is East, +Z is South
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
}

# Constraint propagation visits edge-sharing neighbors only
ORTHOGONAL_DELTAS: tuple[tuple[int, int], ...] = tuple(DIRECTION_DELTAS.values())


_HALF = 1 << 31
_MASK = (1 << 32) - 1


def pack_key(x: int, z: int) -> int:
    """Pack a signed tile coordinate pair into a single non-negative int.

    Each axis is offset into an unsigned 32-bit field, x in the high half.
    """
    return ((x + _HALF) & _MASK) << 32 | ((z + _HALF) & _MASK)


def unpack_key(key: int) -> tuple[int, int]:
    """Inverse of pack_key."""
    return ((key >> 32) & _MASK) - _HALF, (key & _MASK) - _HALF
