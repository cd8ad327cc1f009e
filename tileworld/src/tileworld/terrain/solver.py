"""Wave-function-collapse constraint solver for terrain categories.

Each cell starts with every category as an option. The solver repeatedly
collapses the uncollapsed cell with the fewest options (ties broken
uniformly at random) to one random option, then propagates the adjacency
rules breadth-first to shrink neighboring option sets.

Option sets are stored as a boolean array of shape
(height, width, CATEGORY_COUNT), indexed by `TerrainCategory.index`.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from ..exceptions import ContradictionError, GenerationFailedError
from ..terrain_types import CATEGORY_COUNT, TerrainCategory, TerrainData
from ..types import ORTHOGONAL_DELTAS
from .heights import HeightGenerator
from .rules import AdjacencyRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """Snapshot of one solver cell."""

    collapsed: bool
    options: frozenset[TerrainCategory]


@dataclass
class SolveStats:
    """Counters for a solve, summed over restarts."""

    attempts: int = 0
    collapses: int = 0
    propagations: int = 0


def _categories(mask: NDArray[np.bool_]) -> list[TerrainCategory]:
    return [TerrainCategory.from_index(i) for i in np.flatnonzero(mask)]


class ConstraintSolver:
    """Single-attempt solver over a width x height grid."""

    def __init__(
        self,
        width: int,
        height: int,
        rules: AdjacencyRules,
        rng: np.random.Generator,
        stats: SolveStats | None = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rules = rules
        self.rng = rng
        self.stats = stats if stats is not None else SolveStats()

        self.options = np.ones((height, width, CATEGORY_COUNT), dtype=bool)
        self.collapsed = np.zeros((height, width), dtype=bool)
        self.entropy = np.full((height, width), CATEGORY_COUNT, dtype=np.int32)

    def cell(self, x: int, y: int) -> Cell:
        """Return the current state of the cell at (x, y)."""
        return Cell(
            collapsed=bool(self.collapsed[y, x]),
            options=frozenset(_categories(self.options[y, x])),
        )

    def run(self) -> NDArray[np.uint8]:
        """Collapse every cell.

        Returns:
            Array of shape (height, width) holding category indices.

        Raises:
            ContradictionError: If propagation empties a cell.
        """
        self.stats.attempts += 1
        while not self.collapsed.all():
            x, y = self._select()
            self._collapse(x, y)
            self._propagate(x, y)
        return self.options.argmax(axis=2).astype(np.uint8)

    def _select(self) -> tuple[int, int]:
        """Pick a random cell among the uncollapsed ones with least entropy."""
        entropy = np.where(self.collapsed, CATEGORY_COUNT + 1, self.entropy)
        candidates = np.argwhere(entropy == entropy.min())
        y, x = candidates[self.rng.integers(len(candidates))]
        return int(x), int(y)

    def _collapse(self, x: int, y: int) -> None:
        choices = np.flatnonzero(self.options[y, x])
        chosen = choices[self.rng.integers(len(choices))]
        self.options[y, x] = False
        self.options[y, x, chosen] = True
        self.collapsed[y, x] = True
        self.entropy[y, x] = 1
        self.stats.collapses += 1

    def _propagate(self, x: int, y: int) -> None:
        queue: deque[tuple[int, int]] = deque([(x, y)])

        while queue:
            cx, cy = queue.popleft()
            self.stats.propagations += 1
            current = self.options[cy, cx]
            allowed = self.rules.allowed_for(current, orthogonal=True)

            for dx, dy in ORTHOGONAL_DELTAS:
                nx, ny = cx + dx, cy + dy
                if not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue
                if self.collapsed[ny, nx]:
                    continue

                before = self.options[ny, nx]
                after = before & allowed
                remaining = int(after.sum())

                if remaining == 0:
                    raise ContradictionError(
                        nx, ny, (dx, dy), _categories(current), _categories(before)
                    )

                if remaining < self.entropy[ny, nx]:
                    self.options[ny, nx] = after
                    self.entropy[ny, nx] = remaining
                    queue.append((nx, ny))


@dataclass
class SolveResult:
    """A fully collapsed grid."""

    categories: NDArray[np.uint8]  # Shape: (height, width)
    stats: SolveStats = field(default_factory=SolveStats)

    @property
    def width(self) -> int:
        return self.categories.shape[1]

    @property
    def height(self) -> int:
        return self.categories.shape[0]

    def category_at(self, x: int, y: int) -> TerrainCategory:
        """Category of the cell at (x, y)."""
        return TerrainCategory.from_index(self.categories[y, x])

    def materialize(self, heights: HeightGenerator) -> dict[tuple[int, int], TerrainData]:
        """Derive TerrainData for every cell, keyed by (x, y).

        Cells are visited row by row so a seeded height generator gives
        the same heights for the same grid.
        """
        tiles: dict[tuple[int, int], TerrainData] = {}
        for y in range(self.height):
            for x in range(self.width):
                tiles[(x, y)] = heights.create_terrain_data(self.category_at(x, y))
        return tiles


def solve_grid(
    width: int,
    height: int,
    rules: AdjacencyRules,
    rng: np.random.Generator,
    max_attempts: int = 10,
) -> SolveResult:
    """Solve a grid, restarting from scratch after each contradiction.

    Args:
        width, height: Grid size in cells.
        rules: Adjacency rules to satisfy.
        rng: Random source for selection and collapse.
        max_attempts: Number of fresh attempts before giving up.

    Returns:
        SolveResult with one category per cell.

    Raises:
        GenerationFailedError: If every attempt hit a contradiction.
    """
    stats = SolveStats()
    last_error: ContradictionError | None = None

    for attempt in range(max_attempts):
        solver = ConstraintSolver(width, height, rules, rng, stats)
        try:
            categories = solver.run()
        except ContradictionError as e:
            logger.debug(f"Solve attempt {attempt + 1}/{max_attempts} failed: {e}")
            last_error = e
            continue

        logger.debug(
            f"Solved {width}x{height} grid in {stats.attempts} attempt(s), "
            f"{stats.collapses} collapses, {stats.propagations} propagation steps"
        )
        return SolveResult(categories=categories, stats=stats)

    raise GenerationFailedError(
        f"Adjacency rules are contradictory: {width}x{height} grid failed "
        f"{max_attempts} attempt(s); last failure: {last_error}"
    ) from last_error
