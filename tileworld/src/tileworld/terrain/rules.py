"""Adjacency rules: which categories may sit next to each other."""

import logging
from typing import Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from ..exceptions import RuleTableError
from ..terrain_types import CATEGORIES, CATEGORY_COUNT, TerrainCategory

logger = logging.getLogger(__name__)

T = TerrainCategory

DEFAULT_ADJACENCY: dict[TerrainCategory, tuple[TerrainCategory, ...]] = {
    T.WATER: (T.WATER, T.BRIDGE, T.DIRT),
    T.DIRT: (T.DIRT, T.GRASS, T.PATH, T.WATER),
    T.GRASS: (T.GRASS, T.TREE, T.DIRT, T.PATH, T.BUILDING),
    T.TREE: (T.TREE, T.GRASS),
    T.BUILDING: (T.BUILDING, T.PATH, T.GRASS),
    T.WALL: (T.WALL, T.PATH, T.GRASS),
    T.PATH: (T.PATH, T.DIRT, T.GRASS, T.BUILDING, T.WALL),
    T.BRIDGE: (T.BRIDGE, T.WATER, T.PATH),
}

# Pairs that may never share an edge, whatever the base table says
ORTHOGONAL_EXCLUSIONS: tuple[tuple[TerrainCategory, TerrainCategory], ...] = (
    (T.WATER, T.BUILDING),
    (T.WATER, T.WALL),
)


class AdjacencyRules:
    """Neighbor rules as boolean matrices indexed by category.

    `matrix[a, b]` is True when category `b` may be placed next to a cell
    holding category `a`. `orthogonal_matrix` additionally removes the
    exclusion pairs and applies to edge-sharing neighbors.
    """

    def __init__(
        self,
        matrix: NDArray[np.bool_],
        exclusions: Iterable[tuple[TerrainCategory, TerrainCategory]] = (),
    ):
        if matrix.shape != (CATEGORY_COUNT, CATEGORY_COUNT):
            raise RuleTableError(
                f"Rule matrix must be {CATEGORY_COUNT}x{CATEGORY_COUNT}, "
                f"got {matrix.shape}"
            )
        self.matrix = matrix.astype(bool)
        self.exclusions = tuple(exclusions)

        self.orthogonal_matrix = self.matrix.copy()
        for a, b in self.exclusions:
            self.orthogonal_matrix[a.index, b.index] = False
            self.orthogonal_matrix[b.index, a.index] = False

        self.validate()

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[TerrainCategory, Iterable[TerrainCategory]],
        exclusions: Iterable[tuple[TerrainCategory, TerrainCategory]] = (),
        symmetric: bool = True,
    ) -> "AdjacencyRules":
        """Build rules from declarative category -> neighbors data.

        Args:
            mapping: Allowed neighbor categories per category.
            exclusions: Category pairs forbidden as orthogonal neighbors.
            symmetric: If True, b next to a implies a next to b.

        Returns:
            Validated AdjacencyRules.

        Raises:
            RuleTableError: If a category is missing or unknown.
        """
        matrix = np.zeros((CATEGORY_COUNT, CATEGORY_COUNT), dtype=bool)
        for category in CATEGORIES:
            if category not in mapping:
                raise RuleTableError(f"No adjacency rule for category '{category.value}'")
        for category, neighbors in mapping.items():
            if not isinstance(category, TerrainCategory):
                raise RuleTableError(f"Unknown category in rule table: {category!r}")
            for neighbor in neighbors:
                if not isinstance(neighbor, TerrainCategory):
                    raise RuleTableError(
                        f"Unknown neighbor {neighbor!r} for '{category.value}'"
                    )
                matrix[category.index, neighbor.index] = True

        if symmetric:
            matrix |= matrix.T
        else:
            asymmetric = np.argwhere(matrix & ~matrix.T)
            for a, b in asymmetric:
                logger.debug(
                    f"One-way adjacency: {CATEGORIES[a].value} -> {CATEGORIES[b].value}"
                )

        return cls(matrix, exclusions)

    @classmethod
    def default(cls, symmetric: bool = True) -> "AdjacencyRules":
        """Rules for the standard board terrain."""
        return cls.from_mapping(DEFAULT_ADJACENCY, ORTHOGONAL_EXCLUSIONS, symmetric)

    def validate(self) -> None:
        """Check that no category leaves its neighbors without options.

        Raises:
            RuleTableError: If a category permits no neighbor at all.
        """
        for category in CATEGORIES:
            if not self.orthogonal_matrix[category.index].any():
                raise RuleTableError(
                    f"Category '{category.value}' permits no orthogonal neighbor"
                )

    def permits(
        self, a: TerrainCategory, b: TerrainCategory, orthogonal: bool = True
    ) -> bool:
        """Whether `b` may be placed next to a cell holding `a`."""
        table = self.orthogonal_matrix if orthogonal else self.matrix
        return bool(table[a.index, b.index])

    def allowed_for(
        self, options: NDArray[np.bool_], orthogonal: bool = True
    ) -> NDArray[np.bool_]:
        """Union of neighbor categories permitted by any of `options`.

        Args:
            options: Boolean mask of length CATEGORY_COUNT.
            orthogonal: Apply orthogonal exclusions.

        Returns:
            Boolean mask of permitted neighbor categories.
        """
        table = self.orthogonal_matrix if orthogonal else self.matrix
        return table[options].any(axis=0)
