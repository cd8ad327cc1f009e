"""Tests for adjacency rules."""

import numpy as np
import pytest

from tileworld.exceptions import RuleTableError
from tileworld.terrain.rules import (
    DEFAULT_ADJACENCY,
    ORTHOGONAL_EXCLUSIONS,
    AdjacencyRules,
)
from tileworld.terrain_types import CATEGORIES, CATEGORY_COUNT, TerrainCategory

T = TerrainCategory


def _mask(*categories: TerrainCategory) -> np.ndarray:
    mask = np.zeros(CATEGORY_COUNT, dtype=bool)
    for category in categories:
        mask[category.index] = True
    return mask


class TestDefaultRules:
    """Tests for the standard board rule table."""

    def test_every_category_has_rules(self) -> None:
        assert set(DEFAULT_ADJACENCY) == set(CATEGORIES)

    def test_base_pairs_permitted(self, rules: AdjacencyRules) -> None:
        for category, neighbors in DEFAULT_ADJACENCY.items():
            for neighbor in neighbors:
                assert rules.permits(category, neighbor)

    def test_symmetric(self, rules: AdjacencyRules) -> None:
        np.testing.assert_array_equal(rules.matrix, rules.matrix.T)
        np.testing.assert_array_equal(
            rules.orthogonal_matrix, rules.orthogonal_matrix.T
        )

    def test_symmetry_closes_one_way_pairs(self, rules: AdjacencyRules) -> None:
        # Wall lists Grass but Grass does not list Wall in the base data
        assert T.WALL not in DEFAULT_ADJACENCY[T.GRASS]
        assert rules.permits(T.GRASS, T.WALL)
        assert rules.permits(T.PATH, T.BRIDGE)

    def test_water_never_touches_building_or_wall(self, rules: AdjacencyRules) -> None:
        for a, b in ORTHOGONAL_EXCLUSIONS:
            assert not rules.permits(a, b)
            assert not rules.permits(b, a)

    def test_tree_neighbors(self, rules: AdjacencyRules) -> None:
        allowed = {c for c in T if rules.permits(T.TREE, c)}
        assert allowed == {T.TREE, T.GRASS}

    def test_asymmetric_build_keeps_one_way_pairs(self) -> None:
        rules = AdjacencyRules.default(symmetric=False)
        assert rules.permits(T.WALL, T.GRASS)
        assert not rules.permits(T.GRASS, T.WALL)


class TestAllowedFor:
    """Tests for union of permitted neighbors over an option set."""

    def test_single_option(self, rules: AdjacencyRules) -> None:
        allowed = rules.allowed_for(_mask(T.TREE))
        np.testing.assert_array_equal(allowed, _mask(T.TREE, T.GRASS))

    def test_union_of_options(self, rules: AdjacencyRules) -> None:
        allowed = rules.allowed_for(_mask(T.TREE, T.BRIDGE))
        expected = _mask(T.TREE, T.GRASS, T.BRIDGE, T.WATER, T.PATH)
        np.testing.assert_array_equal(allowed, expected)

    def test_exclusions_apply_per_category(self) -> None:
        # Water and Path together still allow Wall through Path
        mapping = {c: tuple(CATEGORIES) for c in CATEGORIES}
        rules = AdjacencyRules.from_mapping(mapping, ORTHOGONAL_EXCLUSIONS)

        assert not rules.allowed_for(_mask(T.WATER))[T.WALL.index]
        assert rules.allowed_for(_mask(T.WATER, T.PATH))[T.WALL.index]

    def test_non_orthogonal_ignores_exclusions(self) -> None:
        mapping = {c: tuple(CATEGORIES) for c in CATEGORIES}
        rules = AdjacencyRules.from_mapping(mapping, ORTHOGONAL_EXCLUSIONS)

        assert rules.permits(T.WATER, T.BUILDING, orthogonal=False)
        assert not rules.permits(T.WATER, T.BUILDING, orthogonal=True)

    def test_empty_options_allow_nothing(self, rules: AdjacencyRules) -> None:
        assert not rules.allowed_for(_mask()).any()


class TestRuleValidation:
    """Tests for malformed rule tables."""

    def test_missing_category(self) -> None:
        mapping = dict(DEFAULT_ADJACENCY)
        del mapping[T.BRIDGE]
        with pytest.raises(RuleTableError, match="bridge"):
            AdjacencyRules.from_mapping(mapping)

    def test_unknown_neighbor(self) -> None:
        mapping = dict(DEFAULT_ADJACENCY)
        mapping[T.TREE] = (T.TREE, "lava")
        with pytest.raises(RuleTableError, match="lava"):
            AdjacencyRules.from_mapping(mapping)

    def test_exclusion_emptying_category(self) -> None:
        mapping = {c: (c,) for c in CATEGORIES}
        mapping[T.WATER] = (T.BUILDING,)
        with pytest.raises(RuleTableError, match="water"):
            AdjacencyRules.from_mapping(
                mapping, [(T.WATER, T.BUILDING)], symmetric=False
            )

    def test_wrong_matrix_shape(self) -> None:
        with pytest.raises(RuleTableError):
            AdjacencyRules(np.ones((3, 3), dtype=bool))
