"""Procedural terrain generation package.

This package implements the per-grid generation steps: adjacency rules,
the wave-function-collapse solver, height sampling and height smoothing.
"""

from .config import HeightConfig, HeightRange, SolverConfig
from .heights import HeightGenerator, interpolate_height
from .rules import DEFAULT_ADJACENCY, ORTHOGONAL_EXCLUSIONS, AdjacencyRules
from .smoothing import smooth_heights
from .solver import Cell, ConstraintSolver, SolveResult, SolveStats, solve_grid

__all__ = [
    "AdjacencyRules",
    "Cell",
    "ConstraintSolver",
    "DEFAULT_ADJACENCY",
    "HeightConfig",
    "HeightGenerator",
    "HeightRange",
    "ORTHOGONAL_EXCLUSIONS",
    "SolveResult",
    "SolveStats",
    "SolverConfig",
    "interpolate_height",
    "smooth_heights",
    "solve_grid",
]
