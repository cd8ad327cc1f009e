"""Shared test fixtures for tileworld tests."""

import numpy as np
import pytest
import structlog

from tileworld.chunks import ChunkStreamer
from tileworld.config import Config, StreamingConfig
from tileworld.terrain.rules import AdjacencyRules
from tileworld.terrain_types import CATEGORIES


@pytest.fixture
def rules() -> AdjacencyRules:
    """Default symmetric board rules."""
    return AdjacencyRules.default()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def contradictory_rules() -> AdjacencyRules:
    """Each category only permits the next one, one way.

    Any grid with three cells in a row contradicts on its first collapse.
    """
    n = len(CATEGORIES)
    mapping = {CATEGORIES[i]: (CATEGORIES[(i + 1) % n],) for i in range(n)}
    return AdjacencyRules.from_mapping(mapping, symmetric=False)


@pytest.fixture
def small_config() -> Config:
    """8x8 chunks, one chunk of visible range, fixed seed."""
    return Config(
        seed=7,
        streaming=StreamingConfig(tile_unit_size=8, visible_range=1),
    )


@pytest.fixture
def streamer(small_config: Config) -> ChunkStreamer:
    """Streamer over an empty store."""
    return ChunkStreamer(small_config)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
