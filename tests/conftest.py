"""Shared test fixtures for terrain tests."""

import numpy as np
import pytest

from islandgen.config import ElevationConfig, ForestConfig, IslandConfig, TerrainConfig


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source."""
    return np.random.default_rng(42)


@pytest.fixture
def small_config() -> TerrainConfig:
    """64x48 terrain with a narrow island bump."""
    return TerrainConfig(
        seed=7,
        width=64,
        height=48,
        elevation=ElevationConfig(),
        island=IslandConfig(falloff_width=20.0),
        forest=ForestConfig(),
    )

