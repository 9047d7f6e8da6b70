"""Shared test fixtures for island generation tests."""

import numpy as np
import pytest
from numpy.typing import NDArray

from isleforge.terrain.config import (
    HeightMapConfig,
    LakeConfig,
    MeshConfig,
    NoiseConfig,
    TerrainConfig,
)
from isleforge.terrain.curve import HeightCurve
from isleforge.types import Vector2


class ConstantNoiseProvider:
    """Noise provider that returns the same value everywhere."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def sample(
        self,
        width: int,
        height: int,
        config: NoiseConfig,
        sample_center: Vector2,
    ) -> NDArray[np.float32]:
        self.calls += 1
        return np.full((width, height), self.value, dtype=np.float32)


@pytest.fixture
def identity_settings() -> HeightMapConfig:
    """No falloff, identity curve, multiplier 1."""
    return HeightMapConfig(
        use_falloff=False,
        height_multiplier=1.0,
        height_curve=HeightCurve.linear(),
    )


@pytest.fixture
def small_config() -> TerrainConfig:
    """33x33 island with a small noise scale so it generates quickly."""
    return TerrainConfig(
        height_map=HeightMapConfig(
            noise=NoiseConfig(seed=42, scale=8.0, octaves=4),
            height_multiplier=10.0,
        ),
        mesh=MeshConfig(num_verts_per_line=33, mesh_scale=2.5),
        lakes=LakeConfig(water_level=2.0, min_lake_size=0.0, grid_resolution=2),
    )


@pytest.fixture
def constant_noise() -> ConstantNoiseProvider:
    """Provider returning 0.5 everywhere."""
    return ConstantNoiseProvider(0.5)


@pytest.fixture
def lake_grid() -> NDArray[np.float32]:
    """20x20 dry grid with one 5x4 basin at x 5..9, y 3..6."""
    grid = np.ones((20, 20), dtype=np.float32)
    grid[5:10, 3:7] = 0.0
    return grid
