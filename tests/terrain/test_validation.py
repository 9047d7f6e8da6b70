"""Tests for island validation."""

import numpy as np

from isleforge.terrain.heightmap import HeightMap
from isleforge.terrain.lakes import WaterBody
from isleforge.terrain.validation import validate_island
from isleforge.types import Vector2, Vector3


def _height_map(values: np.ndarray) -> HeightMap:
    values = values.astype(np.float32)
    return HeightMap(
        values=values, min_value=float(values.min()), max_value=float(values.max())
    )


def _island() -> HeightMap:
    """A single raised square in the middle of a 20x20 sea."""
    values = np.zeros((20, 20))
    values[5:15, 5:15] = 10.0
    return _height_map(values)


def _lake(
    center: Vector3, water_level: float = 1.0, truncated: bool = False
) -> WaterBody:
    return WaterBody(
        center=center,
        size=Vector2(x=2.0, y=2.0),
        water_level=water_level,
        cell_count=4,
        cells=((0, 0), (1, 0), (0, 1), (1, 1)),
        truncated=truncated,
    )


class TestValidateIsland:
    """Tests for post-generation checks."""

    def test_valid_island_passes(self) -> None:
        """One land mass, a correct range and a lake at the water level pass."""
        lake = _lake(Vector3(x=1.0, y=1.0, z=-2.0))
        result = validate_island(_island(), [lake], water_level=1.0, world_size=20.0)

        assert result.passed
        assert result.errors == []
        assert result.warnings == []

    def test_range_mismatch_is_error(self) -> None:
        """A recorded range that differs from the grid fails."""
        island = _island()
        tampered = HeightMap(values=island.values, min_value=-1.0, max_value=10.0)

        result = validate_island(tampered, [], water_level=1.0, world_size=20.0)

        assert not result.passed
        assert any("range" in e.lower() for e in result.errors)

    def test_non_finite_is_error(self) -> None:
        """NaN heights fail validation."""
        values = np.zeros((10, 10), dtype=np.float32)
        values[3, 3] = np.nan
        height_map = HeightMap(values=values, min_value=0.0, max_value=0.0)

        result = validate_island(height_map, [], water_level=-1.0, world_size=10.0)

        assert not result.passed

    def test_no_land_warns(self) -> None:
        """An island entirely under water passes with a warning."""
        height_map = _height_map(np.zeros((10, 10)))

        result = validate_island(height_map, [], water_level=1.0, world_size=10.0)

        assert result.passed
        assert any("no land" in w.lower() for w in result.warnings)

    def test_multiple_land_masses_warn(self) -> None:
        """Two equal islands trigger a warning."""
        values = np.zeros((20, 20))
        values[2:6, 2:6] = 10.0
        values[12:16, 12:16] = 10.0

        result = validate_island(_height_map(values), [], water_level=1.0, world_size=20.0)

        assert result.passed
        assert any("multiple land masses" in w.lower() for w in result.warnings)

    def test_lake_off_water_level_is_error(self) -> None:
        """Lakes must sit at the detection water level."""
        lake = _lake(Vector3(x=0.0, y=3.0, z=0.0), water_level=3.0)

        result = validate_island(_island(), [lake], water_level=1.0, world_size=20.0)

        assert not result.passed

    def test_lake_outside_world_is_error(self) -> None:
        """A lake centre beyond half the world size fails."""
        lake = _lake(Vector3(x=50.0, y=1.0, z=0.0))

        result = validate_island(_island(), [lake], water_level=1.0, world_size=20.0)

        assert not result.passed
        assert any("outside" in e for e in result.errors)

    def test_truncated_lake_warns(self) -> None:
        """Lakes cut short by the flood fill cap are flagged."""
        lake = _lake(Vector3(x=0.0, y=1.0, z=0.0), truncated=True)

        result = validate_island(_island(), [lake], water_level=1.0, world_size=20.0)

        assert result.passed
        assert any("cap" in w for w in result.warnings)
