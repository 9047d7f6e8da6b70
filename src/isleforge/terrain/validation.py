"""Post-generation validation of islands."""

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from .heightmap import HeightMap
from .lakes import WaterBody

logger = structlog.get_logger()


class ValidationResult:
    """Result of island validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_island(
    height_map: HeightMap,
    water_bodies: list[WaterBody],
    water_level: float,
    world_size: float,
) -> ValidationResult:
    """Validate a generated island.

    Args:
        height_map: Final height map.
        water_bodies: Detected lakes.
        water_level: Level used for lake detection.
        world_size: World-space side length of the height map.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Heights are finite and the recorded range matches the grid
    _check_height_range(height_map, result)

    # Check 2: Something rises above the water, ideally one land mass
    _check_land(height_map.values, water_level, result)

    # Check 3: Lakes sit at the water level inside the world
    _check_water_bodies(water_bodies, water_level, world_size, result)

    if result.passed:
        logger.info("island_validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("island_validation_failed", errors=len(result.errors))
        for error in result.errors:
            logger.error("island_validation_error", detail=error)

    for warning in result.warnings:
        logger.warning("island_validation_warning", detail=warning)

    return result


def _check_height_range(height_map: HeightMap, result: ValidationResult) -> None:
    """Check heights are finite and min/max match the grid exactly."""
    values = height_map.values

    non_finite = int(np.sum(~np.isfinite(values)))
    if non_finite > 0:
        result.add_error(f"Height map has {non_finite} non-finite cells")
        return

    actual_min = float(values.min())
    actual_max = float(values.max())
    if actual_min != height_map.min_value or actual_max != height_map.max_value:
        result.add_error(
            f"Recorded range [{height_map.min_value}, {height_map.max_value}] "
            f"differs from grid range [{actual_min}, {actual_max}]"
        )


def _check_land(
    values: NDArray[np.float32],
    water_level: float,
    result: ValidationResult,
) -> None:
    """Check that there is land and that it forms one main island."""
    land_mask = values >= water_level

    structure = ndimage.generate_binary_structure(2, 2)  # 8-connected
    labeled, num_features = ndimage.label(land_mask, structure=structure)

    if num_features == 0:
        result.add_warning("No land above the water level")
    elif num_features > 1:
        sizes = ndimage.sum(land_mask, labeled, range(1, num_features + 1))
        total_land = np.sum(land_mask)
        largest_frac = np.max(sizes) / total_land

        if largest_frac < 0.99:
            result.add_warning(
                f"Multiple land masses: {num_features} components, "
                f"largest is {largest_frac:.1%} of land"
            )


def _check_water_bodies(
    water_bodies: list[WaterBody],
    water_level: float,
    world_size: float,
    result: ValidationResult,
) -> None:
    """Check lake placement."""
    half = world_size / 2.0
    outside = 0

    for body in water_bodies:
        if body.center.y != water_level or body.water_level != water_level:
            result.add_error(f"Lake at {body.center} is not at water level {water_level}")
        if abs(body.center.x) > half or abs(body.center.z) > half:
            outside += 1
        if body.truncated:
            result.add_warning(
                f"Lake at {body.center} hit the flood fill cap at {body.cell_count} cells"
            )

    if outside > 0:
        result.add_error(f"{outside} lakes centred outside the world bounds")
