"""Lake detection: strided flood fill below a water level.

Only cells whose coordinates are multiples of ``stride`` are ever visited.
This bounds the cost on large grids at the price of missing or mis-sizing
regions narrower than the stride.
"""

from collections import deque
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import InvalidArgumentError
from ..types import Vector2, Vector3
from .heightmap import HeightMap

logger = structlog.get_logger()

# Hard bound on cells collected per region; larger regions are truncated.
MAX_LAKE_CELLS = 10_000


@dataclass(frozen=True)
class WaterBody:
    """A connected low region, described in world space."""

    center: Vector3
    size: Vector2  # (width along X, depth along Z)
    water_level: float
    cell_count: int
    cells: tuple[tuple[int, int], ...]  # (x, y) lattice coordinates, discovery order
    depth: float = 0.0
    truncated: bool = False

    @property
    def bounding_area(self) -> float:
        """Bounding-box area in world units.

        Not the area used for the size filter, which counts cells.
        """
        return self.size.x * self.size.y


def _flood_fill(
    values: NDArray[np.floating],
    visited: NDArray[np.bool_],
    start_x: int,
    start_y: int,
    threshold: float,
    stride: int,
) -> tuple[list[tuple[int, int]], bool]:
    """Collect strided lattice cells reachable from a seed below ``threshold``.

    Cells are marked visited as they are enqueued. Stops once
    ``MAX_LAKE_CELLS`` cells have been collected.

    Args:
        values: Elevation grid indexed ``[x, y]``.
        visited: Shared visited mask, updated in place.
        start_x: Seed x.
        start_y: Seed y.
        threshold: Water level; cells must be strictly below it.
        stride: Lattice spacing.

    Returns:
        Tuple of ((x, y) cells in BFS order, whether the cap cut the fill short).
    """
    width, height = values.shape
    result: list[tuple[int, int]] = []
    queue: deque[tuple[int, int]] = deque([(start_x, start_y)])
    visited[start_x, start_y] = True

    neighbours = ((-stride, 0), (stride, 0), (0, -stride), (0, stride))

    while queue and len(result) < MAX_LAKE_CELLS:
        x, y = queue.popleft()
        result.append((x, y))

        for dx, dy in neighbours:
            nx, ny = x + dx, y + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue
            if visited[nx, ny]:
                continue
            if values[nx, ny] < threshold:
                visited[nx, ny] = True
                queue.append((nx, ny))

    return result, bool(queue)


def _describe_region(
    cells: list[tuple[int, int]],
    width: int,
    height: int,
    world_size: float,
    water_level: float,
    depth: float,
    truncated: bool,
) -> WaterBody:
    """Build a ``WaterBody`` from the bounding box of its cells."""
    xs = np.array([c[0] for c in cells], dtype=np.float64)
    ys = np.array([c[1] for c in cells], dtype=np.float64)
    world_x = (xs / width - 0.5) * world_size
    world_z = (ys / height - 0.5) * world_size

    min_x, max_x = float(world_x.min()), float(world_x.max())
    min_z, max_z = float(world_z.min()), float(world_z.max())

    return WaterBody(
        center=Vector3(x=(min_x + max_x) / 2.0, y=water_level, z=(min_z + max_z) / 2.0),
        size=Vector2(x=max_x - min_x, y=max_z - min_z),
        water_level=water_level,
        cell_count=len(cells),
        cells=tuple(cells),
        depth=depth,
        truncated=truncated,
    )


def detect_water_bodies(
    elevation: HeightMap | NDArray[np.floating],
    water_level: float,
    min_area: float,
    stride: int,
    world_size: float,
    depth: float = 0.0,
) -> list[WaterBody]:
    """Find connected regions below the water level.

    Seeds are scanned row by row (``y`` outer, ``x`` inner) over the strided
    lattice and regions are returned in the order their seeds were found.

    A region's area is ``cell_count * (world_size / width) ** 2``: the
    full-resolution cell size, even though each visited cell stands for a
    ``stride x stride`` block. Regions smaller than ``min_area`` are dropped.

    Args:
        elevation: HeightMap or raw grid indexed ``[x, y]``.
        water_level: Cells strictly below this are water.
        min_area: Minimum region area in world units squared.
        stride: Lattice spacing in cells.
        world_size: World-space side length covered by the grid.
        depth: Water volume depth copied onto each result.

    Returns:
        List of WaterBody in discovery order; empty if none qualify.

    Raises:
        InvalidArgumentError: If stride is not positive or the grid is not 2D.
    """
    if stride <= 0:
        raise InvalidArgumentError(f"stride must be positive, got {stride}")

    values = elevation.values if isinstance(elevation, HeightMap) else np.asarray(elevation)
    if values.ndim != 2 or values.size == 0:
        raise InvalidArgumentError(f"elevation must be a non-empty 2D grid, got shape {values.shape}")

    width, height = values.shape
    visited = np.zeros((width, height), dtype=bool)
    pixel_size = world_size / width

    bodies: list[WaterBody] = []
    for y in range(0, height, stride):
        for x in range(0, width, stride):
            if visited[x, y]:
                continue
            if not values[x, y] < water_level:
                continue

            cells, truncated = _flood_fill(values, visited, x, y, water_level, stride)

            if truncated:
                logger.warning(
                    "lake_flood_fill_truncated",
                    seed_x=x,
                    seed_y=y,
                    cell_count=len(cells),
                )

            area = len(cells) * pixel_size * pixel_size
            if area < min_area:
                continue

            body = _describe_region(
                cells, width, height, world_size, water_level, depth, truncated
            )
            bodies.append(body)
            logger.debug(
                "lake_detected",
                center=str(body.center),
                size=str(body.size),
                cell_count=body.cell_count,
            )

    logger.info("lake_detection_complete", lakes=len(bodies), stride=stride)
    return bodies
