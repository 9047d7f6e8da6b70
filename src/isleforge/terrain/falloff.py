"""Island falloff masks.

A falloff mask is near 0 at the centre of the map and rises toward 1 at the
edges. Subtracting it from a noise field pushes the borders under water and
leaves an island in the middle.
"""

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import InvalidArgumentError
from ..types import FalloffShape

logger = structlog.get_logger()

DEFAULT_STRENGTH = 3.0
DEFAULT_FALLOFF_SIZE = 2.2


def _normalized_distance(size: int, shape: FalloffShape) -> NDArray[np.float64]:
    """Distance of every cell from the map centre in [-1, 1] coordinates.

    Args:
        size: Grid side length.
        shape: Distance metric.

    Returns:
        Array of shape ``(size, size)`` indexed ``[x, y]``.
    """
    ii, jj = np.indices((size, size), dtype=np.float64)
    x = ii / size * 2.0 - 1.0
    y = jj / size * 2.0 - 1.0

    if shape == FalloffShape.SQUARE:
        return np.maximum(np.abs(x), np.abs(y))
    return np.sqrt(x * x + y * y)


def evaluate_falloff(
    distance: NDArray[np.float64],
    strength: float,
    falloff_size: float,
) -> NDArray[np.float64]:
    """Sigmoid falloff curve ``d^a / (d^a + (b - b*d)^a)``.

    ``strength`` (a) sets how sharp the coast is. ``falloff_size`` (b) places
    the midpoint of the transition at ``d = b / (1 + b)``.

    Distances beyond 1 (circular corners) evaluate as 1, where the curve
    already reaches its maximum.
    """
    d = np.minimum(distance, 1.0)
    rise = np.power(d, strength)
    return rise / (rise + np.power(falloff_size - falloff_size * d, strength))


def generate_falloff_mask(
    size: int,
    strength: float = DEFAULT_STRENGTH,
    falloff_size: float = DEFAULT_FALLOFF_SIZE,
    shape: FalloffShape = FalloffShape.SQUARE,
) -> NDArray[np.float32]:
    """Generate a square falloff mask.

    Args:
        size: Grid side length.
        strength: Edge steepness.
        falloff_size: Island size control.
        shape: ``SQUARE`` for a max-norm mask, ``CIRCULAR`` for a round island.

    Returns:
        Read-only float32 array of shape ``(size, size)`` with values in [0, 1].

    Raises:
        InvalidArgumentError: If size is not positive.
    """
    if size <= 0:
        raise InvalidArgumentError(f"falloff mask size must be positive, got {size}")

    mask = evaluate_falloff(
        _normalized_distance(size, shape), strength, falloff_size
    ).astype(np.float32)
    mask.flags.writeable = False

    logger.debug(
        "falloff_generated",
        size=size,
        strength=strength,
        falloff_size=falloff_size,
        shape=shape.value,
    )
    return mask
