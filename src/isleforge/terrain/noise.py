"""Noise sampling for height map synthesis.

The pipeline only depends on the ``NoiseProvider`` protocol. The default
``LatticeNoiseProvider`` sums octaves of a seeded, periodic value lattice
sampled with cubic splines, so any sample centre can be addressed and
neighbouring maps line up at their seams.
"""

from typing import Protocol

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from ..exceptions import InvalidArgumentError
from ..types import NormalizeMode, Vector2
from .config import NoiseConfig

logger = structlog.get_logger()

# Side length of the periodic value lattice.
LATTICE_SIZE = 256

# Range of the per-octave random offsets.
OCTAVE_OFFSET_RANGE = 100_000.0

# fBm rarely reaches its theoretical extremes; stretch the global range a bit.
GLOBAL_CONTRAST = 1.0 / 0.9


class NoiseProvider(Protocol):
    """Anything that can produce a 2D noise grid."""

    def sample(
        self,
        width: int,
        height: int,
        config: NoiseConfig,
        sample_center: Vector2,
    ) -> NDArray[np.float32]:
        """Return a ``(width, height)`` grid indexed ``[x, y]``, values in [0, 1]."""
        ...


def _spline_lattice(seed: int) -> NDArray[np.float64]:
    """Generate a periodic value lattice and its cubic spline coefficients.

    Args:
        seed: Random seed for the lattice values.

    Returns:
        Spline coefficients ready for ``map_coordinates(prefilter=False)``.
    """
    rng = np.random.default_rng(seed)
    lattice = rng.uniform(-1.0, 1.0, size=(LATTICE_SIZE, LATTICE_SIZE))
    return ndimage.spline_filter(lattice, order=3, mode="grid-wrap")


def _sample_lattice(
    coefficients: NDArray[np.float64],
    sample_x: NDArray[np.float64],
    sample_y: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Sample the lattice at continuous coordinates, wrapping at the edges."""
    coords = np.array([
        np.mod(sample_x, LATTICE_SIZE),
        np.mod(sample_y, LATTICE_SIZE),
    ])
    return ndimage.map_coordinates(
        coefficients, coords, order=3, mode="grid-wrap", prefilter=False
    )


def fbm_noise(
    width: int,
    height: int,
    config: NoiseConfig,
    sample_center: Vector2,
) -> NDArray[np.float32]:
    """Generate normalized fractal Brownian motion noise.

    Args:
        width: Output size along x.
        height: Output size along y.
        config: Noise parameters.
        sample_center: Noise-space centre of the sampled window.

    Returns:
        Array of shape ``(width, height)`` indexed ``[x, y]``, values in [0, 1].
    """
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"noise size must be positive, got {width}x{height}")

    rng = np.random.default_rng(config.seed)
    coefficients = _spline_lattice(config.seed + 1)

    octave_offsets: list[tuple[float, float]] = []
    max_possible = 0.0
    amplitude = 1.0
    for _ in range(config.octaves):
        ox = rng.uniform(-OCTAVE_OFFSET_RANGE, OCTAVE_OFFSET_RANGE) + config.offset.x + sample_center.x
        oy = rng.uniform(-OCTAVE_OFFSET_RANGE, OCTAVE_OFFSET_RANGE) - config.offset.y - sample_center.y
        octave_offsets.append((ox, oy))
        max_possible += amplitude
        amplitude *= config.persistence

    half_w = width / 2.0
    half_h = height / 2.0
    xx, yy = np.meshgrid(
        np.arange(width, dtype=np.float64),
        np.arange(height, dtype=np.float64),
        indexing="ij",
    )

    result = np.zeros((width, height), dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    for ox, oy in octave_offsets:
        sample_x = (xx - half_w + ox) / config.scale * frequency
        sample_y = (yy - half_h + oy) / config.scale * frequency
        result += _sample_lattice(coefficients, sample_x, sample_y) * amplitude
        amplitude *= config.persistence
        frequency *= config.lacunarity

    if config.normalize_mode == NormalizeMode.LOCAL:
        lo = float(result.min())
        hi = float(result.max())
        if hi > lo:
            result = (result - lo) / (hi - lo)
        else:
            result = np.zeros_like(result)
    else:
        result = result / max_possible * 0.5 * GLOBAL_CONTRAST + 0.5
        result = np.clip(result, 0.0, 1.0)

    return result.astype(np.float32)


class LatticeNoiseProvider:
    """Default ``NoiseProvider`` backed by ``fbm_noise``."""

    def sample(
        self,
        width: int,
        height: int,
        config: NoiseConfig,
        sample_center: Vector2,
    ) -> NDArray[np.float32]:
        values = fbm_noise(width, height, config, sample_center)
        logger.debug(
            "noise_sampled",
            width=width,
            height=height,
            seed=config.seed,
            center=str(sample_center),
        )
        return values
