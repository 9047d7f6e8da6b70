"""Height map synthesis: falloff subtraction, curve remap, min/max tracking."""

from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import DimensionMismatchError, InvalidArgumentError, MissingDependencyError
from .config import HeightMapConfig, MeshConfig
from .curve import CurveSnapshot, HeightCurve

logger = structlog.get_logger()


@dataclass(frozen=True, eq=False)
class HeightMap:
    """Final elevation grid and the range observed while building it.

    ``values`` is read-only and indexed ``[x, y]``. Two maps are equal when
    their grids and recorded ranges match element for element.
    """

    values: NDArray[np.float32]
    min_value: float
    max_value: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeightMap):
            return NotImplemented
        return (
            self.min_value == other.min_value
            and self.max_value == other.max_value
            and np.array_equal(self.values, other.values)
        )

    @property
    def size(self) -> int:
        return self.values.shape[0]

    @property
    def width(self) -> int:
        return self.values.shape[0]

    @property
    def height(self) -> int:
        return self.values.shape[1]


class MeshBuilder(Protocol):
    """Turns a finished elevation grid into mesh data.

    Mesh construction lives outside this package; implementations only need
    the read-only ``HeightMap.values`` grid, the mesh sizing and a level of
    detail where 0 is full resolution.
    """

    def build(
        self,
        values: NDArray[np.float32],
        mesh_config: MeshConfig,
        level_of_detail: int,
    ) -> Any:
        ...


def _check_grid(noise: NDArray, falloff: NDArray | None) -> None:
    if noise.ndim != 2 or noise.shape[0] == 0 or noise.shape[0] != noise.shape[1]:
        raise InvalidArgumentError(
            f"noise must be a non-empty square 2D grid, got shape {noise.shape}"
        )
    if falloff is not None and falloff.shape != noise.shape:
        raise DimensionMismatchError(
            f"falloff mask shape {falloff.shape} does not match noise shape {noise.shape}"
        )


def synthesize_height_map(
    noise: NDArray[np.floating],
    falloff: NDArray[np.floating] | None,
    config: HeightMapConfig,
    curve: HeightCurve | CurveSnapshot | None = None,
) -> HeightMap:
    """Blend noise, falloff and the height curve into a ``HeightMap``.

    Per cell, in order:
      1. with falloff enabled, ``v = clamp01(v - intensity * mask)``;
      2. ``v *= curve(v) * height_multiplier``, the curve evaluated at the
         falloff-adjusted value itself;
      3. min and max are read off the finished grid.

    Args:
        noise: Raw noise grid, conventionally in [0, 1]. Not modified.
        falloff: Falloff mask of the same shape, or None.
        config: Height map parameters.
        curve: Curve override; defaults to ``config.height_curve``. Always
            frozen into a snapshot before any cell is evaluated.

    Returns:
        HeightMap with read-only values.

    Raises:
        InvalidArgumentError: If noise is not a non-empty square grid.
        DimensionMismatchError: If the falloff shape differs from the noise.
        MissingDependencyError: If falloff is enabled but no mask was given.
    """
    _check_grid(noise, falloff)

    if curve is None:
        curve = config.height_curve
    snapshot = curve if isinstance(curve, CurveSnapshot) else curve.snapshot()

    values = np.array(noise, dtype=np.float32, copy=True)

    if config.use_falloff:
        if falloff is None:
            raise MissingDependencyError("falloff is enabled but no falloff mask was supplied")
        values = np.clip(values - falloff * np.float32(config.falloff_intensity), 0.0, 1.0)
        values = values.astype(np.float32, copy=False)

    values = (values * (snapshot.evaluate(values) * config.height_multiplier)).astype(np.float32)

    min_value = float(values.min())
    max_value = float(values.max())
    values.flags.writeable = False

    logger.debug(
        "height_map_synthesized",
        size=values.shape[0],
        min_value=min_value,
        max_value=max_value,
        falloff=config.use_falloff,
    )
    return HeightMap(values=values, min_value=min_value, max_value=max_value)
