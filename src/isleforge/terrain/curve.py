"""Height remap curves.

A ``HeightCurve`` is an immutable list of key frames evaluated with cubic
Hermite interpolation. Evaluation always goes through a ``CurveSnapshot``,
a frozen copy of the key frames held in read-only arrays, so concurrent
height map synthesis never shares mutable curve state.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, Field, field_validator


class Keyframe(BaseModel, frozen=True):
    """A single curve control point."""

    time: float
    value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0


class HeightCurve(BaseModel, frozen=True):
    """Monotonic remap curve sampled on [0, 1]."""

    keys: tuple[Keyframe, ...] = Field(
        default_factory=lambda: (
            Keyframe(time=0.0, value=0.0, in_tangent=1.0, out_tangent=1.0),
            Keyframe(time=1.0, value=1.0, in_tangent=1.0, out_tangent=1.0),
        ),
        description="Control points, sorted by time",
    )

    @field_validator("keys")
    @classmethod
    def _sorted_unique_keys(cls, keys: tuple[Keyframe, ...]) -> tuple[Keyframe, ...]:
        if not keys:
            raise ValueError("a height curve needs at least one key frame")
        ordered = tuple(sorted(keys, key=lambda k: k.time))
        for prev, cur in zip(ordered, ordered[1:]):
            if cur.time == prev.time:
                raise ValueError(f"duplicate key frame time {cur.time}")
        return ordered

    @classmethod
    def linear(cls, start: float = 0.0, end: float = 1.0) -> "HeightCurve":
        """Straight line from (0, start) to (1, end). ``linear()`` is the identity."""
        slope = end - start
        return cls(
            keys=(
                Keyframe(time=0.0, value=start, in_tangent=slope, out_tangent=slope),
                Keyframe(time=1.0, value=end, in_tangent=slope, out_tangent=slope),
            )
        )

    @classmethod
    def constant(cls, value: float) -> "HeightCurve":
        return cls(keys=(Keyframe(time=0.0, value=value),))

    @classmethod
    def ease_in_out(cls) -> "HeightCurve":
        """Flat at both ends; flattens low terrain and plateaus peaks."""
        return cls(
            keys=(
                Keyframe(time=0.0, value=0.0),
                Keyframe(time=1.0, value=1.0),
            )
        )

    def snapshot(self) -> "CurveSnapshot":
        """Freeze the key frames into read-only arrays."""
        return CurveSnapshot.from_keys(self.keys)

    def evaluate(self, t: ArrayLike) -> float | NDArray[np.float64]:
        """Evaluate the curve at ``t`` (scalar or array)."""
        return self.snapshot().evaluate(t)


def _readonly(values: list[float]) -> NDArray[np.float64]:
    array = np.array(values, dtype=np.float64)
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class CurveSnapshot:
    """Immutable, thread-safe copy of a curve's key frames."""

    times: NDArray[np.float64]
    values: NDArray[np.float64]
    in_tangents: NDArray[np.float64]
    out_tangents: NDArray[np.float64]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurveSnapshot):
            return NotImplemented
        return all(
            np.array_equal(getattr(self, name), getattr(other, name))
            for name in ("times", "values", "in_tangents", "out_tangents")
        )

    @classmethod
    def from_keys(cls, keys: tuple[Keyframe, ...]) -> "CurveSnapshot":
        return cls(
            times=_readonly([k.time for k in keys]),
            values=_readonly([k.value for k in keys]),
            in_tangents=_readonly([k.in_tangent for k in keys]),
            out_tangents=_readonly([k.out_tangent for k in keys]),
        )

    def evaluate(self, t: ArrayLike) -> float | NDArray[np.float64]:
        """Evaluate with cubic Hermite segments, clamped outside the key range.

        Args:
            t: Sample positions.

        Returns:
            A float for scalar input, otherwise a float64 array shaped like ``t``.
        """
        scalar = np.ndim(t) == 0
        ts = np.asarray(t, dtype=np.float64)

        if self.times.size == 1:
            result = np.full(ts.shape, self.values[0], dtype=np.float64)
            return float(result) if scalar else result

        last_segment = self.times.size - 2
        idx = np.clip(np.searchsorted(self.times, ts, side="right") - 1, 0, last_segment)

        t0 = self.times[idx]
        t1 = self.times[idx + 1]
        dt = t1 - t0
        s = np.clip((ts - t0) / dt, 0.0, 1.0)

        s2 = s * s
        s3 = s2 * s
        h00 = 2.0 * s3 - 3.0 * s2 + 1.0
        h10 = s3 - 2.0 * s2 + s
        h01 = -2.0 * s3 + 3.0 * s2
        h11 = s3 - s2

        result = (
            h00 * self.values[idx]
            + h10 * dt * self.out_tangents[idx]
            + h01 * self.values[idx + 1]
            + h11 * dt * self.in_tangents[idx + 1]
        )
        return float(result) if scalar else result
