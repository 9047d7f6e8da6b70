"""Tests for height remap curves."""

import numpy as np
import pytest
from pydantic import ValidationError

from isleforge.terrain.curve import CurveSnapshot, HeightCurve, Keyframe


class TestHeightCurve:
    """Tests for curve construction and evaluation."""

    def test_linear_is_identity(self) -> None:
        """The default linear curve returns its input."""
        t = np.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(HeightCurve.linear().evaluate(t), t, atol=1e-12)

    def test_default_is_identity(self) -> None:
        """A curve built without keys behaves like linear()."""
        np.testing.assert_allclose(HeightCurve().evaluate([0.2, 0.7]), [0.2, 0.7])

    def test_scalar_input_returns_float(self) -> None:
        """Scalars in, floats out."""
        value = HeightCurve.linear().evaluate(0.25)
        assert isinstance(value, float)
        assert value == pytest.approx(0.25)

    def test_array_shape_preserved(self) -> None:
        """Array input keeps its shape."""
        t = np.full((4, 3), 0.5)
        assert HeightCurve.linear().evaluate(t).shape == (4, 3)

    def test_constant(self) -> None:
        """A single key frame gives a constant curve."""
        curve = HeightCurve.constant(-1.5)
        np.testing.assert_array_equal(curve.evaluate([0.0, 0.4, 1.0]), -1.5)

    def test_clamped_outside_key_range(self) -> None:
        """Inputs beyond the keys take the end values."""
        curve = HeightCurve.linear(0.2, 0.8)
        assert curve.evaluate(-1.0) == pytest.approx(0.2)
        assert curve.evaluate(2.0) == pytest.approx(0.8)

    def test_passes_through_keys(self) -> None:
        """Evaluating at a key time returns the key value."""
        curve = HeightCurve(
            keys=(
                Keyframe(time=0.0, value=0.0),
                Keyframe(time=0.5, value=0.2),
                Keyframe(time=1.0, value=1.0),
            )
        )
        assert curve.evaluate(0.5) == pytest.approx(0.2)

    def test_ease_in_out(self) -> None:
        """Flat tangents pull the lower half down and meet at the midpoint."""
        curve = HeightCurve.ease_in_out()
        assert curve.evaluate(0.5) == pytest.approx(0.5)
        assert curve.evaluate(0.25) == pytest.approx(0.15625)

    def test_keys_sorted(self) -> None:
        """Keys given out of order are sorted by time."""
        curve = HeightCurve(
            keys=(Keyframe(time=1.0, value=1.0), Keyframe(time=0.0, value=0.0))
        )
        assert [k.time for k in curve.keys] == [0.0, 1.0]

    def test_duplicate_times_rejected(self) -> None:
        """Two keys at the same time are invalid."""
        with pytest.raises(ValidationError):
            HeightCurve(
                keys=(Keyframe(time=0.5, value=0.0), Keyframe(time=0.5, value=1.0))
            )

    def test_empty_keys_rejected(self) -> None:
        """A curve needs at least one key."""
        with pytest.raises(ValidationError):
            HeightCurve(keys=())

    def test_frozen(self) -> None:
        """Curves cannot be mutated after construction."""
        curve = HeightCurve.linear()
        with pytest.raises(ValidationError):
            curve.keys = ()


class TestCurveSnapshot:
    """Tests for frozen curve snapshots."""

    def test_arrays_read_only(self) -> None:
        """Snapshot arrays reject writes."""
        snapshot = HeightCurve.linear().snapshot()
        assert isinstance(snapshot, CurveSnapshot)
        with pytest.raises(ValueError):
            snapshot.values[0] = 5.0

    def test_matches_curve(self) -> None:
        """A snapshot evaluates exactly like its curve."""
        curve = HeightCurve.ease_in_out()
        t = np.linspace(0.0, 1.0, 7)
        np.testing.assert_array_equal(curve.snapshot().evaluate(t), curve.evaluate(t))

    def test_equal_snapshots(self) -> None:
        """Snapshots of equal curves compare equal; different curves don't."""
        assert HeightCurve.linear().snapshot() == HeightCurve.linear().snapshot()
        assert HeightCurve.linear().snapshot() != HeightCurve.ease_in_out().snapshot()
