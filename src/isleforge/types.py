"""Core types shared by the terrain pipeline."""

from enum import Enum

from pydantic import BaseModel


class FalloffShape(str, Enum):
    """Distance metric used to build a falloff mask."""

    SQUARE = "square"  # max(|x|, |y|)
    CIRCULAR = "circular"  # sqrt(x^2 + y^2)


class NormalizeMode(str, Enum):
    """How sampled noise is mapped into [0, 1]."""

    LOCAL = "local"
    GLOBAL = "global"


class Vector2(BaseModel, frozen=True):
    """Immutable 2D vector (world X/Z plane or a noise-space offset)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(x=self.x + other.x, y=self.y + other.y)

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


class Vector3(BaseModel, frozen=True):
    """Immutable world-space point. Y is up."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"
