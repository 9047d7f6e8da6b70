"""Island heightfield synthesis and lake detection."""

from .config import find_config, list_configs, load_config
from .exceptions import (
    DimensionMismatchError,
    InvalidArgumentError,
    MissingDependencyError,
    TerrainError,
)
from .types import FalloffShape, NormalizeMode, Vector2, Vector3

__all__ = [
    # Types
    "FalloffShape",
    "NormalizeMode",
    "Vector2",
    "Vector3",
    # Config
    "load_config",
    "find_config",
    "list_configs",
    # Exceptions
    "TerrainError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "MissingDependencyError",
]
