"""Custom exceptions for island terrain generation."""


class TerrainError(Exception):
    """Base exception for terrain generation errors."""

    pass


class InvalidArgumentError(TerrainError, ValueError):
    """Raised when a grid size, stride or similar argument is out of range."""

    pass


class DimensionMismatchError(TerrainError, ValueError):
    """Raised when two grids that must share a shape do not."""

    pass


class MissingDependencyError(TerrainError):
    """Raised when a required collaborator or settings object is absent."""

    pass
