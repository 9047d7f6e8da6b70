"""Procedural island terrain package.

This package shapes noise into an island height map with a falloff mask and
a remap curve, then detects enclosed low regions as lake candidates.
"""

from .config import HeightMapConfig, LakeConfig, MeshConfig, NoiseConfig, TerrainConfig
from .curve import CurveSnapshot, HeightCurve, Keyframe
from .falloff import generate_falloff_mask
from .generator import (
    IslandResult,
    OceanPlane,
    generate_and_save_island,
    generate_height_map,
    generate_island,
)
from .heightmap import HeightMap, MeshBuilder, synthesize_height_map
from .lakes import MAX_LAKE_CELLS, WaterBody, detect_water_bodies
from .noise import LatticeNoiseProvider, NoiseProvider
from .persistence import load_island, save_island
from .validation import ValidationResult, validate_island

__all__ = [
    "CurveSnapshot",
    "HeightCurve",
    "HeightMap",
    "HeightMapConfig",
    "IslandResult",
    "Keyframe",
    "LakeConfig",
    "LatticeNoiseProvider",
    "MAX_LAKE_CELLS",
    "MeshBuilder",
    "MeshConfig",
    "NoiseConfig",
    "NoiseProvider",
    "OceanPlane",
    "TerrainConfig",
    "ValidationResult",
    "WaterBody",
    "detect_water_bodies",
    "generate_and_save_island",
    "generate_falloff_mask",
    "generate_height_map",
    "generate_island",
    "load_island",
    "save_island",
    "synthesize_height_map",
    "validate_island",
]
