"""Terrain generation configuration models."""

from pydantic import BaseModel, Field, field_validator

from ..types import FalloffShape, NormalizeMode, Vector2
from .curve import HeightCurve


class NoiseConfig(BaseModel, frozen=True):
    """Parameters for the default lattice noise provider."""

    seed: int = Field(default=0, description="Random seed for reproducibility")
    scale: float = Field(default=50.0, description="Feature size in grid cells")
    octaves: int = Field(default=6, description="Number of octaves for fBm")
    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    offset: Vector2 = Field(default_factory=Vector2, description="Noise-space offset")
    normalize_mode: NormalizeMode = Field(
        default=NormalizeMode.GLOBAL,
        description="LOCAL stretches each map to [0, 1]; GLOBAL keeps seams consistent",
    )

    @field_validator("scale")
    @classmethod
    def _min_scale(cls, v: float) -> float:
        return max(v, 0.01)

    @field_validator("octaves")
    @classmethod
    def _min_octaves(cls, v: int) -> int:
        return max(v, 1)

    @field_validator("lacunarity")
    @classmethod
    def _min_lacunarity(cls, v: float) -> float:
        return max(v, 1.0)

    @field_validator("persistence")
    @classmethod
    def _clamp_persistence(cls, v: float) -> float:
        return min(max(v, 0.0), 1.0)


class HeightMapConfig(BaseModel, frozen=True):
    """Height map synthesis parameters.

    Out-of-range falloff values are clamped rather than rejected.
    """

    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    use_falloff: bool = Field(default=True, description="Shape the noise into an island")
    falloff_strength: float = Field(
        default=3.0, description="Edge steepness (1-10). Higher = sharper coast"
    )
    falloff_size: float = Field(
        default=2.2, description="Island size control (0.5-5). Moves the coast to d = b / (1 + b)"
    )
    falloff_intensity: float = Field(
        default=1.0, description="How much of the mask is subtracted (0-1)"
    )
    falloff_shape: FalloffShape = Field(default=FalloffShape.CIRCULAR)
    height_multiplier: float = Field(default=30.0, description="World-space height scale")
    height_curve: HeightCurve = Field(default_factory=HeightCurve.linear)

    @field_validator("falloff_strength")
    @classmethod
    def _clamp_strength(cls, v: float) -> float:
        return min(max(v, 1.0), 10.0)

    @field_validator("falloff_size")
    @classmethod
    def _clamp_size(cls, v: float) -> float:
        return min(max(v, 0.5), 5.0)

    @field_validator("falloff_intensity")
    @classmethod
    def _clamp_intensity(cls, v: float) -> float:
        return min(max(v, 0.0), 1.0)

    @property
    def min_height(self) -> float:
        return self.height_multiplier * self.height_curve.evaluate(0.0)

    @property
    def max_height(self) -> float:
        return self.height_multiplier * self.height_curve.evaluate(1.0)


class MeshConfig(BaseModel, frozen=True):
    """Mesh sizing shared with the external mesh builder."""

    num_verts_per_line: int = Field(
        default=241, ge=4, description="Height map resolution (cells per side)"
    )
    mesh_scale: float = Field(default=2.5, gt=0, description="World units per cell")

    @property
    def mesh_world_size(self) -> float:
        # The outermost ring and one border vertex are skirt, not surface.
        return (self.num_verts_per_line - 3) * self.mesh_scale


class LakeConfig(BaseModel, frozen=True):
    """Lake detection parameters."""

    enabled: bool = Field(default=True, description="Run lake detection")
    water_level: float = Field(default=0.0, description="Cells strictly below are water")
    min_lake_size: float = Field(default=100.0, description="Minimum lake area in m^2")
    grid_resolution: int = Field(default=10, description="Check every N cells")
    lake_depth: float = Field(default=5.0, description="Depth handed to the water volume")


class OceanConfig(BaseModel, frozen=True):
    """Ocean plane parameters."""

    enabled: bool = Field(default=True)
    size: float = Field(default=2000.0, gt=0, description="Ocean plane side length")


class TerrainConfig(BaseModel, frozen=True):
    """Complete island generation configuration."""

    height_map: HeightMapConfig = Field(default_factory=HeightMapConfig)
    mesh: MeshConfig | None = Field(default_factory=MeshConfig)
    lakes: LakeConfig = Field(default_factory=LakeConfig)
    ocean: OceanConfig = Field(default_factory=OceanConfig)
    sample_center: Vector2 = Field(default_factory=Vector2)

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )
