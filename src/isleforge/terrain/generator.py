"""Main island generation orchestration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import structlog
from numpy.typing import NDArray

from ..exceptions import MissingDependencyError, TerrainError
from ..types import Vector2, Vector3
from .config import MeshConfig, TerrainConfig
from .falloff import generate_falloff_mask
from .heightmap import HeightMap, MeshBuilder, synthesize_height_map
from .lakes import WaterBody, detect_water_bodies
from .noise import LatticeNoiseProvider, NoiseProvider
from .persistence import save_island

logger = structlog.get_logger()


@dataclass(frozen=True)
class OceanPlane:
    """Flat ocean quad centred on the island at the water level."""

    center: Vector3
    size: float


class IslandResult:
    """Result of island generation with intermediate data."""

    def __init__(
        self,
        height_map: HeightMap,
        falloff: NDArray[np.float32] | None,
        water_bodies: list[WaterBody],
        ocean: OceanPlane | None,
        config: TerrainConfig,
        mesh: Any = None,
    ):
        self.height_map = height_map
        self.falloff = falloff
        self.water_bodies = water_bodies
        self.ocean = ocean
        self.config = config
        self.mesh = mesh
        self.saved_path: Path | None = None

    @property
    def world_size(self) -> float:
        if self.config.mesh is None:
            raise MissingDependencyError("mesh settings are missing; world size unknown")
        return self.config.mesh.mesh_world_size


def validate_settings(
    config: TerrainConfig | None, noise_provider: NoiseProvider | None
) -> MeshConfig:
    """Check that every collaborator the terrain step needs is present.

    Returns:
        The mesh settings, which size the grid.

    Raises:
        MissingDependencyError: Naming the first missing collaborator.
    """
    if config is None:
        raise MissingDependencyError("terrain settings are missing")
    if config.mesh is None:
        raise MissingDependencyError("mesh settings are missing")
    if noise_provider is None:
        raise MissingDependencyError("noise provider is missing")
    return config.mesh


def generate_height_map(
    config: TerrainConfig,
    noise_provider: NoiseProvider,
    sample_center: Vector2 | None = None,
) -> tuple[HeightMap, NDArray[np.float32] | None]:
    """Sample noise and shape it into a height map.

    Args:
        config: Island configuration; ``config.mesh`` sets the grid size.
        noise_provider: Source of raw noise.
        sample_center: Overrides ``config.sample_center``.

    Returns:
        Tuple of (HeightMap, falloff mask or None when falloff is disabled).
    """
    mesh = validate_settings(config, noise_provider)
    settings = config.height_map
    size = mesh.num_verts_per_line
    center = sample_center if sample_center is not None else config.sample_center

    noise = noise_provider.sample(size, size, settings.noise, center)

    falloff = None
    if settings.use_falloff:
        falloff = generate_falloff_mask(
            size,
            settings.falloff_strength,
            settings.falloff_size,
            settings.falloff_shape,
        )

    height_map = synthesize_height_map(noise, falloff, settings)
    return height_map, falloff


def generate_lakes(height_map: HeightMap, config: TerrainConfig) -> list[WaterBody]:
    """Run lake detection with the configured water level and stride."""
    if config.mesh is None:
        raise MissingDependencyError("mesh settings are missing; world size unknown")
    lakes = config.lakes
    return detect_water_bodies(
        height_map,
        water_level=lakes.water_level,
        min_area=lakes.min_lake_size,
        stride=lakes.grid_resolution,
        world_size=config.mesh.mesh_world_size,
        depth=lakes.lake_depth,
    )


def generate_island(
    config: TerrainConfig,
    noise_provider: NoiseProvider | None = None,
    mesh_builder: MeshBuilder | None = None,
    level_of_detail: int = 0,
) -> IslandResult:
    """Generate the island height map, its lakes and the ocean plane.

    A failure during lake detection is logged and leaves the island without
    lakes; missing terrain collaborators abort the whole run.

    Args:
        config: Island generation configuration.
        noise_provider: Raw noise source; defaults to ``LatticeNoiseProvider``.
        mesh_builder: Optional mesh builder handed the finished grid.
        level_of_detail: Level of detail passed to ``mesh_builder``.

    Returns:
        IslandResult.

    Raises:
        MissingDependencyError: If terrain or mesh settings are absent.
    """
    if noise_provider is None:
        noise_provider = LatticeNoiseProvider()
    mesh_config = validate_settings(config, noise_provider)

    logger.info(
        "island_generation_started",
        size=mesh_config.num_verts_per_line,
        seed=config.height_map.noise.seed,
    )

    height_map, falloff = generate_height_map(config, noise_provider)

    mesh = None
    if mesh_builder is not None:
        mesh = mesh_builder.build(height_map.values, mesh_config, level_of_detail)
        logger.debug("mesh_built", level_of_detail=level_of_detail)

    water_bodies: list[WaterBody] = []
    if config.lakes.enabled:
        try:
            water_bodies = generate_lakes(height_map, config)
        except TerrainError as exc:
            logger.error("lake_detection_skipped", reason=str(exc))

    ocean = None
    if config.ocean.enabled:
        ocean = OceanPlane(
            center=Vector3(x=0.0, y=config.lakes.water_level, z=0.0),
            size=config.ocean.size,
        )

    logger.info(
        "island_generated",
        min_height=height_map.min_value,
        max_height=height_map.max_value,
        lakes=len(water_bodies),
    )

    if config.debug_output_dir:
        arrays = {"height_map": height_map.values}
        if falloff is not None:
            arrays["falloff"] = falloff
        _dump_debug_images(Path(config.debug_output_dir), **arrays)

    return IslandResult(
        height_map=height_map,
        falloff=falloff,
        water_bodies=water_bodies,
        ocean=ocean,
        config=config,
        mesh=mesh,
    )


def generate_and_save_island(
    config: TerrainConfig,
    save_path: Path,
    noise_provider: NoiseProvider | None = None,
) -> IslandResult:
    """Generate an island and save it to ``save_path``.

    The written path, with ``.npz`` appended if it was missing, is stored on
    ``result.saved_path``.
    """
    result = generate_island(config, noise_provider)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    result.saved_path = save_island(
        save_path, result.height_map, result.water_bodies, config, result.falloff
    )
    return result


def _dump_debug_images(output_dir: Path, **arrays: NDArray) -> None:
    """Save grids as images for debugging.

    Args:
        output_dir: Directory to save images.
        **arrays: Named ``[x, y]`` grids to save.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.warning("debug_images_skipped", reason="matplotlib not available")
        return

    output_dir.mkdir(parents=True, exist_ok=True)

    for name, arr in arrays.items():
        fig, ax = plt.subplots(figsize=(10, 10))
        cmap = "gray" if name == "falloff" else "terrain"
        # imshow wants [row, col] = [y, x]
        ax.imshow(arr.T, cmap=cmap, origin="lower")
        ax.set_title(name)
        ax.axis("off")

        fig.savefig(output_dir / f"{name}.png", dpi=150, bbox_inches="tight")
        plt.close(fig)

    logger.info("debug_images_saved", output_dir=str(output_dir))
