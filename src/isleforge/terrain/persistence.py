"""Island persistence: save and load generated height maps and lakes."""

import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog
from numpy.typing import NDArray

from ..types import Vector2, Vector3
from .config import TerrainConfig
from .heightmap import HeightMap
from .lakes import WaterBody

logger = structlog.get_logger()

FORMAT_VERSION = 1


def _water_body_to_dict(body: WaterBody) -> dict:
    return {
        "center": [body.center.x, body.center.y, body.center.z],
        "size": [body.size.x, body.size.y],
        "water_level": body.water_level,
        "cell_count": body.cell_count,
        "cells": [list(c) for c in body.cells],
        "depth": body.depth,
        "truncated": body.truncated,
    }


def _water_body_from_dict(data: dict) -> WaterBody:
    cx, cy, cz = data["center"]
    sx, sz = data["size"]
    return WaterBody(
        center=Vector3(x=cx, y=cy, z=cz),
        size=Vector2(x=sx, y=sz),
        water_level=data["water_level"],
        cell_count=data["cell_count"],
        cells=tuple((int(x), int(y)) for x, y in data["cells"]),
        depth=data.get("depth", 0.0),
        truncated=data.get("truncated", False),
    )


def save_island(
    path: Path,
    height_map: HeightMap,
    water_bodies: list[WaterBody],
    config: TerrainConfig,
    falloff: NDArray[np.float32] | None = None,
) -> Path:
    """Save a generated island to disk.

    Uses numpy's compressed .npz format.

    Args:
        path: Output path. ``.npz`` is appended when missing, as numpy does.
        height_map: Final height map.
        water_bodies: Detected lakes.
        config: Generation configuration used.
        falloff: Falloff mask, if one was applied.

    Returns:
        Path of the file actually written.
    """
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")

    metadata = {
        "version": FORMAT_VERSION,
        "size": height_map.size,
        "world_size": config.mesh.mesh_world_size if config.mesh is not None else None,
        "seed": config.height_map.noise.seed,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "config": config.model_dump(mode="json"),
    }

    arrays: dict[str, NDArray] = {
        "heights": height_map.values,
        "height_range": np.array([height_map.min_value, height_map.max_value], dtype=np.float64),
        "water_bodies": np.frombuffer(
            json.dumps([_water_body_to_dict(b) for b in water_bodies]).encode("utf-8"),
            dtype=np.uint8,
        ),
        "metadata": np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
    }
    if falloff is not None:
        arrays["falloff"] = falloff

    np.savez_compressed(path, **arrays)

    file_size = path.stat().st_size / 1024
    logger.info("island_saved", path=str(path), size_kb=round(file_size, 1))
    return path


def load_island(path: Path) -> tuple[HeightMap, list[WaterBody], dict]:
    """Load an island from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (HeightMap, list of WaterBody, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Island file not found: {path}")

    with np.load(path) as data:
        if "heights" not in data or "height_range" not in data:
            raise ValueError("Invalid island file: missing height data")

        values = np.array(data["heights"], dtype=np.float32)
        min_value, max_value = (float(v) for v in data["height_range"])

        if "water_bodies" in data:
            bodies_json = data["water_bodies"].tobytes().decode("utf-8")
            water_bodies = [_water_body_from_dict(b) for b in json.loads(bodies_json)]
        else:
            water_bodies = []

        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        else:
            metadata = {}

    values.flags.writeable = False
    height_map = HeightMap(values=values, min_value=min_value, max_value=max_value)

    logger.info(
        "island_loaded",
        path=str(path),
        size=height_map.size,
        lakes=len(water_bodies),
    )
    return height_map, water_bodies, metadata
