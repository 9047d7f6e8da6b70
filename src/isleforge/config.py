"""Island configuration loading from TOML files."""

import tomllib
from pathlib import Path

from .terrain.config import TerrainConfig


def load_config(config_path: Path) -> TerrainConfig:
    """Load an island configuration from a TOML file.

    Tables map onto the nested settings models (``[height_map]``,
    ``[height_map.noise]``, ``[mesh]``, ``[lakes]``, ``[ocean]``); anything
    left out keeps its default.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the TOML is malformed.
        pydantic.ValidationError: If values have the wrong types.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Resolve a preset name or an explicit path to a config file.

    Names containing a path separator or ending in ``.toml`` are taken as
    paths. Anything else is looked up in ``configs/``, first with a
    ``.toml`` suffix and then verbatim.

    Raises:
        FileNotFoundError: If nothing matches.
    """
    explicit = "/" in name or name.endswith(".toml")
    if explicit:
        candidates = [Path(name)]
    else:
        configs_dir = _configs_dir()
        candidates = [configs_dir / f"{name}.toml", configs_dir / name]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    if explicit:
        raise FileNotFoundError(f"Config file not found: {name}")
    raise FileNotFoundError(
        f"No preset named '{name}' in {_configs_dir()} (have: {', '.join(list_configs())})"
    )


def list_configs() -> list[str]:
    """Names of the presets shipped in ``configs/``."""
    configs_dir = _configs_dir()
    if not configs_dir.is_dir():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
