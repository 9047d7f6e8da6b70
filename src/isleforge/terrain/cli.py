"""Command-line interface for island generation."""

import argparse
import logging
import time
from pathlib import Path

import structlog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for island generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural island height map with lakes"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a TOML config in configs/ (default: built-in defaults)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Noise seed (overrides config)"
    )
    parser.add_argument(
        "--water-level",
        type=float,
        default=None,
        help="Lake detection water level (overrides config)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="saves/island.npz",
        help="Output path (default: saves/island.npz)",
    )
    parser.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug images (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from ..config import find_config, load_config
    from .config import TerrainConfig
    from .generator import generate_and_save_island
    from .validation import validate_island

    config = load_config(find_config(args.config)) if args.config else TerrainConfig()

    height_map_cfg = config.height_map
    if args.seed is not None:
        noise_cfg = height_map_cfg.noise.model_copy(update={"seed": args.seed})
        height_map_cfg = height_map_cfg.model_copy(update={"noise": noise_cfg})
    lakes_cfg = config.lakes
    if args.water_level is not None:
        lakes_cfg = lakes_cfg.model_copy(update={"water_level": args.water_level})
    config = config.model_copy(
        update={
            "height_map": height_map_cfg,
            "lakes": lakes_cfg,
            "debug_output_dir": args.debug_images or config.debug_output_dir,
        }
    )

    output_path = Path(args.output)

    size = config.mesh.num_verts_per_line if config.mesh else 0
    print(f"Generating {size}x{size} island with seed {config.height_map.noise.seed}")
    print(f"Output: {output_path}")
    print()

    start_time = time.time()
    result = generate_and_save_island(config, output_path)
    gen_time = time.time() - start_time

    validation = validate_island(
        result.height_map,
        result.water_bodies,
        config.lakes.water_level,
        result.world_size,
    )

    print()
    print(f"Generation complete in {gen_time:.2f}s")
    print(
        f"Height range: {result.height_map.min_value:.3f} .. "
        f"{result.height_map.max_value:.3f}"
    )
    print(f"Lakes: {len(result.water_bodies)}")
    for i, body in enumerate(result.water_bodies, start=1):
        print(f"  Lake_{i}: center {body.center}, size {body.size}, cells {body.cell_count}")
    print(f"Validation: {'passed' if validation.passed else 'FAILED'}")
    print(f"Saved to {result.saved_path}")

    return 0 if validation.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
