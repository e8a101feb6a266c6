#!/usr/bin/env python3
"""
Generate a seeded universe of regions, star systems and fuel-cost links.

Core techniques and features:
- Region centers by rejection sampling with a jittered-grid fallback
- Blue-noise (Bridson) scatter of systems, assigned to the nearest region
- 2-4 traits per system; economy archetype derived from trait affinities
- Per-region Euclidean MST plus short extra edges for route variety
- Gateways on region borders picked from the closest cross-region pairs
- Coherence pass nudging regions toward a dominant economy

Outputs:
  - world-data/universe.json

Usage:
  python universe_bang.py [seed] [--config starbang.toml] [--force]
"""
import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from starbang.universe.generator import economy_shares, generate_universe
from starbang.universe.params import ConfigurationError
from starbang.utils.config import get_world_data_path, load_config


def write_universe(universe, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    universe_path = output_dir / "universe.json"
    with open(universe_path, "w") as f:
        json.dump(universe.to_dict(), f, indent=2)
    return universe_path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a seeded universe with regions, traits and gateways"
    )
    parser.add_argument("seed", type=int, nargs="?", help="Random seed (optional)")
    parser.add_argument("--config", type=Path, help="TOML file with [generation] settings")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force regeneration even if world data already exists"
    )

    args = parser.parse_args(argv)

    try:
        params, _ = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    if args.seed is not None:
        params.seed = args.seed

    output_dir = get_world_data_path(ensure_exists=False)
    universe_path = output_dir / "universe.json"

    if universe_path.exists():
        if not args.force:
            logger.info(f"World data already exists at {output_dir}")
            logger.info("Use --force to regenerate and overwrite existing data")
            sys.exit(0)
        else:
            logger.info(f"Forcing regeneration of world data at {output_dir}")

    logger.info(f"Generating universe: {params.region_count} regions, {params.total_systems} systems")
    logger.info(f"Random seed: {params.seed}")

    try:
        universe = generate_universe(params)
    except ConfigurationError as e:
        logger.error(f"Cannot generate universe: {e}")
        sys.exit(1)
    write_universe(universe, output_dir)

    shares = economy_shares(universe)
    logger.info(f"Generated universe with {len(universe.systems)} systems")
    logger.info(
        "Economy mix: {}",
        ", ".join(f"{e.value} {share:.0%}" for e, share in shares.items()),
    )
    logger.info(f"Regions: {', '.join(r.name for r in universe.regions)}")
    logger.info(f"File created: {universe_path}")


if __name__ == "__main__":
    main()
