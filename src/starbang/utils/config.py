import os
import tomllib
from pathlib import Path
from typing import Optional, Tuple

from starbang.economy.constants import EquilibriumTarget
from starbang.economy.tick import EconomyTickParams, MarketRole
from starbang.universe.params import DEFAULT_SEED, ConfigurationError, GenerationParams


def get_world_data_path(ensure_exists: bool = False) -> Path:
    """Get world-data path (run from repo root or set WORLD_DATA_DIR).

    Args:
        ensure_exists: If True, raises error if directory doesn't exist.
                      If False, returns path even if it doesn't exist (for creation).
    """
    env_path = os.getenv("WORLD_DATA_DIR")
    if env_path:
        return Path(env_path)

    world_data = Path.cwd() / "world-data"

    if ensure_exists and not world_data.exists():
        raise RuntimeError(
            f"world-data not found at {world_data}. "
            f"Please run from repo root or set WORLD_DATA_DIR environment variable."
        )

    return world_data


def get_default_seed() -> int:
    """Seed from STARBANG_SEED, falling back to the built-in default."""
    raw = os.getenv("STARBANG_SEED")
    if not raw:
        return DEFAULT_SEED
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"STARBANG_SEED must be an integer, got {raw!r}") from exc


def _tick_params_from_table(table: dict) -> EconomyTickParams:
    data = dict(table)
    targets = data.pop("equilibrium", {})
    params = EconomyTickParams(**data)
    for role_name, target in targets.items():
        try:
            role = MarketRole(role_name)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown equilibrium role: {role_name}") from exc
        params.equilibrium[role] = EquilibriumTarget(
            supply=target["supply"], demand=target["demand"]
        )
    return params


def load_config(path: Optional[Path] = None) -> Tuple[GenerationParams, EconomyTickParams]:
    """Load ``[generation]`` and ``[economy]`` tables from a TOML file.

    Missing file or tables fall back to defaults. Both parameter objects are
    validated before returning.

    Raises:
        ConfigurationError: If a value is out of range or a key is unknown.
    """
    generation: dict = {}
    economy: dict = {}
    if path is not None:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        generation = data.get("generation", {})
        economy = data.get("economy", {})

    if "seed" not in generation:
        generation = {**generation, "seed": get_default_seed()}

    gen_params = GenerationParams.from_mapping(generation).validate()
    try:
        tick_params = _tick_params_from_table(economy)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid [economy] table: {exc}") from exc
    return gen_params, tick_params.validate()
