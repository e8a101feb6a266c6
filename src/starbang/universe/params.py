"""Generation parameters and their defaults."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

# ===================== Tunables / Defaults =====================

# --- Layout ---
DEFAULT_SEED = 42
REGION_COUNT = 24
TOTAL_SYSTEMS = 600
MAP_SIZE = 7000
MAP_PADDING = 0.10  # Fraction of map size kept clear on each edge

# --- Blue-noise scatter ---
POISSON_MIN_DISTANCE = 180
POISSON_K_CANDIDATES = 30

# --- Regions ---
REGION_MIN_DISTANCE = 800
MAX_PLACEMENT_ATTEMPTS = 500

# --- Connectivity ---
INTRA_REGION_EXTRA_EDGES = 0.5  # Extra edges as a fraction of MST edges
INTRA_REGION_BASE_FUEL = 8
GATEWAY_FUEL_MULTIPLIER = 2.5
GATEWAYS_PER_BORDER = 3
REGION_EXTRA_BORDERS = 2  # Shortest non-MST region pairs added for redundancy

# --- Traits & economy ---
TRAIT_COUNT_MIN = 2
TRAIT_COUNT_MAX = 4
COHERENCE_THRESHOLD = 0.6


class ConfigurationError(ValueError):
    """Raised when parameters are out of range at configuration-load time."""
    pass


@dataclass
class GenerationParams:
    """Everything ``generate_universe`` needs besides the name pool."""
    seed: int = DEFAULT_SEED
    region_count: int = REGION_COUNT
    total_systems: int = TOTAL_SYSTEMS
    map_size: float = MAP_SIZE
    map_padding: float = MAP_PADDING
    poisson_min_distance: float = POISSON_MIN_DISTANCE
    poisson_k_candidates: int = POISSON_K_CANDIDATES
    region_min_distance: float = REGION_MIN_DISTANCE
    extra_edge_fraction: float = INTRA_REGION_EXTRA_EDGES
    gateway_fuel_multiplier: float = GATEWAY_FUEL_MULTIPLIER
    gateways_per_border: int = GATEWAYS_PER_BORDER
    intra_region_base_fuel: float = INTRA_REGION_BASE_FUEL
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    region_extra_borders: int = REGION_EXTRA_BORDERS
    trait_count_min: int = TRAIT_COUNT_MIN
    trait_count_max: int = TRAIT_COUNT_MAX
    coherence_threshold: float = COHERENCE_THRESHOLD

    @property
    def padding(self) -> float:
        return self.map_size * self.map_padding

    def validate(self) -> "GenerationParams":
        """Reject out-of-range settings.

        Raises:
            ConfigurationError: On the first invalid field found.
        """
        if self.region_count <= 0:
            raise ConfigurationError("region_count must be a positive integer")
        if self.total_systems < self.region_count:
            raise ConfigurationError(
                f"total_systems ({self.total_systems}) must be at least "
                f"region_count ({self.region_count})"
            )
        if self.map_size <= 0:
            raise ConfigurationError("map_size must be positive")
        if not 0 <= self.map_padding < 0.5:
            raise ConfigurationError("map_padding must be in [0, 0.5)")
        if self.poisson_min_distance <= 0:
            raise ConfigurationError("poisson_min_distance must be positive")
        if self.poisson_k_candidates <= 0:
            raise ConfigurationError("poisson_k_candidates must be positive")
        if self.max_placement_attempts < 0:
            raise ConfigurationError("max_placement_attempts must be >= 0")
        if self.extra_edge_fraction < 0:
            raise ConfigurationError("extra_edge_fraction must be >= 0")
        if self.gateways_per_border <= 0:
            raise ConfigurationError("gateways_per_border must be positive")
        if self.intra_region_base_fuel <= 0 or self.gateway_fuel_multiplier <= 0:
            raise ConfigurationError("fuel settings must be positive")
        if not 1 <= self.trait_count_min <= self.trait_count_max:
            raise ConfigurationError(
                "trait count range must satisfy 1 <= trait_count_min <= trait_count_max"
            )
        if not 0 < self.coherence_threshold <= 1:
            raise ConfigurationError("coherence_threshold must be in (0, 1]")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerationParams":
        """Build from a plain mapping (TOML table, JSON), rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown generation setting(s): {', '.join(sorted(unknown))}"
            )
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
