"""
Generate a deterministic universe of regions, systems and fuel-cost links.

Pipeline (generator draw order is fixed and covered by tests):
1. Region centers: rejection sampling, jittered-grid fallback, governments
2. Blue-noise (Bridson) scatter of systems over the padded map
3. Nearest-center partitioning (no draws), empty-region repair (no draws)
4. Per system in index order: trait roll, then economy classification
5. Intra-region MST + random short extras
6. Inter-region gateways over the region MST + redundant borders (no draws)
7. Region coherence re-rolls (gateways exempt)
8. Starting system selection (no draws)
"""

from typing import List, Optional, Sequence

from loguru import logger

from starbang.universe.catalog import REGION_NAMES, EconomyType
from starbang.universe.coherence import enforce_region_coherence
from starbang.universe.connectivity import (
    build_gateway_connections,
    build_intra_region_connections,
    check_connectivity,
)
from starbang.universe.models import (
    GeneratedRegion,
    GeneratedSystem,
    GeneratedUniverse,
    GenerationStats,
)
from starbang.universe.params import ConfigurationError, GenerationParams
from starbang.universe.placement import (
    assign_regions,
    bridson_sample,
    distance,
    generate_regions,
    repair_empty_regions,
)
from starbang.universe.rng import RNG, Mulberry32
from starbang.universe.traits import derive_economy_type, roll_traits


def generate_systems(
    rng: RNG,
    regions: Sequence[GeneratedRegion],
    params: GenerationParams,
    stats: Optional[GenerationStats] = None,
) -> List[GeneratedSystem]:
    """Scatter systems, assign them to regions and roll their traits.

    Systems are numbered in scatter order; names use a per-region counter.

    Raises:
        ConfigurationError: If the map saturates with fewer systems than
            there are regions, so some region could never be populated.
    """
    points = bridson_sample(
        rng,
        params.map_size,
        params.map_size,
        params.poisson_min_distance,
        params.poisson_k_candidates,
        params.padding,
        params.total_systems,
    )
    if len(points) < params.total_systems:
        logger.info(
            f"Blue-noise scatter saturated at {len(points)} of {params.total_systems} systems"
        )
    if len(points) < len(regions):
        raise ConfigurationError(
            f"Map holds only {len(points)} systems at poisson_min_distance "
            f"{params.poisson_min_distance}; need at least one per region ({len(regions)})"
        )

    assignments = assign_regions(points, regions)
    moved = repair_empty_regions(points, assignments, regions)
    if stats is not None:
        stats.empty_region_repairs = moved

    counters = [0] * len(regions)
    systems: List[GeneratedSystem] = []
    for index, ((x, y), region_index) in enumerate(zip(points, assignments)):
        counters[region_index] += 1
        traits = roll_traits(rng, params.trait_count_min, params.trait_count_max)
        systems.append(
            GeneratedSystem(
                index=index,
                name=f"{regions[region_index].name}-{counters[region_index]}",
                region_index=region_index,
                x=x,
                y=y,
                traits=traits,
                economy_type=derive_economy_type(rng, traits),
            )
        )
    return systems


def select_starting_system(
    regions: Sequence[GeneratedRegion],
    systems: Sequence[GeneratedSystem],
    map_size: float,
) -> int:
    """Pick the player's first system.

    The region nearest the map center wins; inside it a core system nearest
    the region center is preferred, otherwise any system nearest the center.
    """
    middle = (map_size / 2, map_size / 2)
    home = min(regions, key=lambda r: (distance(r.center, middle), r.index))
    members = [s for s in systems if s.region_index == home.index]
    if not members:
        return 0

    cores = [s for s in members if s.economy_type == EconomyType.CORE]
    pool = cores or members
    chosen = min(pool, key=lambda s: (distance(s.position, home.center), s.index))
    return chosen.index


def generate_universe(
    params: Optional[GenerationParams] = None,
    region_names: Sequence[str] = REGION_NAMES,
) -> GeneratedUniverse:
    """Build a complete universe from ``params.seed``.

    Same parameters always produce an identical result.

    Raises:
        ConfigurationError: If the map is too small for the region count.
    """
    params = params or GenerationParams()
    rng = Mulberry32(params.seed)
    stats = GenerationStats()

    regions, stats.placement_fallbacks = generate_regions(rng, params, region_names)
    logger.info(f"Placed {len(regions)} regions ({stats.placement_fallbacks} on grid fallback)")

    systems = generate_systems(rng, regions, params, stats)
    logger.info(f"Scattered {len(systems)} systems")

    connections, stats.avg_intra_edge_distance = build_intra_region_connections(
        rng, systems, len(regions), params
    )
    connections.extend(
        build_gateway_connections(systems, regions, params, stats.avg_intra_edge_distance)
    )
    if not check_connectivity(systems, connections):
        logger.warning("Connection graph is not strongly connected")
    gateway_count = sum(1 for s in systems if s.is_gateway)
    logger.info(
        f"Built {len(connections)} connections "
        f"({gateway_count} gateway systems, avg intra edge {stats.avg_intra_edge_distance:.1f})"
    )

    stats.coherence_rerolls = enforce_region_coherence(
        rng, systems, len(regions), params.coherence_threshold
    )
    logger.info(f"Coherence pass re-rolled {stats.coherence_rerolls} system(s)")

    start = select_starting_system(regions, systems, params.map_size)
    if systems:
        logger.info(f"Starting system: {systems[start].name} (index {start})")

    return GeneratedUniverse(
        seed=params.seed,
        regions=regions,
        systems=systems,
        connections=connections,
        starting_system_index=start,
        stats=stats,
    )


def economy_shares(universe: GeneratedUniverse) -> dict:
    """Fraction of systems per archetype (every archetype present as a key)."""
    total = len(universe.systems) or 1
    shares = {e: 0.0 for e in EconomyType}
    for system in universe.systems:
        shares[system.economy_type] += 1
    return {e: n / total for e, n in shares.items()}


def quality_shares(universe: GeneratedUniverse) -> dict:
    counts = {1: 0, 2: 0, 3: 0}
    for system in universe.systems:
        for trait in system.traits:
            counts[trait.quality] += 1
    total = sum(counts.values()) or 1
    return {q: n / total for q, n in counts.items()}


def region_radius(universe: GeneratedUniverse, region_index: int) -> float:
    """Distance from a region center to its farthest member system."""
    region = universe.regions[region_index]
    members = universe.systems_in_region(region_index)
    return max((distance(s.position, region.center) for s in members), default=0.0)

