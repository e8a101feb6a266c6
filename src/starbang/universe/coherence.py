"""Region coherence: nudge regions toward a dominant economy without monotony."""

import math
from typing import Dict, List, Sequence

from loguru import logger

from starbang.universe.catalog import ECONOMY_TYPES, EconomyType
from starbang.universe.models import GeneratedSystem
from starbang.universe.rng import RNG, pick_uniform, weighted_pick
from starbang.universe.traits import affinity_scores, strong_scores


def economy_histogram(systems: Sequence[GeneratedSystem]) -> Dict[EconomyType, int]:
    counts = {economy: 0 for economy in ECONOMY_TYPES}
    for system in systems:
        counts[system.economy_type] += 1
    return {economy: n for economy, n in counts.items() if n}


def dominant_economy(counts: Dict[EconomyType, int]) -> EconomyType:
    """Most common archetype; ties resolve to declared order."""
    best = max(counts.values())
    return next(e for e in ECONOMY_TYPES if counts.get(e, 0) == best)


def _reroll_supported(rng: RNG, system: GeneratedSystem) -> EconomyType:
    """Redraw among archetypes the system's traits strongly support."""
    scores = {e: s for e, s in strong_scores(system.traits).items() if s > 0}
    if not scores:
        return system.economy_type
    return weighted_pick(rng, scores)


def _reroll_different(rng: RNG, system: GeneratedSystem) -> EconomyType:
    """Redraw to any archetype other than the current one."""
    current = system.economy_type
    scores = {
        e: s for e, s in affinity_scores(system.traits).items()
        if s > 0 and e != current
    }
    if scores:
        return weighted_pick(rng, scores)
    others = [e for e in ECONOMY_TYPES if e != current]
    return pick_uniform(rng, others)


def affinity_gap(system: GeneratedSystem) -> int:
    """Margin between the top two affinity scores; small means borderline."""
    top = sorted(affinity_scores(system.traits).values(), reverse=True)
    return top[0] - top[1]


def _coherence_candidates(
    members: List[GeneratedSystem], dominant: EconomyType
) -> List[GeneratedSystem]:
    candidates = [
        s for s in members if not s.is_gateway and s.economy_type != dominant
    ]
    # Most borderline first; among equals, systems that can become dominant.
    candidates.sort(
        key=lambda s: (
            affinity_gap(s),
            strong_scores(s.traits)[dominant] <= 0,
            s.index,
        )
    )
    return candidates


def enforce_region_coherence(
    rng: RNG,
    systems: Sequence[GeneratedSystem],
    region_count: int,
    threshold: float = 0.6,
) -> int:
    """Re-roll economy types in place; traits are never touched.

    Regions are visited in index order. A region whose dominant archetype
    covers less than ``ceil(n * threshold)`` systems re-rolls at most the
    shortfall in non-gateway, non-dominant systems, most borderline (see
    ``affinity_gap``) first. A region of two or more systems that share a
    single archetype re-rolls one non-gateway system to something else.

    Returns:
        Number of re-rolls performed.
    """
    rerolls = 0
    for region_index in range(region_count):
        members = [s for s in systems if s.region_index == region_index]
        if not members:
            continue

        counts = economy_histogram(members)
        dominant = dominant_economy(counts)
        needed = math.ceil(len(members) * threshold)

        if counts[dominant] < needed:
            shortfall = needed - counts[dominant]
            for system in _coherence_candidates(members, dominant)[:shortfall]:
                system.economy_type = _reroll_supported(rng, system)
                rerolls += 1
                if system.economy_type == dominant:
                    counts[dominant] += 1
            if counts[dominant] < needed:
                logger.debug(
                    f"Region {region_index}: coherence target {needed} not reached "
                    f"({counts[dominant]}/{len(members)} {dominant.value})"
                )

        if len(members) >= 2 and len({s.economy_type for s in members}) == 1:
            target = next((s for s in members if not s.is_gateway), None)
            if target is None:
                logger.warning(
                    f"Region {region_index} is monotonous but has no non-gateway systems"
                )
                continue
            target.economy_type = _reroll_different(rng, target)
            rerolls += 1

    return rerolls
