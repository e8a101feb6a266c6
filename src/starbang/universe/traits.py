"""Trait rolling and economy classification for generated systems."""

import math
from typing import Dict, List, Sequence

from starbang.universe.catalog import (
    ALL_TRAIT_IDS,
    DEFAULT_ECONOMY_TYPE,
    ECONOMY_TYPES,
    QUALITY_TIERS,
    STRONG_AFFINITY,
    EconomyType,
    QualityTier,
    TRAIT_REGISTRY,
    strong_affinity_traits,
)
from starbang.universe.models import GeneratedTrait
from starbang.universe.rng import RNG, pick_uniform, rand_int, weighted_pick

QUALITY_WEIGHTS: Dict[int, int] = {
    int(tier): info.rarity for tier, info in QUALITY_TIERS.items()
}

_STRONG_POOL: List[str] = strong_affinity_traits()


def roll_quality(rng: RNG) -> int:
    return weighted_pick(rng, QUALITY_WEIGHTS)


def roll_traits(rng: RNG, min_count: int = 2, max_count: int = 4) -> List[GeneratedTrait]:
    """Roll a system's traits.

    The first trait always comes from the strong-affinity pool so every
    system carries an economic signal. The rest are sampled without
    replacement from the full catalog.

    Draw order: count, first trait, its quality, then (trait, quality) pairs.
    """
    count = rand_int(rng, min_count, max_count)

    first = pick_uniform(rng, _STRONG_POOL)
    traits = [GeneratedTrait(trait_id=first, quality=roll_quality(rng))]

    remaining = [tid for tid in ALL_TRAIT_IDS if tid != first]
    while len(traits) < count and remaining:
        slot = math.floor(rng() * len(remaining))
        trait_id = remaining[slot]
        remaining[slot] = remaining[-1]
        remaining.pop()
        traits.append(GeneratedTrait(trait_id=trait_id, quality=roll_quality(rng)))
    return traits


def strong_scores(traits: Sequence[GeneratedTrait]) -> Dict[EconomyType, int]:
    """Per-archetype score: sum of quality over strong affinities only."""
    scores = {economy: 0 for economy in ECONOMY_TYPES}
    for trait in traits:
        definition = TRAIT_REGISTRY[trait.trait_id]
        for economy, value in definition.affinity.items():
            if value == STRONG_AFFINITY:
                scores[economy] += trait.quality
    return scores


def affinity_scores(traits: Sequence[GeneratedTrait]) -> Dict[EconomyType, int]:
    """Per-archetype score counting minor and strong affinities."""
    scores = {economy: 0 for economy in ECONOMY_TYPES}
    for trait in traits:
        for economy, value in TRAIT_REGISTRY[trait.trait_id].affinity.items():
            scores[economy] += value * trait.quality
    return scores


def derive_economy_type(rng: RNG, traits: Sequence[GeneratedTrait]) -> EconomyType:
    """Classify a system from its traits.

    A unique top score wins without touching the generator. Ties draw once
    and pick uniformly among the tied archetypes in declared order. A
    system with no strong affinity at all gets ``DEFAULT_ECONOMY_TYPE``.
    """
    scores = strong_scores(traits)
    best = max(scores.values())
    if best <= 0:
        return DEFAULT_ECONOMY_TYPE

    tied = [economy for economy in ECONOMY_TYPES if scores[economy] == best]
    if len(tied) == 1:
        return tied[0]
    return pick_uniform(rng, tied)


def quality_label(quality: int) -> str:
    return QUALITY_TIERS[QualityTier(quality)].label
