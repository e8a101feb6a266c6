"""Tests for trait rolling and economy classification."""

import pytest

from starbang.universe.catalog import (
    DEFAULT_ECONOMY_TYPE,
    STRONG_AFFINITY,
    TRAIT_REGISTRY,
    EconomyType,
)
from starbang.universe.models import GeneratedTrait
from starbang.universe.rng import Mulberry32
from starbang.universe.traits import (
    derive_economy_type,
    quality_label,
    roll_quality,
    roll_traits,
    strong_scores,
)


def _no_draws():
    raise AssertionError("generator must not be consumed")


class TestRollTraits:
    def test_count_and_uniqueness(self):
        rng = Mulberry32(5)
        counts = set()
        for _ in range(500):
            traits = roll_traits(rng)
            counts.add(len(traits))
            ids = [t.trait_id for t in traits]
            assert len(ids) == len(set(ids))
        assert counts == {2, 3, 4}

    def test_first_trait_has_strong_affinity(self):
        rng = Mulberry32(11)
        for _ in range(500):
            first = roll_traits(rng)[0]
            affinity = TRAIT_REGISTRY[first.trait_id].affinity
            assert STRONG_AFFINITY in affinity.values()

    def test_custom_count_range(self):
        rng = Mulberry32(2)
        for _ in range(50):
            assert len(roll_traits(rng, 3, 3)) == 3

    def test_deterministic(self):
        assert roll_traits(Mulberry32(9)) == roll_traits(Mulberry32(9))

    def test_quality_rarity_split(self):
        rng = Mulberry32(21)
        rolls = [roll_quality(rng) for _ in range(10000)]
        assert rolls.count(1) / 10000 == pytest.approx(0.50, abs=0.03)
        assert rolls.count(2) / 10000 == pytest.approx(0.35, abs=0.03)
        assert rolls.count(3) / 10000 == pytest.approx(0.15, abs=0.03)


class TestDeriveEconomyType:
    def test_strong_affinities_outscore_shared_ones(self):
        # habitable_world: agricultural + core; ocean_world: agricultural only.
        traits = [GeneratedTrait("habitable_world", 2), GeneratedTrait("ocean_world", 2)]
        scores = strong_scores(traits)
        assert scores[EconomyType.AGRICULTURAL] == 4
        assert scores[EconomyType.CORE] == 2
        assert derive_economy_type(_no_draws, traits) == EconomyType.AGRICULTURAL

    def test_minor_affinity_does_not_classify(self):
        # volcanic_world: extraction 2, refinery 1 -> refinery never scores.
        traits = [GeneratedTrait("volcanic_world", 3)]
        assert strong_scores(traits)[EconomyType.REFINERY] == 0
        assert derive_economy_type(_no_draws, traits) == EconomyType.EXTRACTION

    def test_tie_consumes_exactly_one_draw(self, counting_rng):
        traits = [GeneratedTrait("habitable_world", 2)]
        low = counting_rng([0.0])
        assert derive_economy_type(low, traits) == EconomyType.AGRICULTURAL
        assert low.calls == 1

        high = counting_rng([0.99])
        assert derive_economy_type(high, traits) == EconomyType.CORE
        assert high.calls == 1

    def test_zero_traits_fall_back_to_default(self):
        assert derive_economy_type(_no_draws, []) == DEFAULT_ECONOMY_TYPE

    def test_no_strong_affinity_falls_back_to_default(self):
        traits = [GeneratedTrait("dark_nebula", 3), GeneratedTrait("frozen_world", 2)]
        assert derive_economy_type(_no_draws, traits) == DEFAULT_ECONOMY_TYPE

    def test_quality_weights_the_score(self):
        traits = [GeneratedTrait("asteroid_belt", 1), GeneratedTrait("exotic_matter_traces", 3)]
        assert derive_economy_type(_no_draws, traits) == EconomyType.TECH


def test_quality_label():
    assert quality_label(1) == "Marginal"
    assert quality_label(3) == "Exceptional"
