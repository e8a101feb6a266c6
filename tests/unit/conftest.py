"""Shared fixtures for starbang unit tests."""

import pytest

from starbang.universe.generator import generate_universe
from starbang.universe.params import GenerationParams

# Seeds used for statistical checks across universes.
STAT_SEEDS = list(range(1, 11))


@pytest.fixture(scope="session")
def default_params():
    return GenerationParams()


@pytest.fixture(scope="session")
def universe(default_params):
    return generate_universe(default_params)


@pytest.fixture(scope="session")
def seed_universes():
    return [generate_universe(GenerationParams(seed=seed)) for seed in STAT_SEEDS]


@pytest.fixture()
def small_params():
    return GenerationParams(seed=7, region_count=4, total_systems=60)


class CountingRng:
    """Deterministic stand-in for a generator that records how often it is called."""

    def __init__(self, values=(0.5,)):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture()
def counting_rng():
    return CountingRng
