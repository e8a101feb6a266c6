"""Procedural universe generation."""

from starbang.universe.catalog import EconomyType, GovernmentType, TraitCategory
from starbang.universe.generator import generate_universe, select_starting_system
from starbang.universe.models import GeneratedUniverse
from starbang.universe.params import ConfigurationError, GenerationParams
from starbang.universe.rng import Mulberry32

__all__ = [
    "ConfigurationError",
    "EconomyType",
    "GeneratedUniverse",
    "GenerationParams",
    "GovernmentType",
    "Mulberry32",
    "TraitCategory",
    "generate_universe",
    "select_starting_system",
]
