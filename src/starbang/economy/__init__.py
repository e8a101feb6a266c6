"""Supply/demand economy simulation."""

from starbang.economy.modifiers import MarketShifts, Modifier, aggregate_modifiers
from starbang.economy.pricing import calculate_price
from starbang.economy.tick import (
    EconomyTickParams,
    MarketEntry,
    MarketRole,
    simulate_economy_tick,
)
from starbang.economy.world import SimWorld, create_world, world_from_universe

__all__ = [
    "EconomyTickParams",
    "MarketEntry",
    "MarketRole",
    "MarketShifts",
    "Modifier",
    "SimWorld",
    "aggregate_modifiers",
    "calculate_price",
    "create_world",
    "simulate_economy_tick",
    "world_from_universe",
]
