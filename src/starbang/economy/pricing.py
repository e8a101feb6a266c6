"""Market pricing from supply and demand."""

from typing import Optional

from starbang.economy.constants import PRICE_CEILING_MULTIPLIER, PRICE_FLOOR_MULTIPLIER
from starbang.universe.rng import js_round


def calculate_price(
    base_price: float,
    supply: float,
    demand: float,
    price_floor: Optional[float] = None,
    price_ceiling: Optional[float] = None,
) -> int:
    """Calculate the current price of a good.

    Formula: ``base_price * demand / supply``, clamped to the floor and
    ceiling (0.2x and 5x base by default). An empty market (supply <= 0)
    is priced at the ceiling.

    Args:
        base_price: Reference price of the good.
        supply: Current supply level.
        demand: Current demand level.
        price_floor: Absolute minimum price, if overriding the default.
        price_ceiling: Absolute maximum price, if overriding the default.

    Returns:
        Price in credits

    Raises:
        ValueError: If base_price is negative
    """
    if base_price < 0:
        raise ValueError(f"base_price must be non-negative, got {base_price}")

    floor = price_floor if price_floor is not None else PRICE_FLOOR_MULTIPLIER * base_price
    ceiling = price_ceiling if price_ceiling is not None else PRICE_CEILING_MULTIPLIER * base_price

    if supply <= 0:
        return js_round(ceiling)

    raw = base_price * (demand / supply)
    return js_round(max(floor, min(ceiling, raw)))


def entry_price(entry) -> int:
    """Price of a ``MarketEntry`` using its own floor and ceiling."""
    return calculate_price(
        entry.base_price,
        entry.supply,
        entry.demand,
        entry.price_floor,
        entry.price_ceiling,
    )
