"""Market health metrics for a simulated world."""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from starbang.economy.pricing import entry_price

# Sample every 50 ticks by default.
SNAPSHOT_INTERVAL = 50


@dataclass(frozen=True)
class MarketSnapshot:
    tick: int
    system_id: str
    good_id: str
    supply: float
    demand: float
    price: int


@dataclass(frozen=True)
class PriceDispersion:
    good_id: str
    std_dev: float


@dataclass(frozen=True)
class EquilibriumDrift:
    good_id: str
    avg_supply_drift: float
    avg_demand_drift: float


def take_market_snapshot(world) -> List[MarketSnapshot]:
    return [
        MarketSnapshot(
            tick=world.tick,
            system_id=m.system_id,
            good_id=m.good_id,
            supply=m.supply,
            demand=m.demand,
            price=entry_price(m),
        )
        for m in world.markets
    ]


def compute_price_dispersion(world) -> List[PriceDispersion]:
    """Population std-dev of each good's price across systems, highest first.

    High dispersion means prices differ a lot between systems, i.e. there
    is something worth hauling.
    """
    prices: Dict[str, List[int]] = {}
    for m in world.markets:
        prices.setdefault(m.good_id, []).append(entry_price(m))

    result = [
        PriceDispersion(good_id=good_id, std_dev=float(np.std(values)))
        for good_id, values in prices.items()
    ]
    result.sort(key=lambda d: (-d.std_dev, d.good_id))
    return result


def compute_equilibrium_drift(world) -> List[EquilibriumDrift]:
    """Mean signed distance of supply and demand from each market's target."""
    supply_gaps: Dict[str, List[float]] = {}
    demand_gaps: Dict[str, List[float]] = {}
    for m in world.markets:
        target = world.tick_params.target_for(m)
        supply_gaps.setdefault(m.good_id, []).append(m.supply - target.supply)
        demand_gaps.setdefault(m.good_id, []).append(m.demand - target.demand)

    return [
        EquilibriumDrift(
            good_id=good_id,
            avg_supply_drift=float(np.mean(supply_gaps[good_id])),
            avg_demand_drift=float(np.mean(demand_gaps[good_id])),
        )
        for good_id in supply_gaps
    ]
