"""Economy constants: goods, production tables, governments, tick defaults."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from starbang.universe.catalog import EconomyType, GovernmentType
from starbang.universe.rng import js_round

# ===================== Tick defaults =====================

REVERSION_RATE = 0.05  # Fraction of the gap to target closed per tick
NOISE_AMPLITUDE = 3  # Max +/- units of noise per tick before volatility
MIN_LEVEL = 5
MAX_LEVEL = 200
PRODUCTION_RATE = 3  # Fallback per-tick production when an entry has none
CONSUMPTION_RATE = 2

# Share of production/consumption that also moves demand.
PRODUCTION_DEMAND_FACTOR = 0.3
CONSUMPTION_DEMAND_FACTOR = 0.5

# --- Modifier caps ---
MAX_TARGET_SHIFT = 100
MIN_RATE_MULTIPLIER = 0.1
MAX_RATE_MULTIPLIER = 3.0
MIN_REVERSION_MULTIPLIER = 0.2
MAX_REVERSION_MULTIPLIER = 1.0

# --- Pricing ---
PRICE_FLOOR_MULTIPLIER = 0.2
PRICE_CEILING_MULTIPLIER = 5.0


@dataclass(frozen=True)
class EquilibriumTarget:
    supply: float
    demand: float


EQUILIBRIUM_TARGETS: Dict[str, EquilibriumTarget] = {
    "produces": EquilibriumTarget(supply=120, demand=40),
    "consumes": EquilibriumTarget(supply=40, demand=120),
    "neutral": EquilibriumTarget(supply=60, demand=60),
}


@dataclass(frozen=True)
class GoodDefinition:
    """A tradeable good and its per-good market overrides."""
    name: str
    base_price: int
    category: str
    volatility: float = 1.0
    # Overrides the produces/consumes targets for this good only.
    equilibrium: Optional[Dict[str, EquilibriumTarget]] = None
    price_floor: Optional[float] = None
    price_ceiling: Optional[float] = None


GOODS: Dict[str, GoodDefinition] = {
    "food": GoodDefinition(name="Food", base_price=20, category="consumable", volatility=0.8),
    "water": GoodDefinition(name="Water", base_price=15, category="consumable", volatility=0.6),
    "ore": GoodDefinition(name="Ore", base_price=30, category="raw", volatility=1.0),
    "textiles": GoodDefinition(name="Textiles", base_price=25, category="consumable", volatility=0.9),
    "fuel": GoodDefinition(name="Fuel", base_price=40, category="raw", volatility=1.2),
    "metals": GoodDefinition(name="Metals", base_price=45, category="raw", volatility=1.0),
    "chemicals": GoodDefinition(name="Chemicals", base_price=55, category="manufactured", volatility=1.1),
    "machinery": GoodDefinition(
        name="Machinery", base_price=100, category="manufactured", volatility=1.0,
        equilibrium={
            "produces": EquilibriumTarget(supply=100, demand=50),
            "consumes": EquilibriumTarget(supply=50, demand=100),
        },
    ),
    "weapons": GoodDefinition(
        name="Weapons", base_price=120, category="manufactured", volatility=1.5,
        price_ceiling=480,
    ),
    "electronics": GoodDefinition(name="Electronics", base_price=80, category="manufactured", volatility=1.2),
    "medicine": GoodDefinition(name="Medicine", base_price=90, category="manufactured", volatility=1.3),
    "luxuries": GoodDefinition(
        name="Luxuries", base_price=150, category="luxury", volatility=1.6,
        equilibrium={
            "produces": EquilibriumTarget(supply=90, demand=50),
            "consumes": EquilibriumTarget(supply=50, demand=90),
        },
    ),
}

# Per-tick production / consumption rates by archetype.
ECONOMY_PRODUCTION: Dict[EconomyType, Dict[str, float]] = {
    EconomyType.AGRICULTURAL: {"food": 5, "textiles": 4},
    EconomyType.EXTRACTION: {"ore": 4, "water": 5},
    EconomyType.REFINERY: {"fuel": 3, "metals": 3, "chemicals": 2},
    EconomyType.INDUSTRIAL: {"machinery": 2, "weapons": 1},
    EconomyType.TECH: {"electronics": 2, "medicine": 2},
    EconomyType.CORE: {"luxuries": 1},
}

ECONOMY_CONSUMPTION: Dict[EconomyType, Dict[str, float]] = {
    EconomyType.AGRICULTURAL: {"water": 4, "machinery": 1, "chemicals": 3, "medicine": 1},
    EconomyType.EXTRACTION: {"food": 3, "fuel": 3, "machinery": 1, "textiles": 2},
    EconomyType.REFINERY: {"ore": 4, "water": 3},
    EconomyType.INDUSTRIAL: {"metals": 3, "electronics": 2, "chemicals": 2, "fuel": 2},
    EconomyType.TECH: {"metals": 2, "chemicals": 2, "luxuries": 1},
    EconomyType.CORE: {"food": 3, "textiles": 2, "electronics": 2, "medicine": 2, "weapons": 1},
}


@dataclass(frozen=True)
class GovernmentDefinition:
    name: str
    description: str
    volatility_modifier: float
    equilibrium_spread_pct: float
    consumption_boosts: Dict[str, float] = field(default_factory=dict)


GOVERNMENT_TYPES: Dict[GovernmentType, GovernmentDefinition] = {
    GovernmentType.FEDERATION: GovernmentDefinition(
        name="Federation",
        description="Democratic and regulated. Stable prices, consumer protections.",
        volatility_modifier=0.8,
        equilibrium_spread_pct=-10,
        consumption_boosts={"medicine": 1},
    ),
    GovernmentType.CORPORATE: GovernmentDefinition(
        name="Corporate",
        description="Megacorp governance. Efficient and profit-driven.",
        volatility_modifier=0.9,
        equilibrium_spread_pct=-5,
        consumption_boosts={"luxuries": 1},
    ),
    GovernmentType.AUTHORITARIAN: GovernmentDefinition(
        name="Authoritarian",
        description="Military rule with controlled markets and heavy security.",
        volatility_modifier=0.7,
        equilibrium_spread_pct=-15,
        consumption_boosts={"weapons": 1, "fuel": 1},
    ),
    GovernmentType.FRONTIER: GovernmentDefinition(
        name="Frontier",
        description="Lawless space with no central authority.",
        volatility_modifier=1.5,
        equilibrium_spread_pct=20,
    ),
}


def adjust_equilibrium_spread(target: EquilibriumTarget, spread_pct: float) -> EquilibriumTarget:
    """Widen (positive) or tighten (negative) the supply/demand gap around its midpoint."""
    mid = (target.supply + target.demand) / 2
    half = (target.supply - target.demand) / 2
    scaled = half * (1 + spread_pct / 100)
    return EquilibriumTarget(supply=js_round(mid + scaled), demand=js_round(mid - scaled))


def equilibrium_for(good_id: str, role: str) -> EquilibriumTarget:
    """Target for a good in a role, honoring per-good overrides."""
    good = GOODS.get(good_id)
    if good is not None and good.equilibrium and role in good.equilibrium:
        return good.equilibrium[role]
    return EQUILIBRIUM_TARGETS[role]
