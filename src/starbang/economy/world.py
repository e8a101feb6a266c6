"""In-memory simulation world built from a generated universe.

Markets start at equilibrium for every (system, good). ``SimWorld.advance``
runs one tick either for a single region (round-robin, as the live game
does) or for every market at once.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from loguru import logger

from starbang.economy.constants import (
    ECONOMY_CONSUMPTION,
    ECONOMY_PRODUCTION,
    GOODS,
    GOVERNMENT_TYPES,
    adjust_equilibrium_spread,
    equilibrium_for,
)
from starbang.economy.modifiers import (
    DEFAULT_CAPS,
    NO_SHIFTS,
    Modifier,
    ModifierCaps,
    aggregate_modifiers,
    modifiers_for_system,
)
from starbang.economy.tick import (
    EconomyTickParams,
    MarketEntry,
    MarketRole,
    simulate_economy_tick,
)
from starbang.universe.catalog import (
    REGION_NAMES,
    EconomyType,
    GovernmentType,
    compute_trait_production_bonus,
)
from starbang.universe.generator import generate_universe
from starbang.universe.models import GeneratedTrait, GeneratedUniverse
from starbang.universe.params import GenerationParams
from starbang.universe.rng import RNG

TICK_MODE_ROUND_ROBIN = "round_robin"
TICK_MODE_ALL = "all"


@dataclass
class SimRegion:
    id: str
    name: str
    government: GovernmentType


@dataclass
class SimSystem:
    id: str
    name: str
    region_id: str
    economy_type: EconomyType
    produces: Dict[str, float]
    consumes: Dict[str, float]
    traits: List[GeneratedTrait] = field(default_factory=list)
    is_gateway: bool = False


@dataclass(frozen=True)
class SimConnection:
    from_system_id: str
    to_system_id: str
    fuel_cost: float


@dataclass
class SimWorld:
    """Mutable world state; only ``markets`` and ``tick`` change over time."""
    seed: int
    regions: List[SimRegion]
    systems: List[SimSystem]
    connections: List[SimConnection]
    markets: List[MarketEntry]
    tick_params: EconomyTickParams
    starting_system_id: str
    tick: int = 0
    modifiers: List[Modifier] = field(default_factory=list)
    caps: ModifierCaps = DEFAULT_CAPS

    def __post_init__(self) -> None:
        self._systems_by_id = {s.id: s for s in self.systems}

    def system(self, system_id: str) -> SimSystem:
        return self._systems_by_id[system_id]

    def region_order(self) -> List[SimRegion]:
        """Regions in round-robin order (by name)."""
        return sorted(self.regions, key=lambda r: r.name)

    def markets_for_system(self, system_id: str) -> List[MarketEntry]:
        return [m for m in self.markets if m.system_id == system_id]

    def _with_shifts(self, entry: MarketEntry, active: Sequence[Modifier]) -> MarketEntry:
        if not active:
            return replace(entry, shifts=NO_SHIFTS)
        system = self.system(entry.system_id)
        mods = modifiers_for_system(active, system.id, system.region_id)
        if not mods:
            return replace(entry, shifts=NO_SHIFTS)
        return replace(entry, shifts=aggregate_modifiers(mods, entry.good_id, self.caps))

    def advance(
        self,
        rng: RNG,
        modifiers: Optional[Sequence[Modifier]] = None,
        mode: str = TICK_MODE_ROUND_ROBIN,
    ) -> int:
        """Run one economy tick and return the number of markets updated.

        ``modifiers`` replaces the active modifier list when given; the
        world never expires modifiers itself.
        """
        if modifiers is not None:
            self.modifiers = list(modifiers)

        if mode == TICK_MODE_ROUND_ROBIN:
            order = self.region_order()
            if not order:
                self.tick += 1
                return 0
            region = order[self.tick % len(order)]
            region_systems = {s.id for s in self.systems if s.region_id == region.id}
            positions = [
                i for i, m in enumerate(self.markets) if m.system_id in region_systems
            ]
        elif mode == TICK_MODE_ALL:
            region = None
            positions = list(range(len(self.markets)))
        else:
            raise ValueError(f"Unknown tick mode: {mode}")

        batch = [self._with_shifts(self.markets[i], self.modifiers) for i in positions]
        updated = simulate_economy_tick(batch, self.tick_params, rng)
        for i, entry in zip(positions, updated):
            self.markets[i] = entry

        if region is not None:
            logger.debug(
                f"[economy] tick {self.tick}: region {region.name} "
                f"({len(updated)} markets, {len(self.modifiers)} active modifier(s))"
            )
        self.tick += 1
        return len(updated)


def _build_markets(
    system: SimSystem,
    government: GovernmentType,
) -> List[MarketEntry]:
    gov = GOVERNMENT_TYPES[government]
    markets = []
    for good_id, good in GOODS.items():
        production_rate = None
        consumption_rate = None
        if good_id in system.produces:
            role = MarketRole.PRODUCES
            bonus = compute_trait_production_bonus(system.traits, good_id)
            production_rate = system.produces[good_id] * (1 + bonus)
        elif good_id in system.consumes or good_id in gov.consumption_boosts:
            role = MarketRole.CONSUMES
            consumption_rate = system.consumes.get(good_id, 0) + gov.consumption_boosts.get(good_id, 0)
        else:
            role = MarketRole.NEUTRAL

        target = adjust_equilibrium_spread(
            equilibrium_for(good_id, role.value), gov.equilibrium_spread_pct
        )
        markets.append(
            MarketEntry(
                system_id=system.id,
                good_id=good_id,
                supply=target.supply,
                demand=target.demand,
                base_price=good.base_price,
                role=role,
                production_rate=production_rate,
                consumption_rate=consumption_rate,
                volatility=good.volatility * gov.volatility_modifier,
                equilibrium=target,
                price_floor=good.price_floor,
                price_ceiling=good.price_ceiling,
            )
        )
    return markets


def world_from_universe(
    universe: GeneratedUniverse,
    tick_params: Optional[EconomyTickParams] = None,
) -> SimWorld:
    """Wrap a generated universe in a simulation world at equilibrium."""
    tick_params = (tick_params or EconomyTickParams()).validate()

    regions = [
        SimRegion(id=f"region-{r.index}", name=r.name, government=r.government)
        for r in universe.regions
    ]
    systems = [
        SimSystem(
            id=f"system-{s.index}",
            name=s.name,
            region_id=f"region-{s.region_index}",
            economy_type=s.economy_type,
            produces=dict(ECONOMY_PRODUCTION[s.economy_type]),
            consumes=dict(ECONOMY_CONSUMPTION[s.economy_type]),
            traits=list(s.traits),
            is_gateway=s.is_gateway,
        )
        for s in universe.systems
    ]
    connections = [
        SimConnection(
            from_system_id=f"system-{c.from_system}",
            to_system_id=f"system-{c.to_system}",
            fuel_cost=c.fuel_cost,
        )
        for c in universe.connections
    ]

    markets: List[MarketEntry] = []
    for generated, system in zip(universe.systems, systems):
        markets.extend(_build_markets(system, universe.regions[generated.region_index].government))

    logger.info(
        f"Created world: {len(regions)} regions, {len(systems)} systems, {len(markets)} markets"
    )
    return SimWorld(
        seed=universe.seed,
        regions=regions,
        systems=systems,
        connections=connections,
        markets=markets,
        tick_params=tick_params,
        starting_system_id=f"system-{universe.starting_system_index}",
    )


def create_world(
    params: Optional[GenerationParams] = None,
    tick_params: Optional[EconomyTickParams] = None,
    region_names: Sequence[str] = REGION_NAMES,
) -> SimWorld:
    """Generate a universe and build a world from it."""
    params = (params or GenerationParams()).validate()
    return world_from_universe(generate_universe(params, region_names), tick_params)
