"""Economy tick: mean-reverting supply/demand per (system, good) market.

One call advances any batch of market entries by one tick and returns new
entries; inputs are never mutated. The live game passes one region's
markets per tick, the offline simulator passes the whole world.

Per entry, in order:
  noise      one draw for supply, then one for demand, uniform in ±amplitude
  reversion  level += (target + shift - level) * reversion * dampening
             rounded half up, with noise added before rounding
  production supply += rate * mult, demand -= round(rate * mult * 0.3)
  consumption supply -= rate * mult, demand += round(rate * mult * 0.5)
  clamp      both levels into [min_level, max_level]
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence

from starbang.economy.constants import (
    CONSUMPTION_DEMAND_FACTOR,
    CONSUMPTION_RATE,
    EQUILIBRIUM_TARGETS,
    MAX_LEVEL,
    MIN_LEVEL,
    NOISE_AMPLITUDE,
    PRODUCTION_DEMAND_FACTOR,
    PRODUCTION_RATE,
    REVERSION_RATE,
    EquilibriumTarget,
)
from starbang.economy.modifiers import NO_SHIFTS, MarketShifts
from starbang.universe.params import ConfigurationError
from starbang.universe.rng import RNG, js_round


class MarketRole(str, Enum):
    """How a system relates to a good."""
    PRODUCES = "produces"
    CONSUMES = "consumes"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class MarketEntry:
    """State of one (system, good) market."""
    system_id: str
    good_id: str
    supply: float
    demand: float
    base_price: float
    role: MarketRole = MarketRole.NEUTRAL
    production_rate: Optional[float] = None
    consumption_rate: Optional[float] = None
    volatility: float = 1.0
    equilibrium: Optional[EquilibriumTarget] = None
    price_floor: Optional[float] = None
    price_ceiling: Optional[float] = None
    shifts: MarketShifts = NO_SHIFTS


def _default_targets() -> Dict[MarketRole, EquilibriumTarget]:
    return {MarketRole(role): target for role, target in EQUILIBRIUM_TARGETS.items()}


@dataclass
class EconomyTickParams:
    reversion_rate: float = REVERSION_RATE
    noise_amplitude: float = NOISE_AMPLITUDE
    min_level: float = MIN_LEVEL
    max_level: float = MAX_LEVEL
    production_rate: float = PRODUCTION_RATE
    consumption_rate: float = CONSUMPTION_RATE
    equilibrium: Dict[MarketRole, EquilibriumTarget] = field(default_factory=_default_targets)

    def validate(self) -> "EconomyTickParams":
        """Reject out-of-range settings before any tick runs.

        Raises:
            ConfigurationError: On the first invalid field found.
        """
        if self.min_level > self.max_level:
            raise ConfigurationError(
                f"min_level ({self.min_level}) exceeds max_level ({self.max_level})"
            )
        if not 0 <= self.reversion_rate <= 1:
            raise ConfigurationError("reversion_rate must be in [0, 1]")
        if self.noise_amplitude < 0:
            raise ConfigurationError("noise_amplitude must be >= 0")
        if self.production_rate < 0 or self.consumption_rate < 0:
            raise ConfigurationError("production and consumption rates must be >= 0")
        missing = [role.value for role in MarketRole if role not in self.equilibrium]
        if missing:
            raise ConfigurationError(f"missing equilibrium targets: {', '.join(missing)}")
        return self

    def target_for(self, entry: MarketEntry) -> EquilibriumTarget:
        if entry.equilibrium is not None:
            return entry.equilibrium
        return self.equilibrium[entry.role]


def _noise(rng: RNG, amplitude: float) -> float:
    return (rng() * 2 - 1) * amplitude


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def simulate_economy_tick(
    entries: Sequence[MarketEntry],
    params: EconomyTickParams,
    rng: RNG,
) -> List[MarketEntry]:
    """Advance every entry one tick. Returns new entries in input order."""
    results = []
    for entry in entries:
        shifts = entry.shifts
        target = params.target_for(entry)
        amplitude = params.noise_amplitude * entry.volatility
        noise_supply = _noise(rng, amplitude)
        noise_demand = _noise(rng, amplitude)

        reversion = params.reversion_rate * shifts.reversion_mult
        supply = js_round(
            entry.supply
            + (target.supply + shifts.supply_target_shift - entry.supply) * reversion
            + noise_supply
        )
        demand = js_round(
            entry.demand
            + (target.demand + shifts.demand_target_shift - entry.demand) * reversion
            + noise_demand
        )

        if entry.role == MarketRole.PRODUCES:
            rate = entry.production_rate
            if rate is None:
                rate = params.production_rate
            produced = rate * shifts.production_mult
            supply += produced
            demand -= js_round(produced * PRODUCTION_DEMAND_FACTOR)
        elif entry.role == MarketRole.CONSUMES:
            rate = entry.consumption_rate
            if rate is None:
                rate = params.consumption_rate
            consumed = rate * shifts.consumption_mult
            supply -= consumed
            demand += js_round(consumed * CONSUMPTION_DEMAND_FACTOR)

        results.append(
            replace(
                entry,
                supply=_clamp(supply, params.min_level, params.max_level),
                demand=_clamp(demand, params.min_level, params.max_level),
            )
        )
    return results
