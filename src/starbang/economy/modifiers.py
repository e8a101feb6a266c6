"""Aggregation of externally supplied economy modifiers.

Modifiers are created, expired and stored by the event subsystem; this
module only folds the ones that are active this tick into a single set of
shifts and multipliers per (target, good).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from starbang.economy.constants import (
    MAX_RATE_MULTIPLIER,
    MAX_REVERSION_MULTIPLIER,
    MAX_TARGET_SHIFT,
    MIN_RATE_MULTIPLIER,
    MIN_REVERSION_MULTIPLIER,
)


class ModifierType(str, Enum):
    EQUILIBRIUM_SHIFT = "equilibrium_shift"
    RATE_MULTIPLIER = "rate_multiplier"
    REVERSION_DAMPENING = "reversion_dampening"


class TargetType(str, Enum):
    SYSTEM = "system"
    REGION = "region"


# Other domains (e.g. navigation) share the modifier stream but not markets.
ECONOMY_DOMAIN = "economy"


@dataclass(frozen=True)
class Modifier:
    """One active adjustment, e.g. a war raising weapons demand in a region.

    ``parameter`` names what is adjusted: ``supply_target`` or
    ``demand_target`` for shifts, ``production_rate`` or
    ``consumption_rate`` for multipliers, ``reversion_rate`` for dampening.
    """
    domain: str
    type: ModifierType
    target_type: TargetType
    target_id: str
    parameter: str
    value: float
    good_id: Optional[str] = None


@dataclass(frozen=True)
class ModifierCaps:
    max_shift: float = MAX_TARGET_SHIFT
    min_multiplier: float = MIN_RATE_MULTIPLIER
    max_multiplier: float = MAX_RATE_MULTIPLIER
    min_reversion_mult: float = MIN_REVERSION_MULTIPLIER
    max_reversion_mult: float = MAX_REVERSION_MULTIPLIER


DEFAULT_CAPS = ModifierCaps()


@dataclass(frozen=True)
class MarketShifts:
    """Aggregated modifier effect on one market; defaults are a no-op."""
    supply_target_shift: float = 0.0
    demand_target_shift: float = 0.0
    production_mult: float = 1.0
    consumption_mult: float = 1.0
    reversion_mult: float = 1.0


NO_SHIFTS = MarketShifts()


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def aggregate_modifiers(
    modifiers: Iterable[Modifier],
    good_id: str,
    caps: ModifierCaps = DEFAULT_CAPS,
) -> MarketShifts:
    """Fold modifiers that apply to ``good_id`` into capped shifts.

    Modifiers without a good apply to every good. Shifts add up, rate
    multipliers multiply, and reversion dampening keeps the strongest
    (smallest) value.
    """
    supply_shift = 0.0
    demand_shift = 0.0
    production_mult = 1.0
    consumption_mult = 1.0
    reversion_mult = 1.0

    for mod in modifiers:
        if mod.good_id is not None and mod.good_id != good_id:
            continue
        if mod.type == ModifierType.EQUILIBRIUM_SHIFT:
            if mod.parameter == "supply_target":
                supply_shift += mod.value
            elif mod.parameter == "demand_target":
                demand_shift += mod.value
        elif mod.type == ModifierType.RATE_MULTIPLIER:
            if mod.parameter == "production_rate":
                production_mult *= mod.value
            elif mod.parameter == "consumption_rate":
                consumption_mult *= mod.value
        elif mod.type == ModifierType.REVERSION_DAMPENING:
            if mod.parameter == "reversion_rate":
                reversion_mult = min(reversion_mult, mod.value)

    return MarketShifts(
        supply_target_shift=_clamp(supply_shift, -caps.max_shift, caps.max_shift),
        demand_target_shift=_clamp(demand_shift, -caps.max_shift, caps.max_shift),
        production_mult=_clamp(production_mult, caps.min_multiplier, caps.max_multiplier),
        consumption_mult=_clamp(consumption_mult, caps.min_multiplier, caps.max_multiplier),
        reversion_mult=_clamp(reversion_mult, caps.min_reversion_mult, caps.max_reversion_mult),
    )


def modifiers_for_system(
    modifiers: Sequence[Modifier], system_id: str, region_id: str
) -> List[Modifier]:
    """Economy modifiers targeting the system directly or its whole region."""
    return [
        m for m in modifiers
        if m.domain == ECONOMY_DOMAIN
        and (
            (m.target_type == TargetType.SYSTEM and m.target_id == system_id)
            or (m.target_type == TargetType.REGION and m.target_id == region_id)
        )
    ]
