"""Value types produced by universe generation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from starbang.universe.catalog import EconomyType, GovernmentType

Point = Tuple[float, float]


@dataclass
class GeneratedRegion:
    index: int
    name: str
    government: GovernmentType
    x: float
    y: float

    @property
    def center(self) -> Point:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "government": self.government.value,
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True)
class GeneratedTrait:
    trait_id: str
    quality: int

    def to_dict(self) -> Dict[str, Any]:
        return {"trait_id": self.trait_id, "quality": self.quality}


@dataclass
class GeneratedSystem:
    """A star system; ``economy_type`` may be revised by the coherence pass."""
    index: int
    name: str
    region_index: int
    x: float
    y: float
    traits: List[GeneratedTrait]
    economy_type: EconomyType
    is_gateway: bool = False

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "region_index": self.region_index,
            "x": self.x,
            "y": self.y,
            "economy_type": self.economy_type.value,
            "is_gateway": self.is_gateway,
            "traits": [t.to_dict() for t in self.traits],
        }


@dataclass(frozen=True)
class GeneratedConnection:
    """A directed edge. Every connection has a reverse twin with the same cost."""
    from_system: int
    to_system: int
    fuel_cost: float
    is_gateway: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_system,
            "to": self.to_system,
            "fuel_cost": self.fuel_cost,
            "is_gateway": self.is_gateway,
        }


@dataclass
class GenerationStats:
    """Counters surfaced for logging and tests; never used for control flow."""
    placement_fallbacks: int = 0
    empty_region_repairs: int = 0
    coherence_rerolls: int = 0
    avg_intra_edge_distance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "placement_fallbacks": self.placement_fallbacks,
            "empty_region_repairs": self.empty_region_repairs,
            "coherence_rerolls": self.coherence_rerolls,
            "avg_intra_edge_distance": self.avg_intra_edge_distance,
        }


@dataclass
class GeneratedUniverse:
    seed: int
    regions: List[GeneratedRegion]
    systems: List[GeneratedSystem]
    connections: List[GeneratedConnection]
    starting_system_index: int
    stats: GenerationStats = field(default_factory=GenerationStats)

    def systems_in_region(self, region_index: int) -> List[GeneratedSystem]:
        return [s for s in self.systems if s.region_index == region_index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "seed": self.seed,
                "region_count": len(self.regions),
                "system_count": len(self.systems),
                "connection_count": len(self.connections),
                "starting_system_index": self.starting_system_index,
                "stats": self.stats.to_dict(),
            },
            "regions": [r.to_dict() for r in self.regions],
            "systems": [s.to_dict() for s in self.systems],
            "connections": [c.to_dict() for c in self.connections],
        }
