"""Static catalogs for universe generation: archetypes, traits, quality tiers."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterable, List, Tuple


class EconomyType(str, Enum):
    """Economic archetypes a system can resolve to, in declared order."""
    AGRICULTURAL = "agricultural"
    EXTRACTION = "extraction"
    REFINERY = "refinery"
    INDUSTRIAL = "industrial"
    TECH = "tech"
    CORE = "core"


class TraitCategory(str, Enum):
    """Catalog groupings for system traits."""
    PLANETARY = "planetary"
    ORBITAL = "orbital"
    RESOURCE = "resource"
    PHENOMENA = "phenomena"
    LEGACY = "legacy"


class GovernmentType(str, Enum):
    """Region government archetypes."""
    FEDERATION = "federation"
    CORPORATE = "corporate"
    AUTHORITARIAN = "authoritarian"
    FRONTIER = "frontier"


class QualityTier(IntEnum):
    MARGINAL = 1
    SOLID = 2
    EXCEPTIONAL = 3


ECONOMY_TYPES: Tuple[EconomyType, ...] = tuple(EconomyType)

# Returned by the classifier when no trait has a strong affinity.
DEFAULT_ECONOMY_TYPE = EconomyType.EXTRACTION

MINOR_AFFINITY = 1
STRONG_AFFINITY = 2


@dataclass(frozen=True)
class QualityTierInfo:
    label: str
    modifier: float
    rarity: int


QUALITY_TIERS: Dict[QualityTier, QualityTierInfo] = {
    QualityTier.MARGINAL: QualityTierInfo(label="Marginal", modifier=0.15, rarity=50),
    QualityTier.SOLID: QualityTierInfo(label="Solid", modifier=0.40, rarity=35),
    QualityTier.EXCEPTIONAL: QualityTierInfo(label="Exceptional", modifier=0.80, rarity=15),
}

GOVERNMENT_WEIGHTS: Dict[GovernmentType, int] = {
    GovernmentType.FEDERATION: 1,
    GovernmentType.CORPORATE: 1,
    GovernmentType.AUTHORITARIAN: 1,
    GovernmentType.FRONTIER: 1,
}

REGION_NAMES: List[str] = [
    "Arcturus", "Meridian", "Vanguard", "Horizon", "Zenith", "Solace", "Pinnacle",
    "Tempest", "Bastion", "Frontier", "Aegis", "Nebula", "Eclipse", "Sentinel",
    "Cascade", "Vertex", "Rift", "Threshold", "Citadel", "Expanse", "Dominion",
    "Prism", "Crucible", "Nexus", "Forge", "Drift", "Axiom", "Haven",
]


@dataclass(frozen=True)
class TraitDefinition:
    """A reusable catalog entry that can be rolled onto a system."""
    name: str
    category: TraitCategory
    affinity: Dict[EconomyType, int]
    production_goods: Tuple[str, ...]
    descriptions: Tuple[str, str, str]

    def affinity_for(self, economy: EconomyType) -> int:
        return self.affinity.get(economy, 0)

    def has_strong_affinity(self) -> bool:
        return any(v == STRONG_AFFINITY for v in self.affinity.values())

    def describe(self, quality: int) -> str:
        return self.descriptions[int(quality) - 1]


AGRI = EconomyType.AGRICULTURAL
EXT = EconomyType.EXTRACTION
REF = EconomyType.REFINERY
IND = EconomyType.INDUSTRIAL
TECH = EconomyType.TECH
CORE = EconomyType.CORE

_P = TraitCategory.PLANETARY
_O = TraitCategory.ORBITAL
_R = TraitCategory.RESOURCE
_X = TraitCategory.PHENOMENA
_L = TraitCategory.LEGACY


# Trait registry. Insertion order is part of the generation contract.
TRAIT_REGISTRY: Dict[str, TraitDefinition] = {
    # --- Planetary bodies ---
    "habitable_world": TraitDefinition(
        name="Habitable World", category=_P,
        affinity={AGRI: 2, CORE: 2}, production_goods=("food",),
        descriptions=(
            "Thin air and scarce farmland; settlements hug the sheltered valleys.",
            "A temperate world with steady rains and settled farm belts.",
            "A garden world with a rich biosphere and deep, clean oceans.",
        ),
    ),
    "ocean_world": TraitDefinition(
        name="Ocean World", category=_P,
        affinity={AGRI: 2, EXT: 1}, production_goods=("food", "water"),
        descriptions=(
            "Shallow seas support a handful of aquaculture pens.",
            "Offshore farms and dredging rigs dot a deep global ocean.",
            "Kelp forests and trawler fleets feed half the region.",
        ),
    ),
    "volcanic_world": TraitDefinition(
        name="Volcanic World", category=_P,
        affinity={EXT: 2, REF: 1}, production_goods=("ore", "chemicals"),
        descriptions=(
            "Sporadic eruptions expose thin seams of ore.",
            "Active calderas push mineral-rich magma close to the surface.",
            "A world of lava rivers where smelters run on geothermal heat.",
        ),
    ),
    "frozen_world": TraitDefinition(
        name="Frozen World", category=_P,
        affinity={EXT: 1}, production_goods=("water",),
        descriptions=(
            "A thin ice crust worth melting only in emergencies.",
            "Thick glaciers cut into blocks and shipped as water.",
            "Kilometre-deep ice sheets hold an ocean's worth of fresh water.",
        ),
    ),
    "tidally_locked_world": TraitDefinition(
        name="Tidally Locked World", category=_P,
        affinity={EXT: 1, TECH: 1}, production_goods=("ore",),
        descriptions=(
            "A narrow twilight band hosts a few mining camps.",
            "Terminator-line cities harvest ore from the frozen dark side.",
            "Research arcologies study the extremes along a stable terminator.",
        ),
    ),
    "desert_world": TraitDefinition(
        name="Desert World", category=_P,
        affinity={EXT: 1, IND: 1}, production_goods=("ore",),
        descriptions=(
            "Dune fields hide scattered mineral crusts.",
            "Strip mines and solar foundries work the open flats.",
            "Endless salt pans feed sprawling automated refineries.",
        ),
    ),
    "jungle_world": TraitDefinition(
        name="Jungle World", category=_P,
        affinity={AGRI: 1, TECH: 1}, production_goods=("food", "chemicals"),
        descriptions=(
            "Dense canopy makes clearing land slow and costly.",
            "Bioprospectors catalogue new compounds every season.",
            "A living pharmacy whose genome banks draw labs from across the sector.",
        ),
    ),
    "geothermal_vents": TraitDefinition(
        name="Geothermal Vents", category=_P,
        affinity={REF: 2, EXT: 1}, production_goods=("fuel", "chemicals"),
        descriptions=(
            "A few hot springs warm the local settlements.",
            "Vent fields power a string of chemical plants.",
            "A planet-wide vent network fuels refineries around the clock.",
        ),
    ),
    "hydrocarbon_seas": TraitDefinition(
        name="Hydrocarbon Seas", category=_P,
        affinity={REF: 2, EXT: 1}, production_goods=("chemicals", "fuel"),
        descriptions=(
            "Methane ponds skimmed by small tanker barges.",
            "Hydrocarbon lakes piped straight into cracking towers.",
            "Oceans of liquid fuel feed a fleet of floating refineries.",
        ),
    ),
    "fertile_lowlands": TraitDefinition(
        name="Fertile Lowlands", category=_P,
        affinity={AGRI: 2}, production_goods=("food",),
        descriptions=(
            "River deltas yield modest but reliable harvests.",
            "Broad floodplains support mechanised grain farms.",
            "Black-soil plains turn out surplus harvests year after year.",
        ),
    ),
    "coral_archipelago": TraitDefinition(
        name="Coral Archipelago", category=_P,
        affinity={AGRI: 2, EXT: 1}, production_goods=("food", "water"),
        descriptions=(
            "Scattered atolls host fishing villages.",
            "Reef farms and desalination plants link a thousand islands.",
            "A chain of living reefs supports vast managed fisheries.",
        ),
    ),
    "tectonic_forge": TraitDefinition(
        name="Tectonic Forge", category=_P,
        affinity={IND: 2, EXT: 1}, production_goods=("metals", "machinery"),
        descriptions=(
            "Fault lines expose metal seams to opportunistic crews.",
            "Rift foundries cast heavy parts from upwelling ore.",
            "Continental plates grind out metals that heavy industry shapes on site.",
        ),
    ),

    # --- Orbital features ---
    "asteroid_belt": TraitDefinition(
        name="Asteroid Belt", category=_O,
        affinity={EXT: 2}, production_goods=("ore", "metals"),
        descriptions=(
            "A sparse belt worked by independent prospectors.",
            "A dense belt with established claim stakes and haulers.",
            "A rich belt where entire rocks are swallowed by mining rigs.",
        ),
    ),
    "gas_giant": TraitDefinition(
        name="Gas Giant", category=_O,
        affinity={EXT: 2, REF: 1}, production_goods=("fuel",),
        descriptions=(
            "A distant giant skimmed by the occasional tanker.",
            "Atmospheric scoops feed orbital fuel depots.",
            "Deuterium-rich bands keep a fleet of skimmers busy.",
        ),
    ),
    "mineral_rich_moons": TraitDefinition(
        name="Mineral-Rich Moons", category=_O,
        affinity={EXT: 1, IND: 1}, production_goods=("ore",),
        descriptions=(
            "A pair of moons with thin ore deposits.",
            "Several moons host surface mines and mass drivers.",
            "A moon system mined so thoroughly it ships ore by the gigaton.",
        ),
    ),
    "ring_system": TraitDefinition(
        name="Ring System", category=_O,
        affinity={EXT: 1}, production_goods=("water",),
        descriptions=(
            "Faint rings of dust and pebble ice.",
            "Bright ice rings harvested for water.",
            "Spectacular rings whose ice supplies the whole region.",
        ),
    ),
    "binary_star": TraitDefinition(
        name="Binary Star", category=_O,
        affinity={REF: 2, TECH: 1}, production_goods=("fuel", "chemicals"),
        descriptions=(
            "Unstable orbits make the system hard to settle.",
            "Twin suns drive energy-hungry refineries.",
            "A stable binary bathed in collector arrays and fusion works.",
        ),
    ),
    "lagrange_stations": TraitDefinition(
        name="Lagrange Stations", category=_O,
        affinity={IND: 2, CORE: 1}, production_goods=("machinery",),
        descriptions=(
            "A single aging station holds the L4 point.",
            "Stations at every stable point build parts in zero-g.",
            "A constellation of fabricator stations rivals planetary industry.",
        ),
    ),
    "captured_rogue_body": TraitDefinition(
        name="Captured Rogue Body", category=_O,
        affinity={EXT: 1, TECH: 1}, production_goods=("ore",),
        descriptions=(
            "An odd interstellar rock in a wide orbit.",
            "A rogue planetoid with unusual isotopes under study.",
            "An ancient wanderer whose exotic crust draws scientists and miners.",
        ),
    ),
    "deep_space_beacon": TraitDefinition(
        name="Deep Space Beacon", category=_O,
        affinity={CORE: 2}, production_goods=(),
        descriptions=(
            "A relay buoy marks the system on charts.",
            "A staffed beacon anchors local shipping lanes.",
            "A major navigation hub every captain plots a course through.",
        ),
    ),

    # --- Resources ---
    "rare_earth_deposits": TraitDefinition(
        name="Rare Earth Deposits", category=_R,
        affinity={EXT: 1, TECH: 2}, production_goods=("electronics",),
        descriptions=(
            "Trace rare earths extracted at considerable cost.",
            "Workable rare-earth seams feed a local chip industry.",
            "The sector's richest rare-earth lode supplies fabs far and wide.",
        ),
    ),
    "heavy_metal_veins": TraitDefinition(
        name="Heavy Metal Veins", category=_R,
        affinity={EXT: 1, IND: 2}, production_goods=("metals", "weapons"),
        descriptions=(
            "Thin veins of tungsten and lead.",
            "Dense veins fuel steady foundry output.",
            "Heavy-metal motherlodes armour fleets across the region.",
        ),
    ),
    "organic_compounds": TraitDefinition(
        name="Organic Compounds", category=_R,
        affinity={AGRI: 1, REF: 1}, production_goods=("chemicals", "medicine"),
        descriptions=(
            "Simple organics seep from surface tar pits.",
            "Complex organics harvested for chemical feedstock.",
            "Prebiotic soups yield rare pharmaceutical precursors.",
        ),
    ),
    "crystalline_formations": TraitDefinition(
        name="Crystalline Formations", category=_R,
        affinity={EXT: 1, TECH: 2}, production_goods=("electronics",),
        descriptions=(
            "Quartz-like outcrops of modest purity.",
            "Lattice crystals cut for optical components.",
            "Flawless resonance crystals prized by quantum engineers.",
        ),
    ),
    "helium3_reserves": TraitDefinition(
        name="Helium-3 Reserves", category=_R,
        affinity={EXT: 1, REF: 2}, production_goods=("fuel",),
        descriptions=(
            "Regolith with trace helium-3.",
            "Regolith plants extract helium-3 for fusion fuel.",
            "Vast helium-3 reserves power reactors across the sector.",
        ),
    ),
    "exotic_matter_traces": TraitDefinition(
        name="Exotic Matter Traces", category=_R,
        affinity={TECH: 2}, production_goods=("electronics",),
        descriptions=(
            "Sensor ghosts hint at exotic particles.",
            "Measurable exotic matter supports a research outpost.",
            "Stable exotic matter reservoirs underwrite cutting-edge labs.",
        ),
    ),
    "radioactive_deposits": TraitDefinition(
        name="Radioactive Deposits", category=_R,
        affinity={EXT: 1, IND: 1}, production_goods=("fuel", "chemicals"),
        descriptions=(
            "Hot spots that most crews avoid.",
            "Shielded mines extract fissile ore.",
            "Rich fissile deposits feed reactors and isotope plants.",
        ),
    ),
    "superdense_core": TraitDefinition(
        name="Superdense Core", category=_R,
        affinity={EXT: 2}, production_goods=("ore", "metals"),
        descriptions=(
            "High gravity makes the shallow mines hard work.",
            "Deep shafts reach a metal-rich mantle.",
            "A compressed core yields ore densities found nowhere else.",
        ),
    ),
    "glacial_aquifer": TraitDefinition(
        name="Glacial Aquifer", category=_R,
        affinity={EXT: 2}, production_goods=("water", "chemicals"),
        descriptions=(
            "Meltwater pockets trapped under the ice.",
            "Subglacial lakes tapped by pumping stations.",
            "A continent-sized aquifer exported in tanker convoys.",
        ),
    ),

    # --- Phenomena ---
    "nebula_proximity": TraitDefinition(
        name="Nebula Proximity", category=_X,
        affinity={EXT: 1, TECH: 1}, production_goods=("chemicals",),
        descriptions=(
            "A faint nebula tints the night sky.",
            "Gas scoops sample the edge of a bright nebula.",
            "A stellar nursery next door feeds collectors and observatories.",
        ),
    ),
    "solar_flare_activity": TraitDefinition(
        name="Solar Flare Activity", category=_X,
        affinity={REF: 1}, production_goods=("fuel",),
        descriptions=(
            "Occasional flares disrupt communications.",
            "Regular flares charge orbital collectors.",
            "Violent flares are harnessed by hardened energy farms.",
        ),
    ),
    "gravitational_anomaly": TraitDefinition(
        name="Gravitational Anomaly", category=_X,
        affinity={TECH: 2}, production_goods=(),
        descriptions=(
            "Navigation computers report small drift errors.",
            "A measurable lensing effect attracts physicists.",
            "A spacetime distortion studied by an entire research consortium.",
        ),
    ),
    "dark_nebula": TraitDefinition(
        name="Dark Nebula", category=_X,
        affinity={}, production_goods=(),
        descriptions=(
            "Patchy dust dims the sensors.",
            "Thick dust clouds hide smugglers and pirates.",
            "An opaque shroud where ships vanish from every scope.",
        ),
    ),
    "precursor_ruins": TraitDefinition(
        name="Precursor Ruins", category=_X,
        affinity={TECH: 2, CORE: 1}, production_goods=("electronics",),
        descriptions=(
            "Weathered fragments of an unknown builder.",
            "Excavated halls still yield working artefacts.",
            "An intact precursor complex that rewrote several sciences.",
        ),
    ),
    "subspace_rift": TraitDefinition(
        name="Subspace Rift", category=_X,
        affinity={TECH: 2}, production_goods=(),
        descriptions=(
            "A flickering tear that appears once a cycle.",
            "A persistent rift monitored by a science station.",
            "A stable rift whose emissions drive experimental drives.",
        ),
    ),
    "pulsar_proximity": TraitDefinition(
        name="Pulsar Proximity", category=_X,
        affinity={IND: 1, TECH: 1}, production_goods=("electronics",),
        descriptions=(
            "A distant pulsar ticks in the background noise.",
            "Pulsar timing anchors local precision manufacturing.",
            "A nearby pulsar powers clocks and fabs across the sector.",
        ),
    ),
    "ion_storm_corridor": TraitDefinition(
        name="Ion Storm Corridor", category=_X,
        affinity={REF: 2}, production_goods=("chemicals",),
        descriptions=(
            "Intermittent storms scramble sensors.",
            "Storm collectors harvest ionised gases.",
            "A permanent storm lane feeds huge ionisation refineries.",
        ),
    ),
    "bioluminescent_ecosystem": TraitDefinition(
        name="Bioluminescent Ecosystem", category=_X,
        affinity={AGRI: 2, TECH: 1}, production_goods=("food", "medicine"),
        descriptions=(
            "Glowing algae bloom in a few coastal bays.",
            "Luminous forests yield edible fungi and enzymes.",
            "A radiant biosphere prized by gourmets and biotech firms alike.",
        ),
    ),

    # --- Legacy ---
    "ancient_trade_route": TraitDefinition(
        name="Ancient Trade Route", category=_L,
        affinity={IND: 1, CORE: 2}, production_goods=("luxuries",),
        descriptions=(
            "Old nav markers trace a forgotten route.",
            "A revived trade lane brings steady caravans.",
            "A legendary crossroads where every merchant house keeps an office.",
        ),
    ),
    "generation_ship_wreckage": TraitDefinition(
        name="Generation Ship Wreckage", category=_L,
        affinity={EXT: 1, IND: 1}, production_goods=("metals",),
        descriptions=(
            "A gutted hull drifts in a high orbit.",
            "Salvage crews strip the ancient colony ship.",
            "A city-sized wreck mined for alloys no longer made.",
        ),
    ),
    "orbital_ring_remnant": TraitDefinition(
        name="Orbital Ring Remnant", category=_L,
        affinity={IND: 2, CORE: 1}, production_goods=("machinery",),
        descriptions=(
            "Broken arcs of a ring circle the planet.",
            "Restored ring segments host orbital yards.",
            "A nearly complete ring hosting the largest shipyards in the region.",
        ),
    ),
    "seed_vault": TraitDefinition(
        name="Seed Vault", category=_L,
        affinity={AGRI: 2, TECH: 1}, production_goods=("food", "textiles"),
        descriptions=(
            "A sealed vault of uncertain contents.",
            "A catalogued gene bank supplies local breeders.",
            "The sector's master seed archive and the crops it spawns.",
        ),
    ),
    "colonial_capital": TraitDefinition(
        name="Colonial Capital", category=_L,
        affinity={CORE: 2, IND: 1}, production_goods=("luxuries",),
        descriptions=(
            "A faded administrative seat.",
            "A busy capital with ministries and markets.",
            "The historic seat of colonial power and its gilded markets.",
        ),
    ),
    "free_port_declaration": TraitDefinition(
        name="Free Port Declaration", category=_L,
        affinity={CORE: 2}, production_goods=("luxuries", "textiles"),
        descriptions=(
            "A charter nobody enforces anymore.",
            "A tariff-free port drawing traders from neighbouring systems.",
            "A celebrated free port bustling with every kind of cargo.",
        ),
    ),
    "shipbreaking_yards": TraitDefinition(
        name="Shipbreaking Yards", category=_L,
        affinity={IND: 2, EXT: 1}, production_goods=("metals", "weapons"),
        descriptions=(
            "A handful of hulks stripped by hand.",
            "Yards recycle decommissioned freighters.",
            "Industrial breakers reduce whole fleets to feedstock.",
        ),
    ),
}

ALL_TRAIT_IDS: List[str] = list(TRAIT_REGISTRY)


def get_trait(trait_id: str) -> TraitDefinition:
    """Look up a trait definition.

    Raises:
        KeyError: If the trait id is not in the catalog.
    """
    if trait_id not in TRAIT_REGISTRY:
        raise KeyError(f"Unknown trait: {trait_id}")
    return TRAIT_REGISTRY[trait_id]


def strong_affinity_traits() -> List[str]:
    """Trait ids with a strong affinity to at least one archetype."""
    return [tid for tid, t in TRAIT_REGISTRY.items() if t.has_strong_affinity()]


def traits_with_strong_affinity(economy: EconomyType) -> List[str]:
    return [
        tid for tid, t in TRAIT_REGISTRY.items()
        if t.affinity_for(economy) == STRONG_AFFINITY
    ]


def compute_trait_production_bonus(traits: Iterable, good_id: str) -> float:
    """Summed quality modifiers of traits that boost production of a good.

    ``traits`` holds objects with ``trait_id`` and ``quality`` attributes,
    e.g. ``GeneratedTrait``. Unknown trait ids are ignored.
    """
    bonus = 0.0
    for trait in traits:
        definition = TRAIT_REGISTRY.get(trait.trait_id)
        if definition is None or good_id not in definition.production_goods:
            continue
        bonus += QUALITY_TIERS[QualityTier(trait.quality)].modifier
    return bonus


def trait_ids_by_category(category: TraitCategory) -> List[str]:
    return [tid for tid, t in TRAIT_REGISTRY.items() if t.category == category]

