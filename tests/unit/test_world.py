"""Tests for the simulation world and its tick modes."""

from dataclasses import fields

import pytest

from starbang.economy.constants import GOODS, GOVERNMENT_TYPES
from starbang.economy.modifiers import Modifier, ModifierType, TargetType
from starbang.economy.tick import MarketRole
from starbang.economy.world import (
    TICK_MODE_ALL,
    TICK_MODE_ROUND_ROBIN,
    SimSystem,
    create_world,
    world_from_universe,
)
from starbang.universe.catalog import EconomyType, GovernmentType
from starbang.universe.models import (
    GeneratedConnection,
    GeneratedRegion,
    GeneratedSystem,
    GeneratedTrait,
    GeneratedUniverse,
)
from starbang.universe.params import GenerationParams


def no_noise():
    return 0.5


@pytest.fixture()
def tiny_universe():
    regions = [
        GeneratedRegion(0, "Beta", GovernmentType.FRONTIER, 100, 100),
        GeneratedRegion(1, "Alpha", GovernmentType.AUTHORITARIAN, 900, 900),
    ]
    systems = [
        GeneratedSystem(
            0, "Beta-1", 0, 120, 100,
            [GeneratedTrait("habitable_world", 2)],
            EconomyType.AGRICULTURAL,
            is_gateway=True,
        ),
        GeneratedSystem(
            1, "Alpha-1", 1, 880, 900,
            [GeneratedTrait("asteroid_belt", 1)],
            EconomyType.CORE,
            is_gateway=True,
        ),
    ]
    connections = [
        GeneratedConnection(0, 1, 20.0, True),
        GeneratedConnection(1, 0, 20.0, True),
    ]
    return GeneratedUniverse(
        seed=99,
        regions=regions,
        systems=systems,
        connections=connections,
        starting_system_index=1,
    )


@pytest.fixture()
def world(tiny_universe):
    return world_from_universe(tiny_universe)


def _market(world, system_id, good_id):
    return next(
        m for m in world.markets if m.system_id == system_id and m.good_id == good_id
    )


class TestBuildMarkets:
    def test_one_market_per_system_and_good(self, world):
        assert len(world.markets) == 2 * len(GOODS)
        assert {m.good_id for m in world.markets_for_system("system-0")} == set(GOODS)

    def test_ids_and_start(self, world):
        assert [r.id for r in world.regions] == ["region-0", "region-1"]
        assert world.system("system-1").region_id == "region-1"
        assert world.starting_system_id == "system-1"
        assert world.connections[0].from_system_id == "system-0"

    def test_producer_rate_includes_trait_bonus(self, world):
        food = _market(world, "system-0", "food")
        assert food.role == MarketRole.PRODUCES
        assert food.production_rate == pytest.approx(5 * 1.40)

    def test_frontier_widens_spread(self, world):
        food = _market(world, "system-0", "food")
        assert (food.supply, food.demand) == (128, 32)
        water = _market(world, "system-0", "water")
        assert water.role == MarketRole.CONSUMES
        assert (water.supply, water.demand) == (32, 128)

    def test_frontier_raises_volatility(self, world):
        food = _market(world, "system-0", "food")
        assert food.volatility == pytest.approx(0.8 * 1.5)

    def test_authoritarian_tightens_spread(self, world):
        food = _market(world, "system-1", "food")
        assert food.role == MarketRole.CONSUMES
        assert (food.supply, food.demand) == (46, 114)

    def test_per_good_equilibrium_override(self, world):
        luxuries = _market(world, "system-1", "luxuries")
        assert luxuries.role == MarketRole.PRODUCES
        assert (luxuries.supply, luxuries.demand) == (87, 53)

    def test_government_boosts_consumption(self, world):
        weapons = _market(world, "system-1", "weapons")
        assert weapons.consumption_rate == 2
        assert weapons.price_ceiling == 480
        # Core systems never consume fuel; the boost adds the market.
        fuel = _market(world, "system-1", "fuel")
        assert fuel.role == MarketRole.CONSUMES
        assert fuel.consumption_rate == 1

    def test_systems_carry_market_inputs_only(self, world):
        assert {f.name for f in fields(SimSystem)} == {
            "id", "name", "region_id", "economy_type", "produces", "consumes",
            "traits", "is_gateway",
        }
        assert not hasattr(GOVERNMENT_TYPES[GovernmentType.FRONTIER], "trade_restrictions")

    def test_neutral_goods(self, world):
        ore = _market(world, "system-1", "ore")
        assert ore.role == MarketRole.NEUTRAL
        assert (ore.supply, ore.demand) == (60, 60)


class TestAdvance:
    def test_round_robin_by_region_name(self, world):
        before = list(world.markets)
        assert world.region_order()[0].name == "Alpha"

        updated = world.advance(no_noise, mode=TICK_MODE_ROUND_ROBIN)
        assert updated == len(GOODS)
        assert world.markets_for_system("system-0") == [
            m for m in before if m.system_id == "system-0"
        ]
        assert world.markets_for_system("system-1") != [
            m for m in before if m.system_id == "system-1"
        ]

        world.advance(no_noise, mode=TICK_MODE_ROUND_ROBIN)
        assert world.markets_for_system("system-0") != [
            m for m in before if m.system_id == "system-0"
        ]
        assert world.tick == 2

    def test_all_mode_updates_everything(self, world):
        assert world.advance(no_noise, mode=TICK_MODE_ALL) == len(world.markets)
        assert world.tick == 1

    def test_unknown_mode(self, world):
        with pytest.raises(ValueError, match="Unknown tick mode"):
            world.advance(no_noise, mode="sideways")

    def test_region_modifier_only_hits_its_region(self, world):
        boom = Modifier(
            domain="economy",
            type=ModifierType.EQUILIBRIUM_SHIFT,
            target_type=TargetType.REGION,
            target_id="region-0",
            parameter="supply_target",
            value=40,
            good_id="ore",
        )
        world.advance(no_noise, modifiers=[boom], mode=TICK_MODE_ALL)
        assert _market(world, "system-0", "ore").supply == 62
        assert _market(world, "system-1", "ore").supply == 60
        assert world.modifiers == [boom]

    def test_modifiers_persist_until_replaced(self, world):
        boom = Modifier("economy", ModifierType.EQUILIBRIUM_SHIFT, TargetType.SYSTEM,
                        "system-1", "supply_target", 40, "ore")
        world.advance(no_noise, modifiers=[boom], mode=TICK_MODE_ALL)
        world.advance(no_noise, mode=TICK_MODE_ALL)
        assert _market(world, "system-1", "ore").supply > 62
        world.advance(no_noise, modifiers=[], mode=TICK_MODE_ALL)
        assert _market(world, "system-1", "ore").shifts.supply_target_shift == 0


def test_create_world_from_params():
    world = create_world(GenerationParams(seed=7, region_count=4, total_systems=60))
    assert len(world.markets) == len(world.systems) * len(GOODS)
    assert world.system(world.starting_system_id)
    assert {r.government for r in world.regions} == set(GovernmentType)
