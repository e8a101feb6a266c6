"""Tests for the mean-reverting economy tick."""

import pytest

from starbang.economy.constants import EquilibriumTarget
from starbang.economy.modifiers import MarketShifts
from starbang.economy.tick import (
    EconomyTickParams,
    MarketEntry,
    MarketRole,
    simulate_economy_tick,
)
from starbang.universe.params import ConfigurationError
from starbang.universe.rng import Mulberry32


def no_noise():
    """A mid-range draw gives exactly zero noise."""
    return 0.5


def _entry(role=MarketRole.NEUTRAL, supply=60, demand=60, **kwargs):
    return MarketEntry(
        system_id="system-0",
        good_id="ore",
        supply=supply,
        demand=demand,
        base_price=30,
        role=role,
        **kwargs,
    )


@pytest.fixture()
def params():
    return EconomyTickParams()


class TestWorkedValues:
    def test_producer_at_equilibrium(self, params):
        (result,) = simulate_economy_tick(
            [_entry(MarketRole.PRODUCES, 120, 40)], params, no_noise
        )
        assert result.supply == 123
        assert result.demand == 39

    def test_consumer_at_equilibrium(self, params):
        (result,) = simulate_economy_tick(
            [_entry(MarketRole.CONSUMES, 40, 120)], params, no_noise
        )
        assert result.supply == 38
        assert result.demand == 121

    def test_neutral_stays_put(self, params):
        (result,) = simulate_economy_tick([_entry()], params, no_noise)
        assert (result.supply, result.demand) == (60, 60)

    def test_entry_rate_overrides_default(self, params):
        entry = _entry(MarketRole.PRODUCES, 120, 40, production_rate=10)
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert result.supply == 130
        assert result.demand == 37

    def test_entry_equilibrium_override(self, params):
        entry = _entry(supply=100, demand=50, equilibrium=EquilibriumTarget(100, 50))
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert (result.supply, result.demand) == (100, 50)

    def test_minimum_draws_give_negative_noise(self, params):
        (result,) = simulate_economy_tick([_entry()], params, lambda: 0.0)
        assert result.supply == 57
        assert result.demand == 57

    def test_volatility_scales_noise(self, params):
        (result,) = simulate_economy_tick([_entry(volatility=2.0)], params, lambda: 0.0)
        assert result.supply == 54

    def test_two_draws_per_entry(self, params, counting_rng):
        rng = counting_rng()
        simulate_economy_tick([_entry(), _entry(MarketRole.PRODUCES)], params, rng)
        assert rng.calls == 4

    def test_supply_draw_then_demand_draw(self, params, counting_rng):
        rng = counting_rng([0.2, 0.7, 0.3, 0.9])
        (result,) = simulate_economy_tick([_entry()], params, rng)
        # -1.8 on supply, +1.2 on demand.
        assert (result.supply, result.demand, rng.calls) == (58, 61, 2)


class TestShifts:
    def test_supply_target_shift(self, params):
        entry = _entry(shifts=MarketShifts(supply_target_shift=40))
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert result.supply == 62
        assert result.demand == 60

    def test_demand_target_shift(self, params):
        entry = _entry(shifts=MarketShifts(demand_target_shift=80))
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert result.demand == 64

    def test_production_multiplier(self, params):
        entry = _entry(MarketRole.PRODUCES, 120, 40, shifts=MarketShifts(production_mult=0.5))
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert result.supply == pytest.approx(121.5)
        assert result.demand == 40

    def test_consumption_multiplier(self, params):
        entry = _entry(MarketRole.CONSUMES, 40, 120, shifts=MarketShifts(consumption_mult=0.5))
        (result,) = simulate_economy_tick([entry], params, no_noise)
        assert result.supply == 39
        assert result.demand == 121

    def test_reversion_dampening(self, params):
        damped = _entry(supply=100, shifts=MarketShifts(reversion_mult=0.5))
        normal = _entry(supply=100)
        damped_result, normal_result = simulate_economy_tick([damped, normal], params, no_noise)
        assert damped_result.supply == 99
        assert normal_result.supply == 98


class TestInvariants:
    def test_inputs_not_mutated(self, params):
        entries = [_entry(MarketRole.PRODUCES, 150, 10), _entry(MarketRole.CONSUMES, 10, 150)]
        snapshot = [(e.supply, e.demand) for e in entries]
        results = simulate_economy_tick(entries, params, Mulberry32(3))
        assert [(e.supply, e.demand) for e in entries] == snapshot
        assert results is not entries
        assert [r.good_id for r in results] == [e.good_id for e in entries]

    def test_levels_clamped(self, params):
        entries = [
            _entry(MarketRole.PRODUCES, 200, 5, production_rate=50),
            _entry(MarketRole.CONSUMES, 5, 200, consumption_rate=50),
        ]
        for result in simulate_economy_tick(entries, params, Mulberry32(9)):
            assert params.min_level <= result.supply <= params.max_level
            assert params.min_level <= result.demand <= params.max_level

    def test_converges_toward_equilibrium(self, params):
        entries = [_entry(MarketRole.PRODUCES, 10, 190), _entry(MarketRole.CONSUMES, 190, 10)]
        rng = Mulberry32(17)
        for _ in range(300):
            entries = simulate_economy_tick(entries, params, rng)
        producer, consumer = entries
        # Production adds a steady surplus above the reversion target.
        assert producer.supply > producer.demand + 50
        assert consumer.demand > consumer.supply + 50

    def test_deterministic(self, params):
        entries = [_entry(MarketRole.PRODUCES, 100, 70), _entry(MarketRole.CONSUMES, 70, 100)]
        a = simulate_economy_tick(entries, params, Mulberry32(5))
        b = simulate_economy_tick(entries, params, Mulberry32(5))
        assert a == b

    def test_empty_batch(self, params, counting_rng):
        rng = counting_rng()
        assert simulate_economy_tick([], params, rng) == []
        assert rng.calls == 0


class TestValidate:
    def test_defaults_valid(self, params):
        assert params.validate() is params

    def test_min_above_max(self):
        with pytest.raises(ConfigurationError, match="min_level"):
            EconomyTickParams(min_level=300).validate()

    def test_reversion_out_of_range(self):
        with pytest.raises(ConfigurationError):
            EconomyTickParams(reversion_rate=1.5).validate()

    def test_negative_noise(self):
        with pytest.raises(ConfigurationError):
            EconomyTickParams(noise_amplitude=-1).validate()

    def test_missing_equilibrium_role(self):
        params = EconomyTickParams()
        del params.equilibrium[MarketRole.NEUTRAL]
        with pytest.raises(ConfigurationError, match="neutral"):
            params.validate()
