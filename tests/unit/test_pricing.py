"""Tests for supply/demand pricing."""

import pytest

from starbang.economy.pricing import calculate_price, entry_price
from starbang.economy.tick import MarketEntry


def test_balanced_market_trades_at_base():
    assert calculate_price(100, 60, 60) == 100


def test_scarcity_raises_price():
    assert calculate_price(100, 40, 120) == 300


def test_glut_lowers_price():
    assert calculate_price(100, 120, 40) == 33


def test_clamped_to_default_bounds():
    assert calculate_price(100, 5, 200) == 500
    assert calculate_price(100, 200, 5) == 20


def test_custom_bounds():
    assert calculate_price(120, 5, 200, price_ceiling=480) == 480
    assert calculate_price(100, 200, 5, price_floor=50) == 50


def test_empty_supply_prices_at_ceiling():
    assert calculate_price(40, 0, 60) == 200


def test_negative_base_price_rejected():
    with pytest.raises(ValueError):
        calculate_price(-1, 10, 10)


def test_entry_price_uses_entry_bounds():
    entry = MarketEntry(
        system_id="system-0",
        good_id="weapons",
        supply=10,
        demand=200,
        base_price=120,
        price_ceiling=480,
    )
    assert entry_price(entry) == 480
