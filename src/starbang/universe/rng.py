"""Seeded random source and the choice helpers built on top of it.

Every random decision in universe generation and the economy tick goes
through a ``Mulberry32`` instance that is passed around explicitly. Output
must stay bit-for-bit stable for a given seed, so the arithmetic below
emulates unsigned 32-bit integers with explicit masking.
"""

import math
from typing import Callable, Mapping, Sequence, TypeVar

T = TypeVar("T")

# Anything that returns a float in [0, 1) when called.
RNG = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5
_TWO_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (unsigned result)."""
    return (a * b) & _MASK32


class Mulberry32:
    """Mulberry32 generator over a single 32-bit state word."""

    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state = seed & _MASK32

    def __call__(self) -> float:
        self.state = (self.state + _GOLDEN_GAMMA) & _MASK32
        s = self.state
        t = _imul(s ^ (s >> 15), s | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_32


def rand_int(rng: RNG, lo: int, hi: int) -> int:
    """Uniform integer in ``[lo, hi]`` using one draw."""
    return math.floor(rng() * (hi - lo + 1)) + lo


def pick_uniform(rng: RNG, items: Sequence[T]) -> T:
    """Uniform pick from a non-empty sequence using one draw."""
    return items[math.floor(rng() * len(items))]


def weighted_pick(rng: RNG, weights: Mapping[T, float]) -> T:
    """Pick a label from a categorical weight table using one draw.

    The roll is walked down the table in insertion order; the first label
    that takes it to zero or below wins. If float error leaves a positive
    remainder the last label is returned.

    Args:
        rng: Seeded random source.
        weights: Label to non-negative weight, in a stable order.

    Returns:
        The chosen label.

    Raises:
        ValueError: If the table is empty.
    """
    if not weights:
        raise ValueError("weighted_pick requires at least one option")
    total = sum(weights.values())
    roll = rng() * total
    last = None
    for label, weight in weights.items():
        roll -= weight
        if roll <= 0:
            return label
        last = label
    return last


def js_round(value: float) -> int:
    """Round half up (toward +inf). The builtin ``round`` rounds half to even."""
    return math.floor(value + 0.5)


def round_1dp(value: float) -> float:
    return js_round(value * 10) / 10
