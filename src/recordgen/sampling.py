"""Uniform and weighted picks from value pools."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from recordgen.prng import BitGenerator

T = TypeVar("T")


def flat_pick(rng: BitGenerator, values: Sequence[T]) -> T:
    """Uniform pick. Raises ValueError on an empty pool."""
    if not values:
        raise ValueError("cannot pick from an empty pool")
    return values[rng.next_int(len(values))]


def weighted_pick(
    rng: BitGenerator, values: Sequence[T], weights: Sequence[float] | None = None
) -> T:
    """
    Pick proportional to `weights` (parallel to `values`); uniform when no weights.
    Falls back to the last value if float round-off leaves r > 0 after the walk.
    """
    if not values:
        raise ValueError("cannot pick from an empty pool")
    if not weights:
        return flat_pick(rng, values)
    if len(weights) != len(values):
        raise ValueError(f"weights length {len(weights)} != values length {len(values)}")
    r = rng.next_float() * sum(weights)
    for value, w in zip(values, weights, strict=True):
        r -= w
        if r <= 0:
            return value
    return values[-1]
