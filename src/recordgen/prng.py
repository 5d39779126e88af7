"""Seedable bit generators. Every derivation step builds its own instance."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from recordgen.hashing import MASK64

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MIX1 = 0xBF58476D1CE4E5B9
_MIX2 = 0x94D049BB133111EB
_TWO_POW_53 = float(1 << 53)


class BitGenerator(ABC):
    """Narrow generator interface: uint64, unit float and bounded int draws."""

    @abstractmethod
    def next_uint64(self) -> int:
        """Return the next uniform integer in [0, 2**64)."""
        ...

    def next_float(self) -> float:
        """Top 53 bits of a draw scaled to [0, 1)."""
        return (self.next_uint64() >> 11) / _TWO_POW_53

    def next_int(self, max_exclusive: int) -> int:
        """floor(next_float() * max_exclusive)."""
        return int(self.next_float() * max_exclusive)


class SplitMix64(BitGenerator):
    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state = seed & MASK64

    def next_uint64(self) -> int:
        z = (self.state + GOLDEN_GAMMA) & MASK64
        self.state = z
        z = ((z ^ (z >> 30)) * _MIX1) & MASK64
        z = ((z ^ (z >> 27)) * _MIX2) & MASK64
        return z ^ (z >> 31)


RngFactory = Callable[[int], BitGenerator]
