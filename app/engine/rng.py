"""
Deterministic pseudo-randomness for reproducible attendance generation.

Seeds are 32-bit FNV-1a hashes of stable identifier strings, and the
generator is a plain 32-bit linear congruential generator. This is about
reproducibility, not security: the same key always yields the same stream.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_TWO_POW_32 = 4294967296


def hash_seed(text: str) -> int:
    """32-bit FNV-1a hash of ``text``."""
    h = _FNV_OFFSET_BASIS
    for ch in text:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & _MASK32
    return h


def seed_key(*parts: object) -> str:
    return "-".join(str(p) for p in parts)


class SeededRandom:
    """LCG producing floats in ``[0, 1)``."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def random(self) -> float:
        self._state = (_LCG_MULTIPLIER * self._state + _LCG_INCREMENT) & _MASK32
        return self._state / _TWO_POW_32

    def randint(self, low: int, high: int) -> int:
        """Integer in ``[low, high]`` inclusive."""
        return low + int(self.random() * (high - low + 1))

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[int(self.random() * len(items))]


def shuffle_deterministic(items: Sequence[T], rng: SeededRandom) -> list[T]:
    """Fisher-Yates shuffle into a new list; ``items`` is left untouched."""
    copy = list(items)
    for i in range(len(copy) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        copy[i], copy[j] = copy[j], copy[i]
    return copy
