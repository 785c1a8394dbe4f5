from __future__ import annotations

"""Deterministic seeding helpers and a Mulberry32 generator for worldgen."""

import math
from typing import Union

Seed = Union[int, str]

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32x32 multiply."""
    return (a * b) & _MASK32


def seed_to_int(seed: Seed) -> int:
    """
    Fold a world seed into an unsigned 32-bit integer.
    Strings hash character by character; a zero result maps to 1.
    """
    if isinstance(seed, bool):
        seed = int(seed)
    if isinstance(seed, int):
        n = seed & _MASK32
    else:
        n = 0
        for ch in str(seed):
            n = (n * 31 + ord(ch)) & _MASK32
    return n or 1


def stable_hash(*args: int) -> int:
    """
    Combine integer arguments into a single 64-bit integer using a deterministic mixing routine.
    Ensures repeatable results across Python runs (unlike built-in hash()).
    """
    x = 0x345678ABCDEF1234
    for a in args:
        a &= _MASK64
        a ^= a >> 33
        a = (a * 0xFF51AFD7ED558CCD) & _MASK64
        a ^= a >> 33
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & _MASK64
    return x


class Mulberry32:
    """
    Seeded PRNG producing floats in [0, 1) from 32-bit integer mixing only.

    Not thread-safe; each generation stream should own its own instance.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int = 1) -> None:
        self._state = _imul((seed & _MASK32) ^ 0x85EBCA6B, 0xC2B2AE35)

    def next(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        x = _imul(t ^ (t >> 15), 1 | t)
        x = (x ^ ((x + _imul(x ^ (x >> 7), 61 | x)) & _MASK32)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296.0

    def next_in(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.next()

    def next_int(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends inclusive."""
        return math.floor(self.next_in(lo, hi + 1))

    def chance(self, p: float) -> bool:
        return self.next() < p


def tile_rng(seed: Seed, q: int, r: int, tag: int = 0) -> Mulberry32:
    """
    Return a generator whose stream depends only on the world seed, the
    coordinate, and a purpose tag, so tiles can be produced in any order.
    """
    mixed = stable_hash(seed_to_int(seed), q, r, tag)
    return Mulberry32((mixed ^ (mixed >> 32)) & _MASK32)


__all__ = ["Mulberry32", "Seed", "seed_to_int", "stable_hash", "tile_rng"]
