"""Seeded pseudo-random source for reproducible tie-breaking.

String seeds are hashed with 32-bit FNV-1a; the stream itself is mulberry32.
Each session build owns its own instance, so identical seeds give identical
sessions regardless of what else runs in the process.
"""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def hash_seed(seed: str) -> int:
    """Hash a string to an unsigned 32-bit integer with FNV-1a over its code points."""
    value = _FNV_OFFSET_BASIS
    for char in seed:
        value ^= ord(char)
        value = (value * _FNV_PRIME) & _MASK_32
    return value


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK_32


class SeededRandom:
    """mulberry32 generator producing floats in [0, 1).

    Usage:
        rng = SeededRandom("strength-45")
        jitter = rng.random() * 0.2
    """

    def __init__(self, seed: str | int) -> None:
        if isinstance(seed, int):
            self._state = seed & _MASK_32
        else:
            self._state = hash_seed(seed)

    def random(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK_32
        return ((t ^ (t >> 14)) & _MASK_32) / _TWO_POW_32

    __call__ = random
