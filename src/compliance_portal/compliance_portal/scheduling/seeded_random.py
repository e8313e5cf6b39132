"""Deterministic random numbers for schedule generation.

The same (client, title, year) seed must always reproduce the same dates, so
both the hash and the generator are fixed 32-bit integer recipes rather than
:mod:`random`, whose algorithm is not part of any compatibility promise.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223

_MASK_32 = 0xFFFFFFFF
_MODULUS = 2**32

Rng = Callable[[], float]


def _utf16_code_units(text: str) -> Iterator[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_seed(text: str) -> int:
    """FNV-1a over UTF-16 code units, as an unsigned 32-bit integer."""

    value = FNV_OFFSET_BASIS
    for unit in _utf16_code_units(text):
        value ^= unit
        value = (value * FNV_PRIME) & _MASK_32
    return value


def seeded_random(seed: int) -> Rng:
    """Return an LCG stream of floats in ``[0, 1)`` starting from ``seed``."""

    state = seed & _MASK_32

    def rng() -> float:
        nonlocal state
        state = (LCG_MULTIPLIER * state + LCG_INCREMENT) & _MASK_32
        return state / _MODULUS

    return rng


def rand_int(rng: Rng, lo: int, hi: int) -> int:
    """Inclusive on both ends."""
    return math.floor(rng() * (hi - lo + 1)) + lo
