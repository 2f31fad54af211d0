"""Seeded random helpers for reproducible world structures.

Every draw is a pure function of the seed value passed in, so the same seed
arithmetic always reproduces the same layout. Seeds may be floats; the seed
formulas used by the generators divide freely.
"""

from __future__ import annotations

import math
import secrets
from typing import MutableSequence, Sequence, TypeVar

T = TypeVar("T")


def generate_seed() -> int:
    """Return a positive 31-bit seed for ad-hoc runs."""
    return secrets.randbits(31) or 1


def js_round(value: float) -> int:
    """Round half toward positive infinity, like JavaScript's Math.round."""
    return math.floor(value + 0.5)


def js_mod(value: float, divisor: float) -> float:
    """Remainder carrying the dividend's sign, like JavaScript's % operator."""
    result = math.fmod(value, divisor)
    if isinstance(value, int) and isinstance(divisor, int):
        return int(result)
    return result


def random_value(seed: float) -> float:
    """Return a float in the range [0.0, 1.0) derived from ``seed``."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def random_int(seed: float, low: float, high: float) -> float:
    """Return ``floor(random * (high - low)) + low``.

    The upper bound is exclusive. Bounds are not validated: the seed formulas
    occasionally pass fractional or inverted bounds and rely on the raw
    arithmetic.
    """
    return math.floor(random_value(seed) * (high - low)) + low


def random_bool(seed: float, threshold: float = 0.5) -> bool:
    return random_value(seed) > threshold


def pick_distinct(seed: float, pool: Sequence[T], count: int) -> list[T]:
    """Pick up to ``count`` distinct items from ``pool`` in seeded order."""
    remaining: MutableSequence[T] = list(pool)
    picked: list[T] = []
    for i in range(int(count)):
        if not remaining:
            break
        index = int(random_int(seed + 211 * i + 7, 0, len(remaining)))
        picked.append(remaining.pop(index))
    return picked


__all__ = [
    "generate_seed",
    "js_mod",
    "js_round",
    "pick_distinct",
    "random_bool",
    "random_int",
    "random_value",
]
