"""Seeded pseudo-randomness for cosmetic content selection.

Neither helper is suitable for security or fairness-critical use; they only
need to be cheap, reproducible and spread well enough to vary suggestions.
"""

from __future__ import annotations

from typing import Iterator

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223


class SeededRandom:
    """Linear congruential generator yielding floats in ``[0, 1]``.

    Calling the instance advances the state; iterating it yields the same
    infinite stream. Reseed by constructing a new instance.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _UINT32_MASK

    def __call__(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & _UINT32_MASK
        return self._state / _UINT32_MASK

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self()


def fingerprint(text: str) -> int:
    """Return a non-negative 31-multiplier rolling hash of ``text``.

    Accumulates over UTF-16 code units with signed 32-bit wraparound so
    the distribution matches the browser client's seed derivation.
    """
    encoded = text.encode("utf-16-le")
    value = 0
    for index in range(0, len(encoded), 2):
        unit = encoded[index] | (encoded[index + 1] << 8)
        value = (value * 31 + unit) & _UINT32_MASK
    if value & _INT32_SIGN:
        value -= 1 << 32
    return abs(value)


def seed_from(*parts: object) -> int:
    """Fingerprint ``parts`` joined with ``|``; ``None`` renders empty."""
    return fingerprint("|".join("" if part is None else str(part) for part in parts))
