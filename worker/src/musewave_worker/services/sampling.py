"""Sampling without replacement and the repeat-avoidance retry policy."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, TypeVar

from loguru import logger

T = TypeVar("T")

MAX_NOVELTY_RETRIES = 3


def pick_unique(
    pool: Sequence[str],
    count: int,
    rng: Callable[[], float],
    exclude: Iterable[str] = (),
) -> list[str]:
    """Draw up to ``count`` distinct items from ``pool`` in draw order.

    Items whose case-folded form appears in ``exclude`` are never drawn and
    case-insensitive duplicates inside ``pool`` collapse to the first one
    drawn. Returns fewer than ``count`` items when the pool runs dry.
    """
    excluded = {value.casefold() for value in exclude}
    working = [item for item in pool if item.casefold() not in excluded]
    result: list[str] = []
    used: set[str] = set()
    while working and len(result) < count:
        # rng() may return exactly 1.0
        index = min(int(rng() * len(working)), len(working) - 1)
        value = working.pop(index)
        folded = value.casefold()
        if folded in used:
            continue
        used.add(folded)
        result.append(value)
    return result


def ensure_different(
    generate: Callable[[int], T],
    previous: T,
    *,
    max_retries: int = MAX_NOVELTY_RETRIES,
) -> T:
    """Regenerate until the value differs from ``previous`` or retries run out.

    ``generate`` receives the attempt number so each retry can reseed. The
    last computed value is returned even when it still equals ``previous``.
    """
    attempt = 0
    value = generate(attempt)
    while value == previous and attempt < max_retries:
        attempt += 1
        value = generate(attempt)
    if attempt and value == previous:
        logger.debug("novelty guard exhausted {} retries without a new value", attempt)
    return value


def normalise_whitespace(value: str) -> str:
    return " ".join(value.split())


def capitalise_phrase(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]
