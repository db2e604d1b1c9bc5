from __future__ import annotations

from itertools import islice

from musewave_worker.services.randomness import SeededRandom, fingerprint, seed_from


def test_seeded_random_is_deterministic() -> None:
    first = list(islice(SeededRandom(42), 16))
    second = list(islice(SeededRandom(42), 16))
    assert first == second
    assert all(0.0 <= value <= 1.0 for value in first)
    assert list(islice(SeededRandom(43), 16)) != first


def test_seeded_random_first_step_from_zero() -> None:
    rng = SeededRandom(0)
    assert rng() == 1013904223 / 0xFFFFFFFF


def test_seeded_random_masks_large_seeds() -> None:
    assert list(islice(SeededRandom(2**32 + 5), 4)) == list(islice(SeededRandom(5), 4))


def test_fingerprint_matches_rolling_hash() -> None:
    assert fingerprint("") == 0
    assert fingerprint("a") == 97
    assert fingerprint("ab") == 3105
    assert fingerprint("hello") == 99162322


def test_fingerprint_wraps_to_non_negative() -> None:
    # Hashes to the most negative 32-bit value before the absolute value.
    assert fingerprint("polygenelubricants") == 2147483648
    assert fingerprint("a long enough prompt to overflow many times") >= 0


def test_fingerprint_counts_utf16_code_units() -> None:
    # U+1F3B5 is a surrogate pair: 0xD83C then 0xDFB5.
    assert fingerprint("\U0001F3B5") == 0xD83C * 31 + 0xDFB5


def test_seed_from_renders_none_as_empty() -> None:
    assert seed_from("a", None, 3) == fingerprint("a||3")
