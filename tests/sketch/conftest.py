"""Shared helpers for estimator tests.

Most tests bypass SHA-256 and feed hashes directly: the key *is* the
64-bit hash and the estimator gets an identity hash_fn. That makes
register contents predictable.
"""
from __future__ import annotations

import pytest


def _reverse(value: int, width: int) -> int:
    out = 0
    for _ in range(width):
        out = (out << 1) | (value & 1)
        value >>= 1
    return out


def evenly_spread_hashes(n: int, p: int) -> list[int]:
    """n synthetic hashes spread evenly over registers and tails.

    Hash i goes to register i % 2^p. Within a register, the high half
    of the tail walks evenly across (0, 1) and the low half walks the
    cell midpoints of the same grid, bit-reversed, so both the
    leading-one and the trailing-one rank see a uniform spread.
    """
    m = 1 << p
    per_register = n // m
    tail_len = 64 - p
    half = tail_len // 2
    hashes = []
    for i in range(n):
        reg, j = i % m, i // m
        hi = ((j + 1) << half) // (per_register + 1)
        lo = ((2 * j + 1) << half) // (2 * per_register)
        tail = (hi << (tail_len - half)) | _reverse(lo, half)
        hashes.append((_reverse(reg, p) << tail_len) | tail)
    return hashes


@pytest.fixture
def spread_hashes():
    """10,000 evenly spread hashes for 4 precision bits."""
    return evenly_spread_hashes(10_000, 4)


@pytest.fixture
def make_spread_hashes():
    return evenly_spread_hashes
