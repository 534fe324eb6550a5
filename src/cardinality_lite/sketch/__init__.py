"""Probabilistic distinct counting.

Public API:
    HyperLogLog: byte-wide registers, leftmost-one rank, locked
    HyperLogLogPresto: 4-bit dense + sparse overflow registers,
        rightmost-one rank, locked
    hash64: default key hash (SHA-256 truncated to 64 bits)
"""

from cardinality_lite.sketch.hashing import hash64
from cardinality_lite.sketch.hyperloglog import HyperLogLog
from cardinality_lite.sketch.presto import HyperLogLogPresto

__all__ = [
    "HyperLogLog",
    "HyperLogLogPresto",
    "hash64",
]
