"""Default key hash: SHA-256 truncated to 64 bits.

The estimators only need hash(key) -> uint64 that is deterministic and
uniform over all 64 bits. Python's built-in hash() is neither (it is
salted per process for str and is the identity for small ints), so
the default goes through SHA-256 and keeps the first 8 digest bytes.

Keys are canonicalized to bytes before hashing. The encoding must be
stable across processes and Python versions, otherwise two runs over
the same stream would fill different registers:

    str              -> UTF-8
    bytes/bytearray  -> as is
    int (incl. bool) -> 8-byte big-endian two's complement when it
                        fits in int64, decimal text otherwise
    anything else    -> repr() as UTF-8

Callers with their own hash (xxhash, murmur, a database's hash) pass
it to the estimator as hash_fn instead.
"""
from __future__ import annotations

import hashlib
import struct
from typing import Any, Callable, TypeVar

K = TypeVar("K")

HashFunction = Callable[[K], int]

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _canonical_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    if isinstance(key, int):
        if _INT64_MIN <= key <= _INT64_MAX:
            return struct.pack(">q", key)
        return str(key).encode("ascii")
    return repr(key).encode("utf-8")


def hash64(key: Any) -> int:
    """Hash a key to an unsigned 64-bit integer."""
    digest = hashlib.sha256(_canonical_bytes(key)).digest()
    # first 8 bytes as a big-endian uint64
    return int.from_bytes(digest[:8], "big")
