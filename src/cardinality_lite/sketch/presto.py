"""Compact HyperLogLog: 4-bit dense registers plus sparse overflow.

Most registers in a HyperLogLog never climb past 15: a register only
reaches rank k after roughly 2^k keys hash into it. So instead of a
full byte per register, this variant stores

    value = dense (4 bits) + overflow (3 bits) << 4

The dense nibbles are packed two per byte in a bytearray, which halves
register memory. The overflow bits live in a dict keyed by register
index and only exist for the rare registers whose value reached 16.
A missing dict entry means overflow 0.

Layout of the packed dense array:

    byte i // 2, low nibble  -> register i when i is even
    byte i // 2, high nibble -> register i when i is odd

The rank convention also differs from the byte-wide estimator: the
rank here is the 0-based position of the lowest 1-bit of the tail
(trailing zeros), and an all-zero tail scores the full tail length.

Overflow entries are never cleared. set_register_value() with a value
below 16 rewrites the nibble but leaves an existing overflow entry in
place; add() only ever raises a register, so through add() a register
with an overflow entry never drops back below 16.

Thread safety: one threading.Lock guards the nibbles, the overflow
dict and the cardinality together. Concurrent add() calls are
linearized, and the dict is never resized while another thread reads
it.
"""
from __future__ import annotations

import logging
import math
import threading
from typing import Generic, TypeVar

from cardinality_lite.sketch.bits import (
    format_bits,
    register_index,
    rightmost_one_rank,
    to_uint64,
)
from cardinality_lite.sketch.hashing import HashFunction, hash64
from cardinality_lite.sketch.hyperloglog import (
    DEFAULT_PRECISION,
    alpha_for,
    clamp_precision,
)

log = logging.getLogger(__name__)

K = TypeVar("K")

DENSE_BITS = 4
OVERFLOW_BITS = 3
DENSE_MASK = (1 << DENSE_BITS) - 1
OVERFLOW_MASK = (1 << OVERFLOW_BITS) - 1
MAX_REGISTER_VALUE = (1 << (DENSE_BITS + OVERFLOW_BITS)) - 1


class HyperLogLogPresto(Generic[K]):
    """HyperLogLog with split dense/overflow registers.

    Parameters:
        p: Precision bits. Uses 2^p registers, half a byte each plus
           one overflow entry per register that ever reached 16.
           Negative values are clamped to 0.
        hash_fn: key -> 64-bit int. Defaults to SHA-256 truncated.
    """

    def __init__(
        self,
        p: int = DEFAULT_PRECISION,
        hash_fn: HashFunction[K] | None = None,
    ) -> None:
        self._p = clamp_precision(p)
        self._m = 1 << self._p
        self._dense = bytearray((self._m + 1) // 2)
        self._overflow: dict[int, int] = {}
        self._alpha = alpha_for(self._m)
        self._hash_fn = hash_fn or hash64
        self._cardinality = 0
        self._lock = threading.Lock()

    @property
    def precision(self) -> int:
        return self._p

    @property
    def num_registers(self) -> int:
        return self._m

    @property
    def cardinality(self) -> int:
        with self._lock:
            return self._cardinality

    def get_register_value(self, index: int) -> int:
        """Combined register value: dense + (overflow << 4)."""
        self._check_index(index)
        with self._lock:
            return self._read(index)

    def set_register_value(self, index: int, value: int) -> None:
        """Split value into nibble and overflow and store both.

        An overflow of 0 leaves any existing overflow entry untouched.
        Overflow beyond 3 bits is truncated.
        """
        self._check_index(index)
        with self._lock:
            self._write(index, value)

    def add(self, key: K) -> None:
        """Observe a key. Repeating a key never changes anything."""
        h = to_uint64(self._hash_fn(key))
        idx = register_index(h, self._p)
        rank = rightmost_one_rank(h, self._p)
        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                "new key: %r, hash: %d, binary: %s, register: %d, rank: %d",
                key, h, format_bits(h), idx, rank,
            )
        with self._lock:
            if rank <= self._read(idx):
                return
            self._write(idx, rank)

    def compute_cardinality(self) -> None:
        """Recompute the estimate and keep it if it beats the stored one."""
        with self._lock:
            m = self._m
            total = sum(2.0 ** (-self._read(i)) for i in range(m))
            if total <= 0:
                return
            estimate = math.floor(self._alpha * m * m / total)
            if estimate <= self._cardinality:
                return
            self._cardinality = estimate
        log.debug("new cardinality set: %d (sum %.6f)", estimate, total)

    def dense_registers(self) -> list[int]:
        """Snapshot of the 4-bit dense fields, one entry per register."""
        with self._lock:
            return [self._nibble(i) for i in range(self._m)]

    def overflow_registers(self) -> dict[int, int]:
        """Snapshot of the overflow entries (register index -> high bits)."""
        with self._lock:
            return dict(self._overflow)

    def memory_bytes(self) -> int:
        """Packed nibbles plus one byte per overflow entry."""
        with self._lock:
            return len(self._dense) + len(self._overflow)

    def standard_error(self) -> float:
        """Theoretical standard error for this precision."""
        return 1.04 / math.sqrt(self._m)

    def _check_index(self, index: int) -> None:
        # nibbles share bytes and bytearray takes negative indices, so an
        # out-of-range index would land on a real register
        if not 0 <= index < self._m:
            raise IndexError(
                f"register index {index} out of range for {self._m} registers"
            )

    # -- unlocked helpers, callers hold self._lock --

    def _nibble(self, index: int) -> int:
        shift = (index & 1) * DENSE_BITS
        return (self._dense[index >> 1] >> shift) & DENSE_MASK

    def _read(self, index: int) -> int:
        dense = self._nibble(index)
        overflow = self._overflow.get(index)
        if overflow is None:
            return dense
        return dense + (overflow << DENSE_BITS)

    def _write(self, index: int, value: int) -> None:
        shift = (index & 1) * DENSE_BITS
        byte = self._dense[index >> 1]
        byte &= ~(DENSE_MASK << shift) & 0xFF
        byte |= (value & DENSE_MASK) << shift
        self._dense[index >> 1] = byte

        overflow = (value >> DENSE_BITS) & OVERFLOW_MASK
        if overflow <= 0:
            return
        self._overflow[index] = overflow
        log.debug(
            "register: %d, value: %d, dense: %s, overflow: %s",
            index, value,
            format(value & DENSE_MASK, "04b"), format(overflow, "03b"),
        )
