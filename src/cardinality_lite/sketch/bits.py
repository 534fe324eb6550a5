"""Bit-level views of a 64-bit hash.

Both estimators split a hash into two disjoint ranges:

    |<-- p index bits -->|<--------- 64 - p tail bits --------->|
    bit 63                                                  bit 0

The index range picks a register. The tail range supplies the rank:
how deep into the tail the first 1-bit sits. A long run of zeros is
rare (probability 2^-k), so the deepest run seen in a register is a
noisy log2 of how many distinct hashes landed there.

Everything here is integer masks and shifts. Python ints are arbitrary
precision, so every function first normalizes its input to the
unsigned 64-bit view.
"""
from __future__ import annotations

HASH_BITS = 64
HASH_MASK = (1 << HASH_BITS) - 1


def to_uint64(value: int) -> int:
    """Unsigned 64-bit view of an int (two's complement for negatives)."""
    return value & HASH_MASK


def tail_mask(p: int) -> int:
    """Mask selecting the low 64 - p bits of a hash."""
    return (1 << (HASH_BITS - p)) - 1


def register_index(hash_value: int, p: int) -> int:
    """Register index from the top p bits of the hash.

    The selected bits are read most-significant first, and the first
    bit read becomes the lowest binary digit of the index: bit 63 has
    weight 1, bit 62 weight 2, and so on. Any bijection of the top p
    bits spreads hashes equally well; this particular order is kept so
    register contents stay comparable across both estimators.
    """
    h = to_uint64(hash_value)
    index = 0
    for j in range(p):
        index |= ((h >> (HASH_BITS - 1 - j)) & 1) << j
    return index


def leftmost_one_rank(hash_value: int, p: int) -> int:
    """1-based position of the first 1-bit in the tail, from its top.

    An all-zero tail returns 0 rather than the tail length. That
    under-counts one (astronomically rare) case, and it is the value
    the dense estimator has always stored for it.
    """
    tail_len = HASH_BITS - p
    tail = to_uint64(hash_value) & tail_mask(p)
    if tail == 0:
        return 0
    return tail_len - tail.bit_length() + 1


def rightmost_one_rank(hash_value: int, p: int) -> int:
    """0-based position of the first 1-bit in the tail, from bit 0 up.

    An all-zero tail returns the tail length, 64 - p.
    """
    tail = to_uint64(hash_value) & tail_mask(p)
    if tail == 0:
        return HASH_BITS - p
    # tail & -tail isolates the lowest set bit
    return (tail & -tail).bit_length() - 1


def format_bits(hash_value: int) -> str:
    """Render the hash as 64 binary digits, bit 63 first."""
    return format(to_uint64(hash_value), "064b")
