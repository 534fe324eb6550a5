"""Tests for the hash bit views: index and both rank conventions."""
from __future__ import annotations

from hypothesis import given, strategies as st

from cardinality_lite.sketch.bits import (
    HASH_MASK,
    format_bits,
    leftmost_one_rank,
    register_index,
    rightmost_one_rank,
    to_uint64,
)

uint64s = st.integers(min_value=0, max_value=HASH_MASK)


class TestRegisterIndex:
    def test_zero_precision_is_always_register_zero(self):
        assert register_index(0, 0) == 0
        assert register_index(HASH_MASK, 0) == 0
        assert register_index(1 << 63, 0) == 0

    def test_bit_63_is_lowest_index_digit(self):
        assert register_index(1 << 63, 4) == 1
        assert register_index(1 << 62, 4) == 2
        assert register_index(1 << 61, 4) == 4
        assert register_index(1 << 60, 4) == 8

    def test_tail_bits_do_not_affect_index(self):
        assert register_index((1 << 60) - 1, 4) == 0
        assert register_index(HASH_MASK, 4) == 15

    def test_mixed_prefix(self):
        # top four bits 1,1,0,1 read as digits 1 + 2 + 8
        h = 0b1101 << 60
        assert register_index(h, 4) == 11

    @given(uint64s, st.integers(min_value=0, max_value=16))
    def test_index_in_range(self, h, p):
        assert 0 <= register_index(h, p) < (1 << p)


class TestLeftmostOneRank:
    def test_top_tail_bit_is_rank_one(self):
        assert leftmost_one_rank(1 << 59, 4) == 1

    def test_lowest_tail_bit_is_tail_length(self):
        assert leftmost_one_rank(1, 4) == 60

    def test_all_zero_tail_is_zero(self):
        assert leftmost_one_rank(0, 4) == 0
        # index bits set, tail still empty
        assert leftmost_one_rank(0b1111 << 60, 4) == 0

    def test_full_width_tail(self):
        assert leftmost_one_rank(1 << 63, 0) == 1
        assert leftmost_one_rank(0, 0) == 0

    @given(uint64s, st.integers(min_value=0, max_value=16))
    def test_rank_bounds(self, h, p):
        assert 0 <= leftmost_one_rank(h, p) <= 64 - p


class TestRightmostOneRank:
    def test_bit_zero_is_rank_zero(self):
        assert rightmost_one_rank(1, 4) == 0
        assert rightmost_one_rank(0b1011, 4) == 0

    def test_counts_trailing_zeros(self):
        assert rightmost_one_rank(0b1000, 4) == 3
        assert rightmost_one_rank(1 << 20, 4) == 20

    def test_all_zero_tail_is_tail_length(self):
        assert rightmost_one_rank(0, 4) == 60
        assert rightmost_one_rank(0b1111 << 60, 4) == 60
        assert rightmost_one_rank(0, 0) == 64

    def test_index_bits_are_ignored(self):
        # bit 60 belongs to the index when p=4
        assert rightmost_one_rank(1 << 60, 4) == 60
        assert rightmost_one_rank(1 << 60, 3) == 60
        assert rightmost_one_rank(1 << 60, 5) == 59

    @given(uint64s, st.integers(min_value=0, max_value=16))
    def test_rank_bounds(self, h, p):
        assert 0 <= rightmost_one_rank(h, p) <= 64 - p


def test_to_uint64_wraps_negatives():
    assert to_uint64(-1) == HASH_MASK
    assert to_uint64(1 << 64) == 0
    assert to_uint64(42) == 42


def test_format_bits():
    assert format_bits(1) == "0" * 63 + "1"
    assert format_bits(1 << 63) == "1" + "0" * 63
    assert len(format_bits(-1)) == 64
