"""Tests for the default 64-bit key hash."""
from __future__ import annotations

import hashlib

from cardinality_lite.sketch.hashing import hash64


def test_deterministic_and_in_range():
    h = hash64("api.openai.com")
    assert h == hash64("api.openai.com")
    assert 0 <= h < 1 << 64


def test_str_matches_sha256_prefix():
    digest = hashlib.sha256(b"agent-001").digest()
    assert hash64("agent-001") == int.from_bytes(digest[:8], "big")


def test_str_and_bytes_agree():
    assert hash64("héllo") == hash64("héllo".encode("utf-8"))
    assert hash64(bytearray(b"abc")) == hash64(b"abc")


def test_int_encoding_is_fixed_width():
    digest = hashlib.sha256((7).to_bytes(8, "big", signed=True)).digest()
    assert hash64(7) == int.from_bytes(digest[:8], "big")
    assert hash64(-1) != hash64(1)


def test_int_and_its_text_differ():
    assert hash64(12345) != hash64("12345")


def test_huge_int_falls_back_to_text():
    big = 2**80
    assert hash64(big) == hash64(str(big))


def test_other_objects_use_repr():
    assert hash64((1, "a")) == hash64(repr((1, "a")))
