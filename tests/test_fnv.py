"""
Tests for the FNV-1a fingerprint hasher.

Known values from http://www.isthe.com/chongo/src/fnv/test_fnv.c
"""
from __future__ import annotations

import pytest

from fnvprint.errors import ClosedResourceError, CoercionError, FnvprintError
from fnvprint.fnv import (
    INIT32,
    INIT64,
    FingerprintHasher,
    HasherState,
    coerce_bignum,
)


def reference_fnv1a(data: bytes, bits: int) -> int:
    """Independent FNV-1a used to cross-check the hasher."""
    if bits == 32:
        h, prime = 2166136261, 16777619
    else:
        h, prime = 14695981039346656037, 1099511628211
    mask = (1 << bits) - 1
    for b in data:
        h = ((h ^ b) * prime) & mask
    return h


SAMPLES = [
    b"",
    b"a",
    b"hello",
    b"foobar",
    b"line 1\nline 2\nline 3",
    bytes(range(256)),
    b"\xff" * 64,
]


class TestKnownVectors:
    """Published FNV-1a test vectors."""

    def test_hello_32(self):
        assert FingerprintHasher(b"hello").fnv1a32() == 0x4F9F2CAB

    def test_empty_returns_initial_constants(self):
        hasher = FingerprintHasher(b"")
        assert hasher.fnv1a32() == 0x811C9DC5
        assert hasher.fnv1a64() == 0xCBF29CE484222325

    def test_single_byte(self):
        hasher = FingerprintHasher(b"a")
        assert hasher.fnv1a32() == 0xE40C292C
        assert hasher.fnv1a64() == 0xAF63DC4C8601EC8C

    def test_foobar(self):
        hasher = FingerprintHasher(b"foobar")
        assert hasher.fnv1a32() == 0xBF9CF968
        assert hasher.fnv1a64() == 0x85944171F73967E8

    def test_multiline_string_64(self):
        hasher = FingerprintHasher(b"line 1\nline 2\nline 3")
        assert hasher.fnv1a64() == 8658598129674203459

    def test_results_are_unsigned_and_in_range(self):
        hasher = FingerprintHasher(b"\xff" * 64)
        assert 0 <= hasher.fnv1a32() < 2**32
        assert 0 <= hasher.fnv1a64() < 2**64


class TestAgainstReference:
    """Hasher agrees with an independent implementation."""

    @pytest.mark.parametrize("data", SAMPLES)
    def test_full_buffer(self, data):
        hasher = FingerprintHasher(data)
        assert hasher.fnv1a32() == reference_fnv1a(data, 32)
        assert hasher.fnv1a64() == reference_fnv1a(data, 64)

    def test_every_prefix(self):
        data = b"line 1\nline 2\nline 3"
        hasher = FingerprintHasher(data)
        for length in range(len(data) + 1):
            assert hasher.fnv1a32(length) == reference_fnv1a(data[:length], 32)
            assert hasher.fnv1a64(length) == reference_fnv1a(data[:length], 64)


class TestLengthCoercion:
    """How the optional length argument is interpreted."""

    def test_prefix_length(self):
        hasher = FingerprintHasher(b"hello")
        assert hasher.fnv1a32(3) == FingerprintHasher(b"hel").fnv1a32()
        assert hasher.fnv1a32(3) != hasher.fnv1a32()

    def test_length_beyond_size_is_clamped(self):
        hasher = FingerprintHasher(b"abc")
        assert hasher.fnv1a32(100) == hasher.fnv1a32()
        assert hasher.fnv1a64(100) == hasher.fnv1a64()

    def test_zero_length(self):
        hasher = FingerprintHasher(b"abc")
        assert hasher.fnv1a32(0) == INIT32
        assert hasher.fnv1a64(0) == INIT64

    @pytest.mark.parametrize("length", [-1, -3, -1000])
    def test_negative_length_returns_initial_constant(self, length):
        hasher = FingerprintHasher(b"hello")
        assert hasher.fnv1a32(length) == 0x811C9DC5
        assert hasher.fnv1a64(length) == 0xCBF29CE484222325

    @pytest.mark.parametrize("length", [None, 2.0, "2", True, b"2"])
    def test_non_integral_length_means_full_size(self, length):
        hasher = FingerprintHasher(b"hello")
        assert hasher.fnv1a32(length) == hasher.fnv1a32()
        assert hasher.fnv1a64(length) == hasher.fnv1a64()

    def test_effective_length(self):
        hasher = FingerprintHasher(b"hello")
        assert hasher.effective_length() == 5
        assert hasher.effective_length(3) == 3
        assert hasher.effective_length(50) == 5
        assert hasher.effective_length(-2) == 0
        assert hasher.effective_length(1.5) == 5


class TestLifecycle:
    """Open/closed state handling."""

    def test_open_after_construction(self):
        hasher = FingerprintHasher(b"abc")
        assert hasher.is_open()
        assert not hasher.is_closed()
        assert hasher.state is HasherState.OPEN

    def test_close_is_idempotent(self):
        hasher = FingerprintHasher(b"abc")
        hasher.close()
        hasher.close()
        assert hasher.is_closed()
        assert not hasher.is_open()
        assert hasher.state is HasherState.CLOSED

    def test_close_releases_buffer(self):
        hasher = FingerprintHasher(b"abc")
        assert hasher._buffer == b"abc"
        hasher.close()
        assert hasher._buffer is None
        assert repr(hasher) == "FingerprintHasher(size=3, state=closed)"

    def test_size_hint_survives_close(self):
        hasher = FingerprintHasher(b"abc")
        hasher.close()
        assert hasher.size_hint == 3

    def test_queries_after_close_raise(self):
        hasher = FingerprintHasher(b"abc")
        hasher.close()
        with pytest.raises(ClosedResourceError, match="Fnv instance is closed!"):
            hasher.fnv1a64()
        with pytest.raises(ClosedResourceError):
            hasher.fnv1a32(2)

    def test_closed_error_is_catchable_as_library_error(self):
        hasher = FingerprintHasher(b"abc")
        hasher.close()
        with pytest.raises(FnvprintError):
            hasher.fnv1a32()
        with pytest.raises(ValueError):
            hasher.fnv1a32()

    def test_context_manager_closes(self):
        with FingerprintHasher(b"abc") as hasher:
            value = hasher.fnv1a32()
        assert hasher.is_closed()
        assert value == FingerprintHasher(b"abc").fnv1a32()

    def test_buffer_is_copied(self):
        data = bytearray(b"hello")
        hasher = FingerprintHasher(data)
        before = hasher.fnv1a32()
        data[0] = 0
        assert hasher.fnv1a32() == before == 0x4F9F2CAB

    def test_repeated_queries_are_stable(self):
        hasher = FingerprintHasher(b"hello")
        assert hasher.fnv1a64() == hasher.fnv1a64()


class TestCoerceBignum:
    def test_int_passes_through(self):
        assert coerce_bignum(15539910233256741944) == 15539910233256741944

    def test_decimal_string(self):
        assert coerce_bignum("8658598129674203459") == 8658598129674203459

    @pytest.mark.parametrize("value", [None, 1.5, "abc", "-5", True, "\u00b2", "\u0663"])
    def test_rejects_other_values(self, value):
        with pytest.raises(CoercionError, match="Can't coerce"):
            coerce_bignum(value)
