"""FNV-1a fingerprints over an in-memory byte buffer.

The hasher is handed the bytes once and then answers repeated fingerprint
queries, optionally over a prefix of the buffer, until it is closed.
Closing is explicit and cannot be undone.
"""
from __future__ import annotations

import logging
import numbers
from enum import Enum
from typing import Any

from .errors import ClosedResourceError, CoercionError

logger = logging.getLogger(__name__)

INIT32 = 0x811C9DC5
INIT64 = 0xCBF29CE484222325
PRIME32 = 0x01000193
PRIME64 = 0x100000001B3
MOD32 = 2**32
MOD64 = 2**64

CLOSED_MESSAGE = "Fnv instance is closed!"


class HasherState(Enum):
    """Lifecycle of a FingerprintHasher."""

    OPEN = "open"
    CLOSED = "closed"


def coerce_bignum(value: Any) -> int:
    """Return *value* as an unsigned int fingerprint.

    Stored fingerprints come back either as ints or, from text records, as
    decimal strings. Anything else is rejected.
    """
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit():
            return int(digits)
    raise CoercionError(f"Can't coerce {value!r} to a fingerprint")


class FingerprintHasher:
    """FNV-1a calculator (32 and 64 bit) bound to one byte buffer.

    Not safe for unsynchronized concurrent use: ``close()`` racing a
    fingerprint query must be serialized by the owner.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._buffer: bytes | None = bytes(data)
        self._size = len(self._buffer)
        self._state = HasherState.OPEN

    @property
    def state(self) -> HasherState:
        return self._state

    @property
    def size_hint(self) -> int:
        """Length of the buffer at construction; kept after close."""
        return self._size

    def is_open(self) -> bool:
        return self._state is HasherState.OPEN

    def is_closed(self) -> bool:
        return self._state is HasherState.CLOSED

    def close(self) -> None:
        if self._state is HasherState.CLOSED:
            return
        self._state = HasherState.CLOSED
        self._buffer = None
        logger.debug(f"Closed hasher over {self._size} bytes")

    def fnv1a32(self, length: Any = None) -> int:
        """Return the 32-bit FNV-1a fingerprint of the first *length* bytes."""
        return self._common_fnv(length, INIT32, PRIME32, MOD32)

    def fnv1a64(self, length: Any = None) -> int:
        """Return the 64-bit FNV-1a fingerprint of the first *length* bytes."""
        return self._common_fnv(length, INIT64, PRIME64, MOD64)

    def effective_length(self, length: Any = None) -> int:
        """Number of leading bytes a query with *length* folds into the hash.

        Absent or non-integral lengths mean the whole buffer. Integral lengths
        are clamped to the buffer size; negative ones give zero.
        """
        if not isinstance(length, numbers.Integral) or isinstance(length, bool):
            return self._size
        return max(0, min(int(length), self._size))

    def _common_fnv(self, length: Any, hash_: int, prime: int, mod: int) -> int:
        if self._buffer is None:
            raise ClosedResourceError(CLOSED_MESSAGE)
        buffer = self._buffer
        for idx in range(self.effective_length(length)):
            hash_ = ((hash_ ^ buffer[idx]) * prime) % mod
        return hash_

    def __enter__(self) -> "FingerprintHasher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FingerprintHasher(size={self._size}, state={self._state.value})"
