"""Identity fingerprints for a region of a file.

A Fingerprinter reads up to ``byte_size`` bytes at ``offset`` and keeps a
FingerprintHasher over them, so the fingerprint can be re-taken at a
smaller size later without going back to the file.
"""
from __future__ import annotations

import logging
import numbers
from pathlib import Path
from typing import BinaryIO

from .config import FP_BYTE_SIZE
from .fnv import FingerprintHasher
from .models import FingerprintStruct
from .opener import open_for_read, read_prefix

logger = logging.getLogger(__name__)


def _usable_size(size: object) -> bool:
    return isinstance(size, numbers.Integral) and not isinstance(size, bool) and size >= 0


class Fingerprinter:
    """Fingerprint of ``size`` bytes of *path* starting at *offset*.

    Construction gives a blank object; call :meth:`read_path`,
    :meth:`read_file` or :meth:`add_data` to take the fingerprint.
    """

    def __init__(
        self, path: str | Path, offset: int = 0, byte_size: int = FP_BYTE_SIZE, bits: int = 64
    ) -> None:
        if bits not in (32, 64):
            raise ValueError(f"Invalid bits: {bits}. Must be 32 or 64.")
        self.path = Path(path)
        self.offset = offset
        self.byte_size = byte_size
        self.bits = bits
        # starts at byte_size; only shrinks via add_size
        self.size = byte_size
        self.data: bytes | None = None
        self.fingerprint: int | None = None
        self._hasher: FingerprintHasher | None = None

    def read_path(self) -> "Fingerprinter":
        handle = open_for_read(self.path)
        try:
            self._set_fingerprint(handle)
        finally:
            handle.close()
        return self

    def read_file(self, handle: BinaryIO) -> "Fingerprinter":
        """Fingerprint from an already open handle, leaving its position as it was."""
        position = handle.tell()
        try:
            self._set_fingerprint(handle)
        finally:
            handle.seek(position)
        return self

    def add_data(self, data: bytes) -> "Fingerprinter":
        """Use bytes that have already been read, e.g. by the tailing loop."""
        self.data = bytes(data)
        self._set_mechanism_and_take_fingerprint()
        return self

    def add_size(self, new_size: int | None) -> "Fingerprinter":
        """Re-take the fingerprint at a size smaller than ``byte_size``."""
        if self._hasher is not None:
            self._set_fingerprint_at(new_size)
        return self

    @property
    def data_size(self) -> int:
        if self.data is None:
            return 0
        return len(self.data)

    @property
    def end_position(self) -> int:
        return self.offset + self.size

    def fingerprint_at(self, length: int | None) -> int:
        if self._hasher is None:
            raise RuntimeError(f"No data has been added for {self.path}")
        return self._digest(length)

    def to_tuple(self) -> tuple[int | None, int, int]:
        return (self.fingerprint, self.offset, self.size)

    def to_struct(self) -> FingerprintStruct:
        if self.fingerprint is None:
            raise RuntimeError(f"No fingerprint has been taken for {self.path}")
        return FingerprintStruct(self.fingerprint, self.offset, self.size)

    def clear(self) -> None:
        if self._hasher is not None:
            self._hasher.close()
        self.data = None
        self._hasher = None

    def _digest(self, length: int | None = None) -> int:
        if self.bits == 32:
            return self._hasher.fnv1a32(length)
        return self._hasher.fnv1a64(length)

    def _set_fingerprint(self, handle: BinaryIO) -> None:
        self.data = read_prefix(handle, self.offset, self.byte_size)
        self._set_mechanism_and_take_fingerprint()

    def _set_mechanism_and_take_fingerprint(self) -> None:
        if self._hasher is not None:
            self._hasher.close()
        self._hasher = FingerprintHasher(self.data or b"")
        self._set_fingerprint_at(self.size)

    def _set_fingerprint_at(self, size: int | None) -> None:
        # A size is usable when it is a non-negative integer smaller than both
        # byte_size and the data we hold; otherwise fingerprint all of the data.
        if _usable_size(size) and size < self.byte_size and size < self.data_size:
            size = int(size)
            self.size = size
            self.fingerprint = self._digest(self.size)
        else:
            self.size = self.data_size
            self.fingerprint = self._digest()
        logger.debug(f"Fingerprint {self.fingerprint} for {self.path} at offset {self.offset}, size {self.size}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fingerprinter):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    __hash__ = None  # type: ignore[assignment]
