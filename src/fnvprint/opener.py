"""Read-only file access used to materialize bytes before fingerprinting."""
from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO


def open_for_read(path: str | Path) -> BinaryIO:
    """Open *path* for binary, read-only access.

    The caller owns the returned handle and must close it.
    """
    return Path(path).open("rb")


def read_prefix(handle: BinaryIO, offset: int, length: int) -> bytes:
    """Read at most *length* bytes of *handle* starting at *offset*."""
    handle.seek(offset, os.SEEK_SET)
    return handle.read(length)
