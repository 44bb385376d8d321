from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from .config import FP_BYTE_SIZE
from .fnv import coerce_bignum

ALGO = "fnv"


@total_ordering
@dataclass(frozen=True)
class FingerprintStruct:
    """A fingerprint taken over ``size`` bytes starting at ``offset``.

    Sorting puts the largest size first, then the largest offset, then the
    largest fingerprint.
    """
    fp: int
    offset: int
    size: int

    @property
    def short(self) -> bool:
        return self.size < FP_BYTE_SIZE

    def offset_eq(self, some_offset: int) -> bool:
        return self.offset == some_offset

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.fp, self.offset, self.size)

    def to_dict(self) -> dict[str, Any]:
        return {"hash": self.fp, "offset": self.offset, "size": self.size, "algo": ALGO}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "FingerprintStruct":
        return FingerprintStruct(
            fp=coerce_bignum(data["hash"]),
            offset=int(data.get("offset", 0)),
            size=int(data.get("size", 0)),
        )

    def _sort_key(self) -> tuple[int, int, int]:
        return (-self.size, -self.offset, -self.fp)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FingerprintStruct):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return ",".join(str(v) for v in self.to_tuple())
