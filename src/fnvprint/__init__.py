"""fnvprint — FNV-1a identity fingerprints for files.

Computes stable, non-cryptographic fingerprints over a prefix of a file's
bytes so a file-monitoring tool can recognize a file across renames and
rotations.

Public API:
- FingerprintHasher
- Fingerprinter
- FingerprintStruct
- FingerprintConfig
"""

from .config import FingerprintConfig, load_config
from .errors import ClosedResourceError, CoercionError, FnvprintError
from .fingerprinter import Fingerprinter
from .fnv import FingerprintHasher, HasherState, coerce_bignum
from .models import FingerprintStruct

__all__ = [
    "ClosedResourceError",
    "CoercionError",
    "FingerprintConfig",
    "FingerprintHasher",
    "FingerprintStruct",
    "Fingerprinter",
    "FnvprintError",
    "HasherState",
    "coerce_bignum",
    "load_config",
]
