"""Exception hierarchy for fnvprint."""
from __future__ import annotations


class FnvprintError(Exception):
    """Base class for all errors raised by fnvprint."""


class ClosedResourceError(FnvprintError, ValueError):
    """Raised when a fingerprint is requested from a closed hasher.

    There is no way to reopen a hasher, so retrying cannot succeed.
    """


class CoercionError(FnvprintError, TypeError):
    """Raised when a stored fingerprint value cannot be turned into an int."""
