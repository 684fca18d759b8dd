"""
Error taxonomy for NANOS containers and the SLID text format.

All errors are raised synchronously and are never retried internally.
They signal programming-contract violations (mutating a locked container,
feeding malformed text), not transient conditions.
"""


class NANOSError(Exception):
    """Base class for every error raised by this package."""
    pass


class LockedError(NANOSError):
    """Raised when a mutation conflicts with a key-set, index or value lock."""
    pass


class SLIDError(NANOSError):
    """Base class for SLID/QJSON parse failures."""
    pass


class BoundaryError(SLIDError):
    """Raised when the outer ``[(`` ... ``)]`` markers are missing."""
    pass


class MalformedError(SLIDError):
    """Raised when tokens are left over or the item grammar is violated."""
    pass


class UnterminatedStringError(SLIDError):
    """Raised when a quote character has no matching closing quote."""
    pass


__all__ = [
    "NANOSError",
    "LockedError",
    "SLIDError",
    "BoundaryError",
    "MalformedError",
    "UnterminatedStringError",
]
