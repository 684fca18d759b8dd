"""
NANOS: Named And Numbered Ordered Storage

An ordered container holding positional (index) and named entries in one
insertion-ordered key list, with the SLID / QJSON text formats.

ARCHITECTURAL GUARANTEE:
------------------------
The container contains ZERO knowledge of:
    - text formats (parsing lives in slid_parser, writing in backends)
    - reactivity (delegated to an optional adapter, see reactive)

All text formats consume and produce this model unchanged.
"""

__version__ = "0.1.0"

from nanos.errors import (
    BoundaryError,
    LockedError,
    MalformedError,
    NANOSError,
    SLIDError,
    UnterminatedStringError,
)
from nanos.model import NANOS_TYPE, Container
from nanos.values import Hole, Undefined
from nanos.slid_parser import parse_qjson, parse_slid
from nanos.backends.slid import MAX_SAFE_INTEGER, generate_slid

NANOS = Container


def to_slid(value, **options) -> str:
    """SLID text for a container or anything a container can be built from."""
    return generate_slid(value, **options)


__all__ = [
    "BoundaryError",
    "Container",
    "Hole",
    "LockedError",
    "MAX_SAFE_INTEGER",
    "MalformedError",
    "NANOS",
    "NANOSError",
    "NANOS_TYPE",
    "SLIDError",
    "Undefined",
    "UnterminatedStringError",
    "parse_qjson",
    "parse_slid",
    "to_slid",
]
