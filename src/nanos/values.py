"""
Special values with no direct Python counterpart.

    Undefined - the SLID ``@u`` value (distinct from ``None``, which is ``@n``)
    Hole      - an index slot that exists only positionally (SLID ``@e``)
"""

from __future__ import annotations


class _UndefinedType:
    """Singleton standing in for an explicitly undefined value."""

    _instance: _UndefinedType | None = None

    def __new__(cls) -> _UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_UndefinedType, ())


class _HoleType:
    """Singleton marking an empty slot in a positional input."""

    _instance: _HoleType | None = None

    def __new__(cls) -> _HoleType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Hole"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_HoleType, ())


Undefined = _UndefinedType()
Hole = _HoleType()
