"""
Input classification at the container API boundary.

Everything handed to ``push``/``unshift``/``set``-with-transform is
classified exactly once into a closed set of kinds. The merge algorithms
then work on a normalized ``(key, value)`` entry list regardless of
whether the input was a list, a set, a dict, a mapping or a container.

    SCALAR    - stored as a single value
    INDEXED   - list/tuple (holes allowed) or set/frozenset
    KEYED     - dict or other mapping
    CONTAINER - another container
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from .values import Hole


class InputKind(Enum):
    """Closed classification of container inputs."""
    SCALAR = "scalar"
    INDEXED = "indexed"
    KEYED = "keyed"
    CONTAINER = "container"


@dataclass
class NormalizedInput:
    """
    A classified input.

    Properties:
        kind: InputKind
        entries: (key, value) pairs in source order; index keys are ints
        length: positional extent for INDEXED/CONTAINER inputs (counts
                holes), None otherwise
        value: the original object
    """

    kind: InputKind
    entries: List[Tuple[Any, Any]] = field(default_factory=list)
    length: Optional[int] = None
    value: Any = None


def is_mapish(value: Any, options: dict) -> bool:
    """Plain dicts always; other mappings unless ``opaque_maps``."""
    if type(value) is dict:
        return True
    return not options.get("opaque_maps") and isinstance(value, Mapping)


def is_setish(value: Any, options: dict) -> bool:
    """Lists and tuples always; sets unless ``opaque_sets``."""
    if isinstance(value, (list, tuple)):
        return True
    return not options.get("opaque_sets") and isinstance(value, (set, frozenset))


def is_transparent(value: Any, options: dict) -> bool:
    return is_mapish(value, options) or is_setish(value, options)


def classify(value: Any, options: dict, container_type: type) -> NormalizedInput:
    """
    Classify *value* for merging.

    Args:
        value: anything a caller may push
        options: container options (``opaque_maps``/``opaque_sets``)
        container_type: the container class (avoids a circular import)

    Returns:
        NormalizedInput
    """
    if isinstance(value, container_type):
        entries = [(k, v) for k, v in value.entries(compact=True)]
        return NormalizedInput(InputKind.CONTAINER, entries, value.next, value)

    if isinstance(value, (list, tuple)):
        entries = [(i, v) for i, v in enumerate(value) if v is not Hole]
        return NormalizedInput(InputKind.INDEXED, entries, len(value), value)

    if is_mapish(value, options):
        return NormalizedInput(InputKind.KEYED, list(value.items()), None, value)

    if is_setish(value, options):
        entries = list(enumerate(value))
        return NormalizedInput(InputKind.INDEXED, entries, len(entries), value)

    return NormalizedInput(InputKind.SCALAR, value=value)
