"""
Key Sequence Engine

Maintains the single insertion-ordered key list of a container and the
``next`` high-water mark for auto-assigned indices.

Keys are strings. A key is either:
    - an INDEX key: canonical text of a non-negative integer ("0", "17")
    - a NAMED key: anything else ("id", "01", "-1", "1.5")

INVARIANT:
    Reading the index keys in key-list order always yields strictly
    ascending integers. Named keys may sit anywhere between them.

    Every method here preserves the invariant. The engine knows nothing
    about stored values; callers move values when it reports renumbering.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, List, Optional, Tuple


_INDEX_RE = re.compile(r"^(?:0|[1-9][0-9]*)$")
_NEG_INDEX_RE = re.compile(r"^-[1-9][0-9]*$")


def to_key(key: Any) -> str:
    """
    Canonicalise a caller-supplied key to its key-string.

    Examples:
        3     -> "3"
        2.0   -> "2"
        2.5   -> "2.5"
        True  -> "true"
        "id"  -> "id"
    """
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    return str(key)


def is_index(key: Any) -> bool:
    """True if *key* is (or canonicalises to) an index key."""
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return bool(_INDEX_RE.match(to_key(key)))


def is_neg_index(key: Any) -> bool:
    """True if *key* is a negative index relative to the end ("-1", -3)."""
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key < 0
    return bool(_NEG_INDEX_RE.match(to_key(key)))


def index_value(key: str) -> Optional[int]:
    """Numeric value of an index key-string, or None for named keys."""
    return int(key) if _INDEX_RE.match(key) else None


class KeySequence:
    """
    Ordered key list plus ``next``.

    Properties:
        keys: key-strings in container order (unique)
        next: one more than the highest index ever assigned; may exceed
              the highest stored index (trailing holes)
    """

    def __init__(self) -> None:
        self.keys: List[str] = []
        self.next = 0

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.keys))

    def __len__(self) -> int:
        return len(self.keys)

    def clear(self) -> None:
        self.keys = []
        self.next = 0

    def snapshot(self) -> List[str]:
        return list(self.keys)

    def place(self, key: str, insert: bool = False) -> int:
        """
        Add a new key at the position its mode dictates.

        Append mode picks the LATEST position that keeps indices
        ascending; insert mode picks the EARLIEST one. Named keys go to
        the very end (append) or very start (insert).

        Example, keys ['a', '1', 'b', '3', 'c'], placing '2':
            append -> ['a', '1', 'b', '2', '3', 'c']
            insert -> ['a', '1', '2', 'b', '3', 'c']

        Returns the position used. Raises ValueError for duplicates.
        """
        if key in self.keys:
            raise ValueError(f"Key already placed: {key!r}")
        ind = index_value(key)
        keys = self.keys

        if insert:
            if ind is None or not self.next:
                pos = 0
            else:
                pos = len(keys)
                while pos > 0 and _sorts_after(keys[pos - 1], ind):
                    pos -= 1
        else:
            if ind is None or ind >= self.next:
                pos = len(keys)
            else:
                pos = 0
                while pos < len(keys) and _sorts_before(keys[pos], ind):
                    pos += 1

        keys.insert(pos, key)
        if ind is not None and ind >= self.next:
            self.next = ind + 1
        return pos

    def remove(self, key: str) -> None:
        self.keys = [k for k in self.keys if k != key]

    def renumber(self, start: int, stop: int, by: int) -> List[Tuple[int, int]]:
        """
        Shift index keys in ``[start, stop)`` by *by*.

        Updates ``next`` when the shifted range touches it and rewrites
        the affected key-strings in place (positions do not change).

        Returns the ``(old, new)`` index moves in an order that never
        clobbers a value not yet moved: descending for positive *by*,
        ascending for negative *by*.
        """
        moves: List[Tuple[int, int]] = []
        if by > 0:
            if stop + by > self.next:
                self.next = stop + by
            moves = [(k, k + by) for k in range(stop - 1, start - 1, -1)]
        elif by < 0:
            if stop >= self.next:
                self.next += by
            moves = [(k, k + by) for k in range(start, stop)]

        if by:
            renamed = []
            for key in self.keys:
                ind = index_value(key)
                if ind is not None and start <= ind < stop:
                    renamed.append(str(ind + by))
                else:
                    renamed.append(key)
            self.keys = renamed
        return moves

    def reversed_mapping(self) -> List[Tuple[str, str]]:
        """
        Compute an in-place reversal.

        The key list is reversed and each index ``i`` becomes
        ``next - 1 - i``. Reversing an ascending run and mirroring its
        values yields an ascending run again, so the invariant holds.

        Returns ``(old_key, new_key)`` pairs in the new order and adopts
        the new key list.
        """
        last = self.next - 1
        mapping = []
        for old in reversed(self.keys):
            ind = index_value(old)
            mapping.append((old, old if ind is None else str(last - ind)))
        self.keys = [new for _, new in mapping]
        return mapping

    def index_keys(self) -> List[str]:
        return [k for k in self.keys if index_value(k) is not None]

    def named_keys(self) -> List[str]:
        return [k for k in self.keys if index_value(k) is None]


def _sorts_after(existing: str, ind: int) -> bool:
    """Insert-mode scan: may *ind* move in front of *existing*?"""
    value = index_value(existing)
    return value is None or ind < value


def _sorts_before(existing: str, ind: int) -> bool:
    """Append-mode scan: must *ind* stay behind *existing*?"""
    value = index_value(existing)
    return value is None or ind > value
