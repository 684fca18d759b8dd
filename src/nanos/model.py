"""
NANOS Container: Named And Numbered Ordered Storage

One ordered structure holding both positional (index) entries and named
entries, sharing a single insertion-ordered key list.

    c = Container(1, "two")
    c.set("id", 3)
    c.to_string()         # "[(1 two id=3)]"

ARCHITECTURAL RULES:
    - Key ordering is owned by the KeySequence engine (keys.py).
      The container never reorders keys by hand.
    - Inputs are classified once (inputs.py) before merging.
    - Single-key lock checks happen BEFORE any mutation. Bulk operations
      roll back on LockedError. Either way a raising call never leaves
      a partial change behind.
    - Reactivity is delegated to an optional adapter (reactive.py).
      With no adapter attached every hook is a no-op.

Lock dimensions (independent):
    key-set lock   lock_keys()  - no keys may be added or removed
    value locks    lock(*keys)  - specific values may not change
    index lock     implied once any index value is locked; disables
                   pop/shift/unshift because they renumber indices
"""

from __future__ import annotations

import warnings
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import LockedError
from .inputs import InputKind, classify, is_mapish, is_setish, is_transparent
from .keys import KeySequence, index_value, is_index, is_neg_index, to_key
from .reactive import ReactiveInterface, is_extended_interface, is_reactive_interface
from .values import Hole


NANOS_TYPE = "@NANOS@"

OPTION_NAMES = ("opaque_maps", "opaque_sets", "transform", "auto_reactive")
TRANSFORM_MODES = (False, True, None, "sets", "all")

Key = Union[str, int]


class Container:
    """
    Ordered map with array-like index keys.

    Properties (read-only unless noted):
        next:    one more than the highest index assigned (settable;
                 lowering it truncates)
        size:    number of keys
        options: copy of the ingestion options
        rio:     reactive adapter or None (settable)
        storage: read-only view of raw stored values

    Constructor items are pushed (see push()).
    """

    def __init__(self, *items: Any) -> None:
        self._options: Dict[str, Any] = {}
        self._rio = None
        self._rio_extended = False
        self._lock_new = False
        self._frozen = False
        self.clear()
        if items:
            self.push(*items)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise LockedError(f"Cannot set {name!r} on a frozen container")
        object.__setattr__(self, name, value)

    # ------------------------------------------------------------------
    # Adapter plumbing
    # ------------------------------------------------------------------

    def _depend(self) -> None:
        if self._rio is not None:
            self._rio.depend()

    def _changed(self) -> None:
        if self._rio is not None:
            self._rio.changed()

    def _batch(self, fn: Callable[[], Any]) -> Any:
        if self._rio is None:
            return fn()
        return self._rio.batch(fn)

    def _atomic(self, fn: Callable[[], Any]) -> Any:
        """Run fn batched; on LockedError restore keys, next, values and locks."""
        saved = (
            self._seq.snapshot(),
            self._seq.next,
            dict(self._storage),
            set(self._locked_values),
            self._lock_indices,
        )
        try:
            return self._batch(fn)
        except LockedError:
            keys, next_index, storage, locked_values, lock_indices = saved
            self._seq.keys = keys
            self._seq.next = next_index
            self._storage = storage
            self._locked_values = locked_values
            self._lock_indices = lock_indices
            self._changed()
            raise

    def _final(self, value: Any) -> Any:
        """Unwrap an adapter-managed value to its current plain value."""
        if self._rio_extended and self._rio.is_reactive(value):
            return self._rio.get(value)
        return value

    def _read(self, value: Any, raw: bool) -> Any:
        return value if raw else self._final(value)

    def depend(self) -> None:
        """Register a dependency with the adapter (if any)."""
        self._depend()

    @property
    def rio(self) -> Optional[ReactiveInterface]:
        return self._rio

    @rio.setter
    def rio(self, rio: Optional[ReactiveInterface]) -> None:
        if not rio:
            self._rio = None
            self._rio_extended = False
            return
        if not is_reactive_interface(rio):
            warnings.warn(
                f"Ignoring reactive adapter {rio!r}: missing batch/changed/create/depend",
                UserWarning,
            )
            return
        self._rio = rio
        self._rio_extended = is_extended_interface(rio)

    def set_rio(self, rio: Optional[ReactiveInterface]) -> Container:
        """Fluent form of ``container.rio = rio``."""
        self.rio = rio
        return self

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def set_options(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Container:
        """
        Merge ingestion options.

        Options:
            opaque_maps:   treat non-dict mappings as single values
            opaque_sets:   treat set/frozenset as single values
            transform:     False | True | "sets" | "all"; promote (or merge)
                           container-like values into nested containers
            auto_reactive: hint read by extended adapters in on_set()

        Raises:
            LockedError: container is frozen
            ValueError: unknown option name or transform mode
        """
        if self._frozen:
            raise LockedError("Cannot set options on a frozen container")
        merged = dict(options or {})
        merged.update(kwargs)
        for name, value in merged.items():
            if name not in OPTION_NAMES:
                raise ValueError(f"Unknown container option: {name!r}")
            if name == "transform" and value not in TRANSFORM_MODES:
                raise ValueError(f"Invalid transform mode: {value!r}")
        self._options.update(merged)
        return self

    # ------------------------------------------------------------------
    # Key resolution
    # ------------------------------------------------------------------

    def _resolve(self, key: Any) -> Optional[str]:
        """Canonical key-string; negative indices count back from next."""
        if is_neg_index(key):
            ind = int(to_key(key)) + self._seq.next
            if ind < 0:
                return None
            return str(ind)
        return to_key(key)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def at(self, key: Any, default: Any = None, raw: bool = False) -> Any:
        """
        Value at *key*, or *default*.

        A list/tuple key is a path through nested containers; the walk
        returns *default* as soon as a step is not a container or lacks
        the key. Negative indices resolve to ``next - n``.
        """
        if isinstance(key, (list, tuple)):
            node: Any = self
            for step in key:
                if not isinstance(node, Container) or not node.has(step):
                    return default
                node = node.at(step, raw=raw)
            return node
        self._depend()
        skey = self._resolve(key)
        if skey is None or skey not in self._storage:
            return default
        return self._read(self._storage[skey], raw)

    get = at

    def at_raw(self, key: Any, default: Any = None) -> Any:
        """Like at(), but never unwraps adapter-managed values."""
        return self.at(key, default, raw=True)

    def has(self, key: Any) -> bool:
        self._depend()
        skey = self._resolve(key)
        return skey is not None and skey in self._storage

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    @property
    def size(self) -> int:
        self._depend()
        return len(self._seq)

    @property
    def next(self) -> int:
        self._depend()
        return self._seq.next

    @next.setter
    def next(self, value: int) -> None:
        if self._locked:
            raise LockedError("Cannot set next after locking")
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"next must be an int, got {value!r}")
        if value < 0:
            raise ValueError(f"next must be non-negative, got {value}")
        doomed = [k for k in self._seq.index_keys() if int(k) >= value]
        locked = [k for k in doomed if k in self._locked_values]
        if locked:
            raise LockedError(f"Cannot truncate locked indices: {locked}")

        def truncate() -> None:
            for key in doomed:
                self.delete(key)
            if self._seq.next != value:
                self._seq.next = value
                self._changed()

        self._batch(truncate)

    @property
    def storage(self) -> Mapping[str, Any]:
        self._depend()
        return MappingProxyType(self._storage)

    def keys(self) -> Iterator[str]:
        self._depend()
        return iter(self._seq.snapshot())

    def index_keys(self) -> Iterator[str]:
        self._depend()
        return iter(self._seq.index_keys())

    def named_keys(self) -> Iterator[str]:
        self._depend()
        return iter(self._seq.named_keys())

    def entries(self, compact: bool = False, raw: bool = False) -> Iterator[Tuple[Key, Any]]:
        """
        Yield ``(key, value)`` in key order.

        Compact mode yields ints for index keys ("0" -> 0).
        """
        self._depend()
        for key in self._seq.snapshot():
            if key in self._storage:
                yield _compact_key(key, compact), self._read(self._storage[key], raw)

    def index_entries(self, compact: bool = False, raw: bool = False) -> Iterator[Tuple[Key, Any]]:
        for key, value in self.entries(compact, raw):
            if is_index(key):
                yield key, value

    def named_entries(self, raw: bool = False) -> Iterator[Tuple[str, Any]]:
        for key, value in self.entries(raw=raw):
            if not is_index(key):
                yield key, value

    def reverse_entries(self, compact: bool = False, raw: bool = False) -> Iterator[Tuple[Key, Any]]:
        self._depend()
        for key in reversed(self._seq.snapshot()):
            if key in self._storage:
                yield _compact_key(key, compact), self._read(self._storage[key], raw)

    def values(self, raw: bool = False) -> Iterator[Any]:
        """Stored index values in ascending index order (holes skipped)."""
        for _, value in self.index_entries(raw=raw):
            yield value

    def pairs(self, compact: bool = False, raw: bool = False) -> List[Any]:
        """Flat ``[k1, v1, k2, v2, ...]`` list."""
        flat: List[Any] = []
        for key, value in self.entries(compact, raw):
            flat.extend((key, value))
        return flat

    # ------------------------------------------------------------------
    # Traversal (always over a snapshot of the key list)
    # ------------------------------------------------------------------

    def for_each(self, fn: Callable[[Any, str, Container], Any], raw: bool = False) -> None:
        for key, value in list(self.entries(raw=raw)):
            fn(value, key, self)

    def filter(self, predicate: Callable[[Any, str, Container], bool], raw: bool = False) -> Container:
        """New container with the entries for which predicate(value, key, self) holds."""
        self._depend()
        result = type(self)()
        result.from_entries([(k, v) for k, v in list(self.entries(raw=raw)) if predicate(v, k, self)])
        return result

    def find(self, predicate: Callable[[Any, str, Container], bool], raw: bool = False) -> Optional[Tuple[str, Any]]:
        """First ``(key, value)`` matching, or None."""
        for key, value in list(self.entries(raw=raw)):
            if predicate(value, key, self):
                return key, value
        return None

    def find_last(self, predicate: Callable[[Any, str, Container], bool], raw: bool = False) -> Optional[Tuple[str, Any]]:
        """Last ``(key, value)`` matching, or None."""
        for key, value in list(self.reverse_entries(raw=raw)):
            if predicate(value, key, self):
                return key, value
        return None

    def key_of(self, value: Any) -> Optional[str]:
        found = self.find(lambda v, k, c: v == value)
        return found[0] if found else None

    def last_key_of(self, value: Any) -> Optional[str]:
        found = self.find_last(lambda v, k, c: v == value)
        return found[0] if found else None

    def includes(self, value: Any) -> bool:
        return self.key_of(value) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: Any, value: Any, insert: bool = False) -> Any:
        """
        Store *value* at *key* (``None`` means ``next``).

        New keys are placed by the KeySequence engine (append mode by
        default, insert mode when *insert* is true). Existing keys keep
        their position.

        Returns:
            The value actually stored (after transform / adapter on_set),
            or None when a negative index resolves below zero.

        Raises:
            LockedError: the value is locked, or the key is new and the
                key-set is locked
        """
        if key is None:
            key = self._seq.next
        skey = self._resolve(key)
        if skey is None:
            return None
        if skey in self._locked_values:
            raise LockedError(f"Cannot set locked value {skey!r}")
        is_new = skey not in self._storage
        if is_new and self._locked:
            raise LockedError(f"Cannot add key {skey!r} after locking")

        if is_new:
            self._seq.place(skey, insert)

        if self._options.get("transform") and is_transparent(value, self._options):
            value = self.similar(value)
        if self._rio_extended:
            value = self._rio.on_set(self, skey, value)
        self._storage[skey] = value

        if self._lock_new:
            self.lock(skey)
        if is_new:
            self._changed()
        return value

    def delete(self, key: Any, raw: bool = False) -> Any:
        """
        Remove *key* and return its value (None if absent).

        Unlike ``del``, the removed value is returned.
        """
        if self._locked:
            raise LockedError("Cannot delete after locking")
        skey = self._resolve(key)
        if skey is None or skey not in self._storage:
            return None
        if skey in self._locked_values:
            raise LockedError(f"Cannot delete locked value {skey!r}")
        value = self._storage.pop(skey)
        self._seq.remove(skey)
        self._changed()
        return self._read(value, raw)

    def clear(self) -> Container:
        """Remove all keys and reset next, index lock, value locks and redaction."""
        if getattr(self, "_locked", False):
            raise LockedError("Cannot clear after locking")
        self._seq = KeySequence()
        self._storage: Dict[str, Any] = {}
        self._locked = False
        self._locked_values: set = set()
        self._lock_indices = False
        self._redacted: Union[bool, set] = False
        self._changed()
        return self

    def from_entries(self, entries: Iterable[Tuple[Any, Any]], insert: bool = False) -> Container:
        """
        Bulk set from ``(key, value)`` pairs.

        In insert mode the entries are applied last-to-first with insert
        placement, so they end up in front in their original order.
        """
        if self._locked:
            raise LockedError("Cannot from_entries after locking")
        if insert and self._lock_indices:
            raise LockedError("Cannot insert from_entries after index lock")
        entries = list(entries)

        def load() -> None:
            if insert:
                for key, value in reversed(entries):
                    self.set(key, value, True)
            else:
                for key, value in entries:
                    self.set(key, value)
            self._changed()

        self._atomic(load)
        return self

    def from_pairs(self, *pairs: Any) -> Container:
        """
        Bulk set from a flat pair list.

        Accepts:
            from_pairs("a", 1, "b", 2)
            from_pairs(["a", 1, "b", 2])
            from_pairs({"type": "@NANOS@", "next": 4, "pairs": [...]})

        A ``None`` key uses next; a ``None`` key with a ``Hole`` value
        skips one index.
        """
        if self._locked:
            raise LockedError("Cannot from_pairs after locking")
        if pairs and isinstance(pairs[0], Mapping) and pairs[0].get("type") == NANOS_TYPE:
            snapshot = pairs[0]

            def load_snapshot() -> None:
                self.from_pairs(list(snapshot.get("pairs", [])))
                if snapshot.get("next") is not None:
                    self.next = snapshot["next"]
                self._changed()

            self._atomic(load_snapshot)
            return self

        if len(pairs) == 1 and isinstance(pairs[0], (list, tuple)):
            pairs = tuple(pairs[0])

        def load() -> None:
            for i in range(0, len(pairs) - 1, 2):
                key, value = pairs[i], pairs[i + 1]
                if key is None and value is Hole:
                    self._seq.next += 1
                else:
                    self.set(key, value)
            self._changed()

        self._atomic(load)
        return self

    def push(self, *items: Any) -> Container:
        """
        Append items.

        Each item is classified:
            scalar            -> stored at next
            list/tuple/set    -> elements merged at next + position
                                 (holes preserved)
            dict/mapping      -> named keys set directly, numeric keys
                                 offset from next
            container         -> its entries merged the same way

        Wrap an item in a one-element list to store it as a single value.
        """
        if self._locked:
            raise LockedError("Cannot push after locking")
        transform = self._options.get("transform")

        def push_entries(entries: List[Tuple[Any, Any]], length: Optional[int]) -> None:
            base = self._seq.next
            for key, value in entries:
                if is_index(key):
                    self.set(base + int(to_key(key)), value)
                else:
                    self.set(key, value)
            if length is not None and base + length > self._seq.next:
                self._seq.next = base + length
                self._changed()

        def merge_maps(entries: List[Tuple[Any, Any]], length: Optional[int] = None) -> None:
            for key, value in entries:
                if is_index(key):
                    if is_mapish(value, self._options):
                        merge_maps(list(Container(value).entries()))
                    else:
                        if is_setish(value, self._options):
                            value = self.similar(value)
                        self.set(None, value)
                else:
                    self.set(key, value)

        push_inner = merge_maps if transform == "sets" else push_entries

        def push_all() -> None:
            for item in items:
                normalized = classify(item, self._options, Container)
                if normalized.kind is InputKind.SCALAR:
                    self.set(None, normalized.value)
                else:
                    push_inner(normalized.entries, normalized.length)

        self._atomic(push_all)
        return self

    def unshift(self, *items: Any) -> Container:
        """
        Prepend items, first argument frontmost.

        Items are handled last-to-first; each one is aggregated like
        ``similar(item)``, existing indices move up by the aggregate's
        next, and the aggregate is inserted in front. Named keys repeated
        across items therefore keep the left-most value.
        """
        if self._locked:
            raise LockedError("Cannot unshift after locking")
        if self._lock_indices:
            raise LockedError("Cannot unshift after index lock")

        def unshift_all() -> None:
            for item in reversed(items):
                aggregate = self.similar(item)
                self._renumber(0, self._seq.next, aggregate.next)
                self.from_entries(list(aggregate.entries(raw=True)), insert=True)

        self._atomic(unshift_all)
        return self

    def pop(self) -> Any:
        """Remove and return the value at next - 1 (None for a hole or empty)."""
        if self._locked:
            raise LockedError("Cannot pop after locking")
        if self._lock_indices:
            raise LockedError("Cannot pop after index lock")
        if not self._seq.next:
            return None

        def pop_last() -> Any:
            self._seq.next -= 1
            value = self.delete(self._seq.next)
            self._changed()
            return value

        return self._batch(pop_last)

    def shift(self) -> Any:
        """Remove and return the value at index 0, renumbering the rest down."""
        if self._locked:
            raise LockedError("Cannot shift after locking")
        if self._lock_indices:
            raise LockedError("Cannot shift after index lock")
        if not self._seq.next:
            return None

        def shift_first() -> Any:
            value = self.delete(0)
            self._renumber(1, self._seq.next, -1)
            return value

        return self._batch(shift_first)

    def _renumber(self, start: int, stop: int, by: int) -> None:
        moves = self._seq.renumber(start, stop, by)
        for old, new in moves:
            old_key, new_key = str(old), str(new)
            if old_key in self._storage:
                self._storage[new_key] = self._storage.pop(old_key)
            if old_key in self._locked_values:
                self._locked_values.discard(old_key)
                self._locked_values.add(new_key)
        if by:
            self._changed()

    def reverse(self) -> Container:
        """Reverse in place: key order flips and index i becomes next - 1 - i."""
        if self._locked:
            raise LockedError("Cannot reverse after locking")
        mapping = self._seq.reversed_mapping()
        self._storage = {new: self._storage[old] for old, new in mapping}
        self._locked_values = {new for old, new in mapping if old in self._locked_values}
        self._changed()
        return self

    def to_reversed(self) -> Container:
        """Reversed copy."""
        self._depend()
        return self.similar().from_pairs(self.to_json()).reverse()

    def similar(self, *items: Any) -> Container:
        """New container with these options and a fresh adapter from rio.create()."""
        other = type(self)()
        other.set_options(self._options)
        if self._rio is not None:
            other.rio = self._rio.create()
        if items:
            other.push(*items)
        return other

    # ------------------------------------------------------------------
    # Locking and redaction
    # ------------------------------------------------------------------

    def lock(self, *keys: Any) -> Container:
        """Lock specific values; key addition/removal is unaffected."""
        for key in keys:
            skey = self._resolve(key)
            if skey is None:
                continue
            if index_value(skey) is not None:
                self._lock_indices = True
            self._locked_values.add(skey)
        self._changed()
        return self

    def lock_all(self, and_new: bool = False) -> Container:
        """Lock every current value (and every future one if *and_new*)."""
        if and_new:
            self._lock_new = True
        return self.lock(*self._seq.snapshot())

    def lock_keys(self) -> Container:
        """Lock the key set; values of unlocked keys may still change."""
        self._locked = True
        self._changed()
        return self

    def is_locked(self, key: Any = None) -> bool:
        self._depend()
        if key is None:
            return self._locked
        skey = self._resolve(key)
        if self._locked and skey not in self._storage:
            return True
        return skey in self._locked_values

    def freeze(self) -> Container:
        """Lock keys, indices and all values, then refuse attribute changes."""
        if not self._frozen:
            self._locked = True
            self._lock_indices = True
            self._locked_values.update(self._seq.snapshot())
            self._lock_new = True
            self._frozen = True
        return self

    def deep_freeze(self) -> Container:
        """freeze() this container and every nested container."""
        self.freeze()
        for value in list(self._storage.values()):
            if isinstance(value, Container) and not value.is_frozen:
                value.deep_freeze()
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def redact(self, *keys: Any) -> Container:
        """
        Hide values from redacted SLID output (programmatic access is unaffected).

        ``redact(True)`` hides everything; any index key hides all indices.
        """
        if self._frozen:
            raise LockedError("Cannot redact a frozen container")
        for key in keys:
            if key is True:
                self._redacted = True
            if self._redacted is True:
                break
            if not self._redacted:
                self._redacted = set()
            skey = self._resolve(key)
            if skey is None:
                continue
            self._redacted.add(0 if index_value(skey) is not None else skey)
        self._changed()
        return self

    def is_redacted(self, key: Any = None) -> bool:
        """Blanket redaction when *key* is None, else redaction of that key."""
        self._depend()
        if self._redacted is True:
            return True
        if key is None or not self._redacted:
            return False
        skey = self._resolve(key)
        if skey is None:
            return False
        if index_value(skey) is not None:
            return 0 in self._redacted
        return skey in self._redacted

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """``{"type": "@NANOS@", "next": n, "pairs": [...]}`` (compact pairs)."""
        self._depend()
        return {"type": NANOS_TYPE, "next": self._seq.next, "pairs": self.pairs(compact=True)}

    def to_object(self, array: bool = True) -> Union[Dict[str, Any], List[Any]]:
        """
        Materialize plain Python structures recursively.

        A level with only index keys becomes a list (holes -> None) when
        *array* is true; otherwise, or when named keys exist, a dict keyed
        by key-strings.
        """
        self._depend()
        entries = [
            (k, v.to_object(array) if isinstance(v, Container) else v)
            for k, v in self.entries()
        ]
        if array and all(is_index(k) for k, _ in entries):
            result: List[Any] = [None] * self._seq.next
            for k, v in entries:
                result[int(k)] = v
            return result
        return {k: v for k, v in entries}

    def to_slid(self, compact: bool = False, redact: Union[bool, str] = False) -> str:
        """
        SLID text for this container.

        Args:
            compact: omit whitespace where unambiguous
            redact: True to drop redacted entries, "comment" to leave
                    inert markers in their place
        """
        from .backends.slid import generate_slid
        self._depend()
        return generate_slid(self, compact=compact, redact=redact)

    def to_string(self, **options: Any) -> str:
        """SLID text with redaction on by default."""
        options.setdefault("redact", True)
        return self.to_slid(**options)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_slid()})"


def _compact_key(key: str, compact: bool) -> Key:
    if compact:
        ind = index_value(key)
        if ind is not None:
            return ind
    return key
