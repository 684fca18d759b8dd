"""
Reactive-interface object (RIO) contract.

A container never implements reactivity itself. It talks to an optional
adapter supplied by the host application:

    basic adapter     batch(fn), changed(), create(), depend()
    extended adapter  basic + get(value), is_reactive(value),
                      on_set(container, key, value)

The container calls ``depend()`` on reads, ``changed()`` after structural
mutations (keys added/removed, locks, redaction, ``next``), and wraps bulk
mutations in ``batch(fn)`` so observers see one coalesced notification.
Extended adapters also see every ``set`` (``on_set`` may wrap or replace
the value to store) and unwrap reads to final values (``is_reactive`` +
``get``).

Adapters are duck-typed; the ReactiveInterface Protocol below documents
the basic shape and annotates the container's ``rio`` property. The
extended capabilities are checked by name (EXTENDED_CAPABILITIES).
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar


T = TypeVar("T")

REQUIRED_CAPABILITIES = ("batch", "changed", "create", "depend")
EXTENDED_CAPABILITIES = ("get", "is_reactive", "on_set")


class ReactiveInterface(Protocol):
    """Basic adapter: packaging-level (structural) reactivity."""

    def batch(self, fn: Callable[[], T]) -> T: ...

    def changed(self) -> None: ...

    def create(self) -> "ReactiveInterface": ...

    def depend(self) -> Any: ...


def _has_all(obj: Any, names) -> bool:
    return all(callable(getattr(obj, name, None)) for name in names)


def is_reactive_interface(obj: Any) -> bool:
    """True if *obj* provides every basic capability."""
    return obj is not None and _has_all(obj, REQUIRED_CAPABILITIES)


def is_extended_interface(obj: Any) -> bool:
    """True if *obj* provides the basic and the extended capabilities."""
    return is_reactive_interface(obj) and _has_all(obj, EXTENDED_CAPABILITIES)
