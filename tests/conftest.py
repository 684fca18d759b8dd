"""Shared fixtures: fake reactive adapters."""

import pytest


class CountingRIO:
    """Basic adapter counting depend/changed calls; batch() coalesces changes."""

    def __init__(self):
        self.depends = 0
        self.changes = 0
        self.batches = 0
        self.created = []
        self._depth = 0
        self._pending = False

    def batch(self, fn):
        self.batches += 1
        self._depth += 1
        try:
            result = fn()
        finally:
            self._depth -= 1
            if not self._depth and self._pending:
                self._pending = False
                self.changes += 1
        return result

    def changed(self):
        if self._depth:
            self._pending = True
        else:
            self.changes += 1

    def create(self):
        rio = type(self)()
        self.created.append(rio)
        return rio

    def depend(self):
        self.depends += 1


class Cell:
    """Minimal reactive value."""

    def __init__(self, value):
        self.value = value


class CellRIO(CountingRIO):
    """Extended adapter: wraps values in Cell when auto_reactive is set."""

    def get(self, value):
        return value.value

    def is_reactive(self, value):
        return isinstance(value, Cell)

    def on_set(self, container, key, value):
        if container.options.get("auto_reactive") and not isinstance(value, Cell):
            return Cell(value)
        return value


@pytest.fixture
def rio():
    return CountingRIO()


@pytest.fixture
def cell_rio():
    return CellRIO()
