"""
Tests for serialization and deserialization of NANOS containers.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `nanos.serialization`.
"""

import pytest
from nanos import Container, Hole, NANOS_TYPE, Undefined
from nanos.examples import build_example_container
from nanos.serialization import (
    container_to_dict,
    container_from_dict,
    container_to_json,
    container_from_json,
    container_to_yaml,
    container_from_yaml,
)


def build_sample_container() -> Container:
    c = Container(1, "two", [Hole])
    c.set("id", 3)
    c.set("missing", Undefined)
    c.set("nested", Container("a", [Container("b")]))
    return c


def test_dict_snapshot():
    c = build_sample_container()
    d = container_to_dict(c)
    assert d["type"] == NANOS_TYPE
    assert d["next"] == 3
    assert d["pairs"][:6] == [0, 1, 1, "two", "id", 3]
    assert d["pairs"][7] is None
    assert d["pairs"][9] == {
        "type": NANOS_TYPE,
        "next": 2,
        "pairs": [0, "a", 1, {"type": NANOS_TYPE, "next": 1, "pairs": [0, "b"]}],
    }


def test_dict_roundtrip():
    c = build_sample_container()
    d = container_to_dict(c)
    c2 = container_from_dict(d)
    assert isinstance(c2.at("nested"), Container)
    assert c2.next == 3
    assert container_to_dict(c2) == d


def test_json_roundtrip():
    c = build_example_container()
    j = container_to_json(c)
    c2 = container_from_json(j)
    assert container_to_dict(c2) == container_to_dict(c)
    assert c2.to_slid() == c.to_slid()


def test_yaml_roundtrip():
    c = build_example_container()
    y = container_to_yaml(c)
    c2 = container_from_yaml(y)
    assert container_to_dict(c2) == container_to_dict(c)


def test_from_dict_rejects_other_types():
    with pytest.raises(TypeError):
        container_from_dict({"type": "other", "pairs": []})
