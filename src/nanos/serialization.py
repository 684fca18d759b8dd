"""
Serialization helpers for NANOS containers.

Provides JSON/YAML round-trip via the intermediate "@NANOS@" snapshot dict:

    {"type": "@NANOS@", "next": 3, "pairs": [0, "a", "id", 7, ...]}

Nested containers become nested snapshots. Undefined has no JSON/YAML
form and is written as None.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from nanos.model import NANOS_TYPE, Container
from nanos.values import Undefined


def _value_to_plain(value: Any) -> Any:
    if isinstance(value, Container):
        return container_to_dict(value)
    if value is Undefined:
        return None
    return value


def _value_from_plain(value: Any) -> Any:
    if isinstance(value, dict) and value.get("type") == NANOS_TYPE:
        return container_from_dict(value)
    return value


def container_to_dict(c: Container) -> Dict[str, Any]:
    pairs = []
    for key, value in c.entries(compact=True):
        pairs.extend((key, _value_to_plain(value)))
    return {"type": NANOS_TYPE, "next": c.next, "pairs": pairs}


def container_from_dict(d: Dict[str, Any]) -> Container:
    if d.get("type") != NANOS_TYPE:
        raise TypeError(f"Not a {NANOS_TYPE} snapshot: type={d.get('type')!r}")
    pairs = [_value_from_plain(p) if i % 2 else p for i, p in enumerate(d.get("pairs", []))]
    return Container().from_pairs({"type": NANOS_TYPE, "next": d.get("next"), "pairs": pairs})


def container_to_json(c: Container) -> str:
    return json.dumps(container_to_dict(c), sort_keys=True)


def container_from_json(s: str) -> Container:
    d = json.loads(s)
    return container_from_dict(d)


def container_to_yaml(c: Container) -> str:
    return yaml.safe_dump(container_to_dict(c))


def container_from_yaml(s: str) -> Container:
    d = yaml.safe_load(s)
    return container_from_dict(d)
