"""
SLID text generator for NANOS containers.

Converts a Container into SLID format:

    [(1 two id=3 'quoted string' nested=[a b])]

Supports redaction modes:
    - OFF: everything is written
    - ON: redacted entries are omitted
    - COMMENT: redacted entries leave an inert comment marker
"""

import logging
import re
import warnings
from enum import Enum
from typing import Any, List, Union

from nanos.escape import escape_js_string
from nanos.inputs import is_transparent
from nanos.keys import index_value
from nanos.model import Container
from nanos.values import Undefined


logger = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2 ** 53 - 1

_WORD_RE = re.compile(r"^[!()*.,:;<>?A-Z{}_][!()*.,0-9:;<>?@A-Z{}_-]*$", re.IGNORECASE)
_JOINT_RE = re.compile(r"['\"\[\]]")


class RedactMode(Enum):
    """Redaction handling for SLID output."""
    OFF = "off"
    ON = "on"
    COMMENT = "comment"


def _redact_mode(redact: Union[bool, str, RedactMode]) -> RedactMode:
    if isinstance(redact, RedactMode):
        return redact
    if redact == "comment":
        return RedactMode.COMMENT
    return RedactMode.ON if redact else RedactMode.OFF


def _escape_slid_string(s: str) -> str:
    return escape_js_string(s).replace(")]", ")\\]")


def _squish(items: List[str]) -> str:
    """Join items, adding a space only where the neighbours would merge."""
    parts: List[str] = []
    for item in items:
        if parts:
            joint = parts[-1][-1:] + item[:1]
            if not _JOINT_RE.search(joint):
                parts.append(" ")
        parts.append(item)
    return "".join(parts)


def value_to_slid(value: Any, compact: bool = False, redact: Union[bool, str, RedactMode] = False) -> str:
    """
    Render one value.

    Scalars map to:
        False/None/True/Undefined -> @f/@n/@t/@u
        int                       -> decimal ("n" suffix beyond 2**53 - 1)
        float                     -> repr
        str                       -> bare word when safe, else quoted

    Lists, sets, dicts and mappings are written as nested containers.
    Anything else is written as ``@u/*??*/`` with a warning.
    """
    if value is False:
        return "@f"
    if value is None:
        return "@n"
    if value is True:
        return "@t"
    if value is Undefined:
        return "@u"
    if isinstance(value, int):
        if abs(value) > MAX_SAFE_INTEGER:
            return f"{value}n"
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        if _WORD_RE.match(value):
            return value
        return "'" + _escape_slid_string(value) + "'"

    if not isinstance(value, Container) and is_transparent(value, {}):
        value = Container(value)
    if isinstance(value, Container):
        return "[" + items_to_slid(value, compact, redact) + "]"

    warnings.warn(f"Cannot represent {type(value).__name__} in SLID; writing @u", UserWarning)
    return "@u/*??*/"


def items_to_slid(container: Container, compact: bool = False, redact: Union[bool, str, RedactMode] = False) -> str:
    """
    Render the items of a container (without the surrounding brackets).

    Index values are written bare while they follow on from the previous
    index, otherwise as ``N=value``. Unfilled indices below ``next`` after
    the last stored index are written as ``@e``.
    """
    mode = _redact_mode(redact)
    if mode is not RedactMode.OFF and container.is_redacted():
        return "/*???*/" if mode is RedactMode.COMMENT else ""

    hide_indices = mode is not RedactMode.OFF and container.is_redacted(0)
    items: List[str] = []
    expected = 0
    for key, value in container.entries():
        ind = index_value(key)
        if ind is not None:
            if hide_indices:
                if mode is RedactMode.COMMENT:
                    items.append("/*?*/")
                continue
            prefix = "" if ind == expected else f"{ind}="
            items.append(prefix + value_to_slid(value, compact, mode))
            expected = ind + 1
        elif mode is not RedactMode.OFF and container.is_redacted(key):
            if mode is RedactMode.COMMENT:
                items.append("/*?=?*/")
        else:
            items.append(value_to_slid(key, compact, mode) + "=" + value_to_slid(value, compact, mode))

    if not hide_indices:
        items.extend(["@e"] * (container.next - expected))

    return _squish(items) if compact else " ".join(items)


def generate_slid(value: Any, compact: bool = False, redact: Union[bool, str, RedactMode] = False) -> str:
    """
    Generate SLID text.

    Args:
        value: Container, or anything a Container can be built from
        compact: omit whitespace where unambiguous
        redact: False, True, "comment" (or a RedactMode)

    Returns:
        String of the form "[( ... )]"
    """
    if not isinstance(value, Container):
        value = Container(value)
    body = items_to_slid(value, compact, redact)
    logger.debug("Generated SLID body of %d chars (next=%d)", len(body), value.next)
    return "[(" + body.replace(")]", ")\\]") + ")]"


def save_slid_file(value: Any, filename: str, compact: bool = False, redact: Union[bool, str, RedactMode] = False) -> None:
    """
    Generate SLID and save to file.

    Args:
        value: Container to write
        filename: Output file path (.slid extension recommended)
        compact: omit whitespace where unambiguous
        redact: redaction mode
    """
    slid = generate_slid(value, compact=compact, redact=redact)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(slid)


__all__ = [
    "MAX_SAFE_INTEGER",
    "RedactMode",
    "generate_slid",
    "items_to_slid",
    "save_slid_file",
    "value_to_slid",
]
