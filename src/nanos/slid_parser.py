"""
SLID Parser for NANOS (Static List Data text -> Container).

SLID Format:
    [( item item key=value [nested list] )]

Syntax Notes:
    - Only the text between the first "[(" and the next ")]" is parsed;
      anything around it is ignored
    - ")\\]" inside the boundary stands for a literal ")]"
    - Items without "key=" are assigned the next index
    - @f @n @t @u are False / None / True / Undefined, @e skips one index
    - /* ... */ comments are ignored
    - Numbers: decimal, float, 0b/0o/0x radix, optional "n" suffix
    - Strings: bare words, or single/double quoted with JS escapes

QJSON ("quasi-JSON") is parsed by rewriting it to SLID first; see
parse_qjson().
"""

import logging
import re
from typing import Any, List, Optional, Tuple

from .errors import BoundaryError, MalformedError, UnterminatedStringError
from .escape import unescape_js_string
from .model import Container
from .values import Undefined


logger = logging.getLogger(__name__)

_FLOAT = r"[+-]?\d+(?:[.]\d+)?(?:[eE][+-]?\d+)?"
_INT = r"[+-]?(?:0[bB][01]+|0[oO][0-7]+|0[xX][0-9a-fA-F]+|\d+)n?"

_TOKEN_RE = re.compile(
    "("
    r"/\*.*?\*/"
    rf"|{_FLOAT}(?![0-9a-zA-Z])"
    rf"|{_INT}(?![0-9a-zA-Z])"
    r"|'(?:\\.|[^'\\])*'"
    r'|"(?:\\.|[^"\\])*"'
    r"|[\[=\]]"
    r"|\s+"
    r"""|(?:[^'"/[=\]\s]|/(?![*]))+"""
    ")",
    re.DOTALL,
)
_SKIP_RE = re.compile(r"^(?:\s*|/\*.*\*/)$", re.DOTALL)
_BOUNDARY_RE = re.compile(r"\[\((.*?)\)\]", re.DOTALL)
_FLOAT_RE = re.compile(_FLOAT)
_INT_RE = re.compile(_INT)
_RADIX = {"b": 2, "o": 8, "x": 16}

_SLID_SPECIALS = {"@f": False, "@n": None, "@t": True, "@u": Undefined}
_QJSON_SPECIALS = {"false": False, "null": None, "true": True}

_DQS_RE = re.compile(r'("(?:\\.|[^"\\])*")', re.DOTALL)
_QJSON_PUNCT = str.maketrans({"{": "[", "}": "]", ",": " ", ":": "="})


def tokenize_slid(body: str) -> List[str]:
    """
    Split the text inside the boundary into tokens.

    Whitespace and comments are dropped. Text no token pattern accepts
    (such as a lone quote) is kept as its own token so the parser can
    report it.
    """
    return [t for t in _TOKEN_RE.split(body) if t and not _SKIP_RE.match(t)]


def parse_slid(text: str, qj: bool = False, container: Optional[Container] = None) -> Container:
    """
    Parse SLID text.

    Args:
        text: text containing a [( ... )] boundary
        qj: QJSON mode (true/false/null words instead of @-specials,
            no @e holes)
        container: append the parsed items to this container (as by
                   push()) once the whole text has parsed

    Returns:
        Container

    Raises:
        BoundaryError: no [( ... )] in text
        MalformedError: unbalanced brackets, missing values, stray "="
        UnterminatedStringError: quoted string with no closing quote
    """
    match = _BOUNDARY_RE.search(text)
    if not match:
        raise BoundaryError("Missing SLID boundary marker(s)")
    body = match.group(1).replace(")\\]", ")]")
    tokens = tokenize_slid(body)
    logger.debug("SLID body: %d tokens", len(tokens))

    root = container.similar() if container is not None else Container()
    pos = _parse_items(tokens, 0, root, qj)
    if pos < len(tokens):
        raise MalformedError(f"Unexpected {tokens[pos]!r} at top level")
    if container is not None:
        return container.push(root)
    return root


def parse_qjson(text: str) -> Container:
    """
    Parse quasi-JSON: JSON, plus "/* */" comments, without the need for
    commas, and with SLID words and numbers accepted as values.

    The outermost brackets or braces are optional.

    Example:
        parse_qjson('{"a": 1, "b": [true, null]}')  ==  parse_slid('[(a=1 b=[@t @n])]')
    """
    text = re.sub(r"^\s*[\[{]?", "", text, count=1)
    text = re.sub(r"[\]}]\s*$", "", text, count=1)
    parts = _DQS_RE.split(text)
    # Odd indices are double-quoted strings, kept as written
    for i in range(0, len(parts), 2):
        parts[i] = parts[i].translate(_QJSON_PUNCT)
    body = "".join(parts).replace(")]", ")\\]")
    logger.debug("QJSON rewritten to SLID body of %d chars", len(body))
    return parse_slid("[(" + body + ")]", qj=True)


def _parse_items(tokens: List[str], pos: int, container: Container, qj: bool) -> int:
    """Parse items into container until "]" or end of tokens."""
    while pos < len(tokens):
        token = tokens[pos]
        if token == "]":
            return pos
        if token == "=":
            raise MalformedError("Missing key before '='")
        if pos + 1 < len(tokens) and tokens[pos + 1] == "=":
            if token == "[":
                raise MalformedError("A list cannot be used as a key")
            key, pos = _parse_left(tokens, pos)
            pos += 1
            if pos >= len(tokens) or tokens[pos] in ("]", "="):
                raise MalformedError(f"Missing value for key {key!r}")
            value, pos = _parse_right(tokens, pos, container, qj)
            container.set(key, value)
        elif token == "@e" and not qj:
            container.next = container.next + 1
            pos += 1
        else:
            value, pos = _parse_right(tokens, pos, container, qj)
            container.set(None, value)
    return pos


def _parse_right(tokens: List[str], pos: int, parent: Container, qj: bool) -> Tuple[Any, int]:
    """Parse a value: nested list, special word, or literal."""
    token = tokens[pos]
    if token == "[":
        nested = parent.similar()
        pos = _parse_items(tokens, pos + 1, nested, qj)
        if pos >= len(tokens):
            raise MalformedError("Unterminated '[' (missing ']')")
        return nested, pos + 1

    specials = _QJSON_SPECIALS if qj else _SLID_SPECIALS
    if token in specials:
        return specials[token], pos + 1
    return _parse_left(tokens, pos)


def _parse_left(tokens: List[str], pos: int) -> Tuple[Any, int]:
    """Parse a literal: number, quoted string, or bare word."""
    token = tokens[pos]
    if _INT_RE.fullmatch(token) or _FLOAT_RE.fullmatch(token):
        return _parse_number(token), pos + 1
    if token[0] in "'\"":
        if len(token) < 2 or token[-1] != token[0]:
            raise UnterminatedStringError(f"Unterminated string: {token[:20]!r}")
        return unescape_js_string(token[1:-1]), pos + 1
    return token, pos + 1


def _parse_number(token: str) -> Any:
    """Convert a numeric token to int or float."""
    text = token[:-1] if token.endswith("n") else token
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("+-")
    if len(digits) > 2 and digits[0] == "0" and digits[1].lower() in _RADIX:
        return sign * int(digits[2:], _RADIX[digits[1].lower()])
    if "." in digits or "e" in digits or "E" in digits:
        return float(text)
    return int(text)
