"""JavaScript-style string escaping for quoted SLID strings."""

from __future__ import annotations

import re


_ESCAPE_RE = re.compile("[\x00-\x1f'\"\\\\\x7f-\U0010ffff]")
_UNESCAPE_RE = re.compile(r"""\\[\\bfnrt'"/]|\\x[0-9a-fA-F]{2}|\\u[0-9a-fA-F]{4}""")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")

_NAMED_ESCAPES = {
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "'": "\\'",
    '"': '\\"',
    "\\": "\\\\",
}

_NAMED_UNESCAPES = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _escape_code_unit(cc: int) -> str:
    if cc < 0x100:
        return f"\\x{cc:02x}"
    return f"\\u{cc:04x}"


def _escape_char(match: re.Match) -> str:
    c = match.group(0)
    if c in _NAMED_ESCAPES:
        return _NAMED_ESCAPES[c]
    cc = ord(c)
    if cc > 0xFFFF:
        # Astral characters are written as a UTF-16 surrogate pair
        cc -= 0x10000
        return _escape_code_unit(0xD800 + (cc >> 10)) + _escape_code_unit(0xDC00 + (cc & 0x3FF))
    return _escape_code_unit(cc)


def escape_js_string(s: str) -> str:
    """
    Escape control characters, quotes, backslash and everything from
    U+007F upward.

    Examples:
        "it's"  -> "it\\'s"
        "é"     -> "\\xe9"
        "\\n"   -> "\\\\n"
    """
    return _ESCAPE_RE.sub(_escape_char, s)


def _unescape_match(match: re.Match) -> str:
    e = match.group(0)
    if e[1] in _NAMED_UNESCAPES:
        return _NAMED_UNESCAPES[e[1]]
    return chr(int(e[2:], 16))


def unescape_js_string(s: str) -> str:
    """Inverse of escape_js_string; unknown escapes are left as written."""
    result = _UNESCAPE_RE.sub(_unescape_match, s)
    if _SURROGATE_RE.search(result):
        result = result.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return result
