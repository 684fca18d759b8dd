"""
Tests for the SLID generator.

Tests cover:
    - Value rendering (specials, numbers, words, quoted strings)
    - Index prefixes and holes
    - Compact mode
    - Boundary escaping
    - Round trip through the parser
"""

import pytest
from nanos import Container, Hole, Undefined, parse_slid, to_slid
from nanos.backends.slid import RedactMode, generate_slid, save_slid_file, value_to_slid


class TestValueRendering:
    """Test value_to_slid()."""

    def test_specials(self):
        """Should write @-specials."""
        assert value_to_slid(False) == "@f"
        assert value_to_slid(None) == "@n"
        assert value_to_slid(True) == "@t"
        assert value_to_slid(Undefined) == "@u"

    def test_numbers(self):
        """Large integers get an n suffix."""
        assert value_to_slid(0) == "0"
        assert value_to_slid(2 ** 53 - 1) == "9007199254740991"
        assert value_to_slid(2 ** 53) == "9007199254740992n"
        assert value_to_slid(-2 ** 60) == "-1152921504606846976n"
        assert value_to_slid(1.5) == "1.5"

    def test_words(self):
        """Safe strings are written bare."""
        assert value_to_slid("ok") == "ok"
        assert value_to_slid("a-b") == "a-b"
        assert value_to_slid("x@y") == "x@y"

    def test_quoted(self):
        """Other strings are quoted and escaped."""
        assert value_to_slid("") == "''"
        assert value_to_slid("hello world") == "'hello world'"
        assert value_to_slid("it's") == "'it\\'s'"
        assert value_to_slid("1abc") == "'1abc'"
        assert value_to_slid("caf\xe9") == "'caf\\xe9'"

    def test_plain_collections(self):
        """Lists and dicts are written as nested lists."""
        assert value_to_slid([1, 2]) == "[1 2]"
        assert value_to_slid({"a": 1}) == "[a=1]"

    def test_unrepresentable(self):
        """Unknown objects become @u with a warning."""
        with pytest.warns(UserWarning):
            assert value_to_slid(object()) == "@u/*??*/"


class TestGenerateSLID:
    """Test whole-container output."""

    def test_basic(self):
        """Should render positional then named items in key order."""
        c = Container(1, "two")
        c.set("id", 3)
        c.set("status", "ok")
        assert c.to_slid() == "[(1 two id=3 status=ok)]"

    def test_gaps_use_index_prefix(self):
        """Non-consecutive indices are written as N=value."""
        assert Container([1, Hole, 3]).to_slid() == "[(1 2=3)]"
        c = Container()
        c.set(5, "x")
        assert c.to_slid() == "[(5=x)]"

    def test_trailing_holes(self):
        """Holes after the last stored index are written as @e."""
        assert Container([1, Hole, Hole]).to_slid() == "[(1 @e @e)]"

    def test_quoted_key(self):
        """Keys that are not words are quoted."""
        c = Container()
        c.set("my key", 1)
        assert c.to_slid() == "[('my key'=1)]"

    def test_compact(self):
        """Compact mode drops spaces next to quotes and brackets."""
        c = Container("a", "b", [Container("c")])
        assert c.to_slid(compact=True) == "[(a b[c])]"
        assert Container("x y", "z").to_slid(compact=True) == "[('x y'z)]"

    def test_boundary_escaped_in_string(self):
        """)] inside a string is escaped."""
        c = Container("a)]")
        assert c.to_slid() == "[('a)\\]')]"

    def test_boundary_escaped_between_items(self):
        """)] formed by a word and a closing bracket is escaped."""
        c = Container([Container("x)")])
        assert c.to_slid() == "[([x)\\])]"
        assert parse_slid(c.to_slid()).at([0, 0]) == "x)"

    def test_module_to_slid(self):
        """Non-containers are converted first."""
        assert to_slid([1, 2]) == "[(1 2)]"
        assert to_slid({"a": 1}) == "[(a=1)]"

    def test_redact_mode_enum(self):
        """RedactMode is accepted alongside bool/str."""
        c = Container(1)
        c.set("pw", "x")
        c.redact("pw")
        assert generate_slid(c, redact=RedactMode.COMMENT) == "[(1 /*?=?*/)]"
        assert generate_slid(c, redact=RedactMode.OFF) == "[(1 pw=x)]"

    def test_save_slid_file(self, tmp_path):
        """Should write the SLID text to a file."""
        path = tmp_path / "out.slid"
        save_slid_file(Container("a"), str(path))
        assert path.read_text(encoding="utf-8") == "[(a)]"


class TestRoundTrip:
    """Test that generated SLID parses back to the same container."""

    def test_round_trip(self):
        """Parsing the output and writing it again gives the same text."""
        c = Container(1, 2.5, "two words", None, True, Undefined, [Hole])
        c.set("k", 2 ** 60)
        c.set("nested", Container("a", [Container("b")]))
        c.set("quote", "it's €")
        text = c.to_slid()
        parsed = parse_slid(text)
        assert parsed.to_slid() == text
        assert parsed.next == c.next
        assert parsed.at("k") == 2 ** 60
        assert parsed.at("quote") == "it's €"

    def test_compact_round_trip(self):
        """Compact output parses to the same container."""
        c = Container("a", "b c", [Container("d")], "e")
        parsed = parse_slid(c.to_slid(compact=True))
        assert parsed.to_slid() == c.to_slid()
