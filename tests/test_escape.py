"""Tests for JS-style string escaping."""

from nanos.escape import escape_js_string, unescape_js_string


class TestEscape:
    """Test escape_js_string()."""

    def test_named_escapes(self):
        """Quotes, backslash and common controls use short escapes."""
        assert escape_js_string("it's") == "it\\'s"
        assert escape_js_string('say "hi"') == 'say \\"hi\\"'
        assert escape_js_string("a\\b") == "a\\\\b"
        assert escape_js_string("\n\t") == "\\n\\t"

    def test_hex_escapes(self):
        """Other controls and Latin-1 use \\x escapes."""
        assert escape_js_string("\x00") == "\\x00"
        assert escape_js_string("\x7f") == "\\x7f"
        assert escape_js_string("caf\xe9") == "caf\\xe9"

    def test_unicode_escapes(self):
        """BMP characters use \\u; astral characters use surrogate pairs."""
        assert escape_js_string("€") == "\\u20ac"
        assert escape_js_string("\U0001f600") == "\\ud83d\\ude00"

    def test_plain_ascii_untouched(self):
        """Printable ASCII is left alone."""
        assert escape_js_string("hello world!") == "hello world!"


class TestUnescape:
    """Test unescape_js_string()."""

    def test_inverse(self):
        """Unescaping reverses escaping."""
        for s in ["it's", 'q"q', "a\\b", "\n\r\t\b", "caf\xe9", "€", "\U0001f600"]:
            assert unescape_js_string(escape_js_string(s)) == s

    def test_json_escapes(self):
        """\\/ and \\f are accepted."""
        assert unescape_js_string("a\\/b\\f") == "a/b\f"

    def test_unknown_escape_kept(self):
        """Unknown escapes are left as written."""
        assert unescape_js_string("\\q") == "\\q"
