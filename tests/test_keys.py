"""
Tests for the key sequence engine.

Tests cover:
    - Key canonicalisation and classification
    - Append and insert placement
    - Renumbering and reversal
"""

import pytest
from nanos.keys import KeySequence, index_value, is_index, is_neg_index, to_key


def make_sequence(*keys):
    seq = KeySequence()
    for key in keys:
        seq.place(key)
    return seq


class TestKeyPredicates:
    """Test key canonicalisation helpers."""

    def test_to_key_canonicalises(self):
        """Should turn ints, integral floats and bools into key-strings."""
        assert to_key(3) == "3"
        assert to_key(2.0) == "2"
        assert to_key(2.5) == "2.5"
        assert to_key(True) == "true"
        assert to_key("id") == "id"

    def test_index_keys(self):
        """Only canonical non-negative integers are index keys."""
        assert is_index("0")
        assert is_index("17")
        assert is_index(4)
        assert not is_index("01")
        assert not is_index("-1")
        assert not is_index("1.5")
        assert not is_index(True)

    def test_negative_index_keys(self):
        """Should recognise negative indices."""
        assert is_neg_index("-1")
        assert is_neg_index(-3)
        assert not is_neg_index("-0")
        assert not is_neg_index("1")

    def test_index_value(self):
        """Should return the int for index keys and None otherwise."""
        assert index_value("12") == 12
        assert index_value("x") is None


class TestPlacement:
    """Test append and insert placement."""

    def test_append_mode_uses_latest_position(self):
        """A missing index lands after named keys that precede the next index."""
        seq = make_sequence("a", "1", "b", "3", "c")
        seq.place("2")
        assert seq.keys == ["a", "1", "b", "2", "3", "c"]

    def test_insert_mode_uses_earliest_position(self):
        """Insert mode puts the index right after its predecessor."""
        seq = make_sequence("a", "1", "b", "3", "c")
        seq.place("2", insert=True)
        assert seq.keys == ["a", "1", "2", "b", "3", "c"]

    def test_named_keys(self):
        """Named keys go to the end, or the start in insert mode."""
        seq = make_sequence("0")
        seq.place("x")
        seq.place("y", insert=True)
        assert seq.keys == ["y", "0", "x"]

    def test_next_tracks_highest_index(self):
        """next is one more than the highest placed index."""
        seq = make_sequence("5")
        assert seq.next == 6
        seq.place("2")
        assert seq.next == 6
        assert seq.keys == ["2", "5"]

    def test_duplicate_key_rejected(self):
        """Placing an existing key is an error."""
        seq = make_sequence("a")
        with pytest.raises(ValueError):
            seq.place("a")


class TestRenumber:
    """Test index renumbering."""

    def test_shift_up(self):
        """Shifting up moves the highest index first and raises next."""
        seq = make_sequence("0", "x", "1")
        moves = seq.renumber(0, 2, 2)
        assert moves == [(1, 3), (0, 2)]
        assert seq.keys == ["2", "x", "3"]
        assert seq.next == 4

    def test_shift_down(self):
        """Shifting down moves the lowest index first and lowers next."""
        seq = make_sequence("1", "2")
        moves = seq.renumber(1, 3, -1)
        assert moves == [(1, 0), (2, 1)]
        assert seq.keys == ["0", "1"]
        assert seq.next == 2

    def test_reversed_mapping(self):
        """Reversal mirrors indices around next."""
        seq = make_sequence("0", "a", "2")
        seq.next = 4
        mapping = seq.reversed_mapping()
        assert mapping == [("2", "1"), ("a", "a"), ("0", "3")]
        assert seq.keys == ["1", "a", "3"]
