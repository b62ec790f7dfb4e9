"""Unit tests for label escaping and value formatting.

Pure functions; expected strings are the exact record-label text.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from class_atlas.labels.escape import escape, record
from class_atlas.labels.values import format_value, value_type_name

# ---------------------------------------------------------------------------
# escape
# ---------------------------------------------------------------------------


class TestEscape:
    def test_word_characters_untouched(self):
        assert escape("Foo_bar42") == "Foo_bar42"

    def test_space_and_hyphen(self):
        assert escape("my name-x") == r"my\ name\-x"

    def test_every_non_word_character_is_prefixed(self):
        assert escape("a.b{c}|<d>") == r"a\.b\{c\}\|\<d\>"

    def test_control_characters_become_escapes_first(self):
        # the backslash introduced for the tab is itself escaped afterwards
        assert escape("a\tb") == r"a\\tb"
        assert escape("x\ny\rz") == r"x\\ny\\rz"

    def test_unicode_letters_pass_unicode_punctuation_escaped(self):
        assert escape("Größe") == "Größe"
        assert escape("«x»") == r"\«x\»"

    def test_record(self):
        assert record("A", "b", "c") == '"{A|b|c}"'


# ---------------------------------------------------------------------------
# format_value
# ---------------------------------------------------------------------------


@dataclass
class Point:
    x: int = 0


class TestFormatValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "NULL"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-12, "-12"),
            (1.5, "1.5"),
            ([], "[]"),
            ({}, "[]"),
            ((), "[]"),
            ([1, 2], "[…]"),
            ({"a": 1}, "[…]"),
            (b"raw", "…"),
        ],
    )
    def test_scalars_and_collections(self, value, expected):
        assert format_value(value) == expected

    def test_plain_string(self):
        assert format_value("abc") == r"\"abc\""

    def test_string_with_quotes(self):
        assert format_value('he said "hi"') == r'\"he\ said\ \\\"hi\\\"\"'

    def test_object(self):
        assert format_value(Point()) == r"Point\{…\}"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "NULL"),
        (True, "boolean"),
        (3, "integer"),
        (3.0, "double"),
        ("s", "string"),
        ([1], "array"),
        ({"k": 1}, "array"),
        (Point(), "object"),
    ],
)
def test_value_type_name(value, expected):
    assert value_type_name(value) == expected
