"""Tests for scalar comparison semantics."""

import math
from functools import cmp_to_key

import pytest

from sheetql.schema.values import (
    MISSING,
    greater_or_equal,
    is_truthy,
    loose_equals,
    parse_number,
    sort_comparator,
    strict_equals,
    to_number,
)


class TestTruthiness:
    """Test which cell values count as empty."""

    @pytest.mark.parametrize("value", [None, MISSING, 0, 0.0, "", False, math.nan])
    def test_falsy(self, value):
        assert not is_truthy(value)

    @pytest.mark.parametrize("value", ["0", " ", "false", 1, -1, 0.5, True])
    def test_truthy(self, value):
        assert is_truthy(value)


class TestNumberParsing:
    """Test numeric readings of strings."""

    def test_decimal(self):
        assert parse_number("42") == 42
        assert parse_number(" 7 ") == 7
        assert parse_number("1.5") == 1.5
        assert parse_number("-3") == -3
        assert parse_number("1e3") == 1000
        assert parse_number(".5") == 0.5

    def test_blank_is_zero(self):
        assert parse_number("") == 0
        assert parse_number("   ") == 0

    def test_prefixed(self):
        assert parse_number("0x10") == 16
        assert parse_number("0o10") == 8
        assert parse_number("0b101") == 5

    def test_infinity(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    @pytest.mark.parametrize("text", ["abc", "1_000", "inf", "nan", "12px", "0x", "-0x10"])
    def test_not_a_number(self, text):
        assert math.isnan(parse_number(text))

    def test_to_number(self):
        assert to_number(None) == 0
        assert to_number(True) == 1
        assert to_number(2.5) == 2.5
        assert math.isnan(to_number(MISSING))
        assert math.isnan(to_number(object()))


class TestEquality:
    """Test loose and strict equality."""

    def test_loose_converts_strings_and_booleans(self):
        assert loose_equals("1", 1)
        assert loose_equals(1, "1.0")
        assert loose_equals(True, 1)
        assert loose_equals(True, "1")
        assert loose_equals(False, 0)
        assert loose_equals(" ", 0)

    def test_loose_keeps_distinct_values_apart(self):
        assert not loose_equals("abc", 0)
        assert not loose_equals("true", True)
        assert not loose_equals("a", "b")

    def test_loose_null_only_equals_null(self):
        assert loose_equals(None, None)
        assert loose_equals(None, MISSING)
        assert not loose_equals(None, 0)
        assert not loose_equals("", None)

    def test_strict(self):
        assert strict_equals(1, 1)
        assert strict_equals(1, 1.0)
        assert strict_equals("a", "a")
        assert not strict_equals(1, "1")
        assert not strict_equals(True, 1)
        assert not strict_equals(MISSING, None)


class TestOrdering:
    """Test the ordering used for sorting."""

    def test_strings_compare_lexicographically(self):
        assert greater_or_equal("b", "a")
        assert greater_or_equal("10", "9") is False

    def test_mixed_values_compare_numerically(self):
        assert greater_or_equal(10, "9")
        assert greater_or_equal(None, 0)
        assert not greater_or_equal("abc", 1)
        assert not greater_or_equal(MISSING, 1)

    def test_comparator_sorts_ascending_and_keeps_ties(self):
        rows = [
            {"name": "b", "n": 1},
            {"name": "a", "n": 2},
            {"name": "b", "n": 3},
            {"name": "a", "n": 4},
        ]
        ordered = sorted(rows, key=cmp_to_key(sort_comparator("name")))
        assert [row["n"] for row in ordered] == [2, 4, 1, 3]
