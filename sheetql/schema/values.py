"""Scalar comparison semantics used by the inference heuristics and resolvers.

Spreadsheet cells arrive as a mix of strings, numbers and booleans, and the
heuristics compare them loosely: ``"1"`` equals ``1``, ``True`` equals ``1``,
blank strings count as zero. These helpers give those comparisons one
well-defined home.
"""

import math
import re
from typing import Any, Union

# Marks a key that is absent from a row, as opposed to present with None.
MISSING = object()

_DECIMAL = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)$")
_PREFIXED = {
    "0x": (re.compile(r"^0[xX][0-9a-fA-F]+$"), 16),
    "0o": (re.compile(r"^0[oO][0-7]+$"), 8),
    "0b": (re.compile(r"^0[bB][01]+$"), 2),
}

Number = Union[int, float]


def is_number(value: Any) -> bool:
    """True for int and float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Truthiness where NaN and missing values are falsy."""
    if value is MISSING:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_number(value: Any) -> Number:
    """Convert a scalar to a number, returning NaN when it has no numeric reading."""
    if value is MISSING:
        return math.nan
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if is_number(value):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return math.nan


def parse_number(text: str) -> Number:
    text = text.strip()
    if not text:
        return 0
    prefix = text[:2].lower()
    if prefix in _PREFIXED:
        pattern, base = _PREFIXED[prefix]
        return int(text, base) if pattern.match(text) else math.nan
    if not _DECIMAL.match(text):
        return math.nan
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    number = float(text)
    if number.is_integer() and abs(number) < 2 ** 53:
        return int(number)
    return number


def loose_equals(left: Any, right: Any) -> bool:
    """Equality that converts between strings, numbers and booleans."""
    left_empty = left is None or left is MISSING
    right_empty = right is None or right is MISSING
    if left_empty or right_empty:
        return left_empty and right_empty
    if isinstance(left, bool):
        return loose_equals(int(left), right)
    if isinstance(right, bool):
        return loose_equals(left, int(right))
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_number(left) and isinstance(right, str):
        return left == parse_number(right)
    if isinstance(left, str) and is_number(right):
        return parse_number(left) == right
    return left == right


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without conversions: ``1`` and ``"1"`` differ, ``1`` and ``1.0`` do not."""
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


def greater_or_equal(left: Any, right: Any) -> bool:
    """Ordering used by the sort comparator.

    Two strings compare lexicographically; anything else is compared
    numerically, and a comparison involving NaN is False.
    """
    if isinstance(left, str) and isinstance(right, str):
        return left >= right
    left_number, right_number = to_number(left), to_number(right)
    if math.isnan(left_number) or math.isnan(right_number):
        return False
    return left_number >= right_number


def sort_comparator(field: str):
    """Return a cmp-style function ordering rows by ``field`` ascending.

    Never reports equality, so ties keep their relative order only through
    the stability of the sort that uses it.
    """
    def compare(left: dict, right: dict) -> int:
        return 1 if greater_or_equal(left.get(field, MISSING), right.get(field, MISSING)) else -1

    return compare
