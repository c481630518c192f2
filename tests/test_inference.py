"""Tests for scalar type inference."""

import pytest

from sheetql.schema.inference import (
    UNKNOWN_TYPE_DESCRIPTION,
    ScalarKind,
    apply_coercions,
    infer_type,
    is_normal_integer,
    sample_values,
    to_boolean,
)


def rows_of(field, values):
    return [{field: value} for value in values]


class TestNormalInteger:
    """Test recognition of non-negative integers."""

    @pytest.mark.parametrize("value", ["0", "3", "10", "2147483647", 0, 7, 12.0])
    def test_accepted(self, value):
        assert is_normal_integer(value)

    @pytest.mark.parametrize(
        "value",
        ["-1", "+1", "1.5", "1e3", "007", " 1", "", "abc", "2147483648", -3, 1.5, True, None, "٣"],
    )
    def test_rejected(self, value):
        assert not is_normal_integer(value)


class TestInferType:
    """Test classification of columns."""

    def test_boolean_from_zeros_and_ones(self):
        rows = rows_of("flag", [1, 0, 1, 1])
        inferred = infer_type("flag", rows)

        assert inferred.kind is ScalarKind.BOOLEAN
        assert inferred.coercion is not None
        assert apply_coercions(rows, {"flag": inferred.coercion}) == rows_of(
            "flag", [True, False, True, True]
        )

    def test_boolean_does_not_touch_rows(self):
        rows = rows_of("flag", [1, 0, 1, 1])
        infer_type("flag", rows)
        assert [row["flag"] for row in rows] == [1, 0, 1, 1]

    def test_boolean_from_booleans_and_strings(self):
        assert infer_type("flag", rows_of("flag", [True, False, True])).kind is ScalarKind.BOOLEAN
        assert infer_type("flag", rows_of("flag", ["1", "0", "1"])).kind is ScalarKind.BOOLEAN

    def test_integer_with_range(self):
        inferred = infer_type("count", rows_of("count", ["3", "10", "7"]))

        assert inferred.kind is ScalarKind.INT
        assert "Min value: 3" in inferred.description
        assert "Max value: 10" in inferred.description
        assert inferred.coercion is None

    def test_integer_from_numbers(self):
        inferred = infer_type("count", rows_of("count", [5, 2, 40, None]))
        assert inferred.kind is ScalarKind.INT
        assert inferred.description == "Min value: 2\nMax value: 40"

    def test_all_empty_is_unknown_string(self):
        inferred = infer_type("notes", rows_of("notes", [None, "", 0, False]))
        assert inferred.kind is ScalarKind.STRING
        assert inferred.description == UNKNOWN_TYPE_DESCRIPTION

    def test_no_rows_is_unknown_string(self):
        assert infer_type("anything", []).description == UNKNOWN_TYPE_DESCRIPTION

    def test_missing_field_is_unknown_string(self):
        assert infer_type("absent", [{"other": 1}]).kind is ScalarKind.STRING

    def test_string_examples(self):
        inferred = infer_type("name", rows_of("name", ["ann", "", "bo", "cy", "di"]))
        assert inferred.kind is ScalarKind.STRING
        assert inferred.description == "Examples:\nann\nbo\ncy"

    def test_negative_numbers_are_strings(self):
        assert infer_type("delta", rows_of("delta", ["-1", "4"])).kind is ScalarKind.STRING

    def test_all_zero_column_is_not_recognized(self):
        # zeros are treated as missing, so nothing is left to infer from
        inferred = infer_type("count", rows_of("count", [0, 0, 0]))
        assert inferred.kind is ScalarKind.STRING
        assert inferred.description == UNKNOWN_TYPE_DESCRIPTION

    def test_single_one_is_boolean(self):
        assert infer_type("count", rows_of("count", [0, 1, 0])).kind is ScalarKind.BOOLEAN

    def test_sample_values_drop_falsy(self):
        rows = rows_of("x", [None, 0, "", False, "a", 2]) + [{}]
        assert sample_values("x", rows) == ["a", 2]


class TestCoercion:
    """Test boolean coercion of cells."""

    def test_numeric_zero_is_false(self):
        assert to_boolean(0) is False
        assert to_boolean(0.0) is False

    def test_string_zero_is_true(self):
        assert to_boolean("0") is True

    def test_empty_values_are_false(self):
        assert to_boolean(None) is False
        assert to_boolean("") is False

    def test_apply_coercions_fills_missing_fields(self):
        rows = [{"flag": 1}, {}]
        coerced = apply_coercions(rows, {"flag": to_boolean})
        assert coerced == [{"flag": True}, {"flag": False}]
        assert rows == [{"flag": 1}, {}]

    def test_apply_without_coercions_copies(self):
        rows = [{"a": 1}]
        coerced = apply_coercions(rows, {})
        assert coerced == rows
        assert coerced[0] is not rows[0]
