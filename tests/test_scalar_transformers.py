"""Tests for the scalar view transformers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from form_binder.failures import TransformationFailure
from form_binder.transformers.scalar import (
    BooleanToStringTransformer,
    IntegerToStringTransformer,
    NumberToStringTransformer,
    TrimStringTransformer,
)


class TestIntegerToString:
    def test_round_trip(self):
        t = IntegerToStringTransformer()
        assert t.reverse_transform(t.transform(42)) == 42

    def test_none_renders_empty(self):
        assert IntegerToStringTransformer().transform(None) == ""

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_submission_is_none(self, empty):
        assert IntegerToStringTransformer().reverse_transform(empty) is None

    def test_surrounding_whitespace_allowed(self):
        assert IntegerToStringTransformer().reverse_transform(" 7 ") == 7

    @pytest.mark.parametrize("bad", ["abc", "3.5", "1,000"])
    def test_unparseable_fails(self, bad):
        result = IntegerToStringTransformer().reverse_transform(bad)
        assert isinstance(result, TransformationFailure)
        assert result.public_message == "Please enter an integer."

    def test_grouping(self):
        t = IntegerToStringTransformer({"grouping": True})
        assert t.reverse_transform("1,000") == 1000

    def test_bool_rejected(self):
        assert isinstance(IntegerToStringTransformer().reverse_transform(True), TransformationFailure)


class TestNumberToString:
    def test_round_trip_decimal(self):
        t = NumberToStringTransformer()
        assert t.reverse_transform(t.transform(Decimal("3.14"))) == Decimal("3.14")

    def test_none_renders_empty(self):
        assert NumberToStringTransformer().transform(None) == ""

    def test_scale_rounds_half_up(self):
        t = NumberToStringTransformer({"scale": 2})
        assert t.transform(Decimal("2.345")) == "2.35"
        assert t.reverse_transform("2.345") == Decimal("2.35")

    def test_as_float(self):
        assert NumberToStringTransformer({"as_float": True}).reverse_transform("1.5") == 1.5

    @pytest.mark.parametrize("bad", ["abc", "NaN", "Infinity"])
    def test_invalid_numbers_fail(self, bad):
        assert isinstance(NumberToStringTransformer().reverse_transform(bad), TransformationFailure)

    def test_empty_submission_is_none(self):
        assert NumberToStringTransformer().reverse_transform("") is None

    @pytest.mark.parametrize("huge", ["1e30", "12345678901234567890123456789"])
    def test_scale_overflow_on_submit_fails(self, huge):
        result = NumberToStringTransformer({"scale": 2}).reverse_transform(huge)
        assert isinstance(result, TransformationFailure)
        assert result.public_message == "Please enter a number."
        assert result.parameters["value"] == huge

    def test_scale_overflow_on_render_is_unrounded(self):
        t = NumberToStringTransformer({"scale": 2})
        assert t.transform(Decimal("1e30")) == "1E+30"
        assert t.transform(float("inf")) == "Infinity"


class TestBooleanToString:
    def test_true_renders_true_value(self):
        assert BooleanToStringTransformer().transform(True) == "1"

    @pytest.mark.parametrize("value", [None, False])
    def test_false_and_none_render_absent(self, value):
        assert BooleanToStringTransformer().transform(value) is None

    def test_round_trip(self):
        t = BooleanToStringTransformer()
        assert t.reverse_transform(t.transform(True)) is True
        assert t.reverse_transform(t.transform(False)) is False

    def test_empty_string_is_false(self):
        assert BooleanToStringTransformer().reverse_transform("") is False

    def test_custom_values(self):
        t = BooleanToStringTransformer({"true_value": "yes", "false_values": ["no", ""]})
        assert t.transform(True) == "yes"
        assert t.reverse_transform("no") is False
        assert t.reverse_transform("yes") is True

    def test_non_string_fails(self):
        assert isinstance(BooleanToStringTransformer().reverse_transform(1), TransformationFailure)


class TestTrimString:
    def test_none_renders_empty(self):
        assert TrimStringTransformer().transform(None) == ""

    def test_strips_submission(self):
        assert TrimStringTransformer().reverse_transform("  hello ") == "hello"

    @pytest.mark.parametrize("empty", [None, "", "   "])
    def test_empty_submission_is_none(self, empty):
        assert TrimStringTransformer().reverse_transform(empty) is None

    def test_round_trip(self):
        t = TrimStringTransformer()
        assert t.reverse_transform(t.transform("title")) == "title"

    def test_non_string_fails(self):
        assert isinstance(TrimStringTransformer().reverse_transform(5), TransformationFailure)
