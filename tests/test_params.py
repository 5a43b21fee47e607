"""
Unit tests for the argument bag accessors.
"""

import math

import pytest

from github_mcp.base import MissingParameterError, TypeMismatchError
from github_mcp.params import (
    ValueKind,
    classify,
    optional_bool,
    optional_int,
    optional_int_with_default,
    optional_object_array,
    optional_str,
    optional_string_array,
    required_bool,
    required_int,
    required_object_array,
    required_str,
)


class TestClassify:

    @pytest.mark.parametrize("value, kind", [
        ("x", ValueKind.STRING),
        ("", ValueKind.STRING),
        (1, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        (True, ValueKind.BOOLEAN),
        (False, ValueKind.BOOLEAN),
        ([], ValueKind.ARRAY),
        (["a", 1], ValueKind.ARRAY),
        (None, ValueKind.ABSENT),
        ({"a": 1}, ValueKind.OTHER),
    ])
    def test_kinds(self, value, kind):
        assert classify(value) is kind

    def test_bool_is_not_a_number(self):
        with pytest.raises(TypeMismatchError):
            required_int({"n": True}, "n")


class TestRequiredStr:

    def test_present(self):
        assert required_str({"owner": "octocat"}, "owner") == "octocat"

    def test_absent(self):
        with pytest.raises(MissingParameterError, match="missing required parameter: owner"):
            required_str({}, "owner")

    def test_empty_is_missing(self):
        with pytest.raises(MissingParameterError):
            required_str({"owner": ""}, "owner")

    def test_null_is_missing(self):
        with pytest.raises(MissingParameterError):
            required_str({"owner": None}, "owner")

    @pytest.mark.parametrize("value", [1, 2.5, True, ["a"], {"a": "b"}])
    def test_wrong_type(self, value):
        with pytest.raises(TypeMismatchError) as exc:
            required_str({"owner": value}, "owner")
        assert exc.value.parameter == "owner"
        assert exc.value.expected == "string"

    def test_whitespace_is_kept(self):
        assert required_str({"q": "  "}, "q") == "  "


class TestRequiredInt:

    def test_whole_number(self):
        assert required_int({"n": 5.0}, "n") == 5

    def test_truncates(self):
        assert required_int({"n": 5.9}, "n") == 5

    def test_truncates_toward_zero(self):
        assert required_int({"n": -2.7}, "n") == -2

    def test_python_int(self):
        assert required_int({"n": 42}, "n") == 42

    def test_zero_is_missing(self):
        with pytest.raises(MissingParameterError):
            required_int({"n": 0}, "n")
        with pytest.raises(MissingParameterError):
            required_int({"n": 0.0}, "n")

    def test_fraction_below_one_truncates_to_zero(self):
        assert required_int({"n": 0.5}, "n") == 0

    def test_absent(self):
        with pytest.raises(MissingParameterError):
            required_int({}, "n")

    def test_string_number_rejected(self):
        with pytest.raises(TypeMismatchError, match="is not of type number, is string"):
            required_int({"n": "5"}, "n")

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan, 10**400, -(10**400)])
    def test_non_finite_or_out_of_range(self, value):
        with pytest.raises(TypeMismatchError):
            required_int({"n": value}, "n")


class TestRequiredBool:

    def test_true(self):
        assert required_bool({"flag": True}, "flag") is True

    def test_explicit_false_accepted(self):
        assert required_bool({"flag": False}, "flag") is False

    def test_absent(self):
        with pytest.raises(MissingParameterError):
            required_bool({}, "flag")

    def test_wrong_type(self):
        with pytest.raises(TypeMismatchError):
            required_bool({"flag": "true"}, "flag")


class TestOptionalScalars:

    def test_str_absent_is_empty(self):
        assert optional_str({}, "body") == ""

    def test_str_empty_is_not_missing(self):
        assert optional_str({"body": ""}, "body") == ""

    def test_str_wrong_type(self):
        with pytest.raises(TypeMismatchError):
            optional_str({"body": 3}, "body")

    def test_int_absent_is_zero(self):
        assert optional_int({}, "page") == 0

    def test_int_truncates(self):
        assert optional_int({"page": 3.99}, "page") == 3

    def test_int_wrong_type(self):
        with pytest.raises(TypeMismatchError):
            optional_int({"page": "3"}, "page")

    @pytest.mark.parametrize("value", [10**400, -(10**400)])
    def test_int_out_of_range(self, value):
        with pytest.raises(TypeMismatchError, match="is not of type number"):
            optional_int({"page": value}, "page")

    def test_int_with_default_out_of_range(self):
        with pytest.raises(TypeMismatchError):
            optional_int_with_default({"page": 10**400}, "page", 1)

    def test_bool_absent_is_false(self):
        assert optional_bool({}, "draft") is False

    def test_bool_wrong_type(self):
        with pytest.raises(TypeMismatchError):
            optional_bool({"draft": 1}, "draft")


class TestOptionalIntWithDefault:

    def test_absent_uses_default(self):
        assert optional_int_with_default({}, "x", 10) == 10

    def test_explicit_zero_uses_default(self):
        # 0 and "not given" are the same thing here
        assert optional_int_with_default({"x": 0}, "x", 10) == 10

    def test_value_wins(self):
        assert optional_int_with_default({"x": 7}, "x", 10) == 7

    def test_wrong_type_still_fails(self):
        with pytest.raises(TypeMismatchError):
            optional_int_with_default({"x": "7"}, "x", 10)


class TestOptionalStringArray:

    def test_strings(self):
        assert optional_string_array({"labels": ["a", "b"]}, "labels") == ["a", "b"]

    def test_absent(self):
        assert optional_string_array({}, "labels") == []

    def test_empty(self):
        assert optional_string_array({"labels": []}, "labels") == []

    def test_mixed_fails_whole_call(self):
        with pytest.raises(TypeMismatchError) as exc:
            optional_string_array({"labels": [1, "b"]}, "labels")
        assert exc.value.parameter == "labels[0]"

    def test_names_offending_element(self):
        with pytest.raises(TypeMismatchError, match=r"labels\[2\]"):
            optional_string_array({"labels": ["a", "b", None]}, "labels")

    def test_not_an_array(self):
        with pytest.raises(TypeMismatchError):
            optional_string_array({"labels": "bug"}, "labels")

    def test_tuple_accepted(self):
        assert optional_string_array({"labels": ("a",)}, "labels") == ["a"]


class TestObjectArrays:

    def test_optional_absent(self):
        assert optional_object_array({}, "files") == []

    def test_optional_objects(self):
        files = [{"path": "a", "content": "b"}]
        assert optional_object_array({"files": files}, "files") == files

    def test_optional_rejects_scalars(self):
        with pytest.raises(TypeMismatchError, match=r"files\[1\]"):
            optional_object_array({"files": [{"path": "a"}, "b"]}, "files")

    def test_required_empty_is_missing(self):
        with pytest.raises(MissingParameterError):
            required_object_array({"files": []}, "files")
