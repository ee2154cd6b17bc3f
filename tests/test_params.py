"""
Unit tests for argument extraction and pagination.
"""

import math

import pytest

from github_mcp import base
from github_mcp.errors import (
    MissingParameterError,
    OutOfRangeError,
    SanitizeError,
    UpstreamError,
    ValidationError,
    WrongTypeError,
)
from github_mcp.params import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    Kind,
    Pagination,
    Supplied,
    build_patch,
    is_present,
    lookup,
    optional_value,
    required_value,
    resolve_pagination,
)


class TestRequiredValue:
    """Test required argument extraction."""

    def test_returns_string(self):
        assert required_value({"owner": "o"}, "owner", Kind.STRING) == "o"

    def test_empty_string_is_a_value(self):
        assert required_value({"body": ""}, "body", Kind.STRING) == ""

    @pytest.mark.parametrize("args", [{}, {"owner": None}])
    def test_missing_or_null(self, args):
        with pytest.raises(MissingParameterError) as exc:
            required_value(args, "owner", Kind.STRING)
        assert exc.value.message == "missing required parameter: owner"
        assert exc.value.code == "missing_parameter"

    def test_number_where_string_declared(self):
        with pytest.raises(WrongTypeError) as exc:
            required_value({"owner": 42}, "owner", Kind.STRING)
        assert "owner" in exc.value.message
        assert "string" in exc.value.message

    def test_numeric_string_is_not_a_number(self):
        with pytest.raises(WrongTypeError):
            required_value({"release_id": "123"}, "release_id", Kind.INTEGER)

    def test_integral_float_narrows_to_int(self):
        value = required_value({"owner": "o", "repo": "r", "release_id": 123.0}, "release_id", Kind.INTEGER)
        assert value == 123
        assert isinstance(value, int)

    def test_non_integral_float_is_rejected(self):
        with pytest.raises(WrongTypeError):
            required_value({"release_id": 123.5}, "release_id", Kind.INTEGER)

    @pytest.mark.parametrize("value", [math.inf, math.nan])
    def test_non_finite_is_not_an_integer(self, value):
        with pytest.raises(WrongTypeError):
            required_value({"release_id": value}, "release_id", Kind.INTEGER)

    def test_bool_is_not_a_number(self):
        with pytest.raises(WrongTypeError):
            required_value({"release_id": True}, "release_id", Kind.INTEGER)
        with pytest.raises(WrongTypeError):
            required_value({"score": False}, "score", Kind.NUMBER)

    def test_number_kind_is_float(self):
        assert required_value({"score": 3}, "score", Kind.NUMBER) == 3.0
        assert isinstance(required_value({"score": 3}, "score", Kind.NUMBER), float)

    def test_boolean(self):
        assert required_value({"draft": False}, "draft", Kind.BOOLEAN) is False
        with pytest.raises(WrongTypeError):
            required_value({"draft": "false"}, "draft", Kind.BOOLEAN)

    def test_array_of_strings(self):
        assert required_value({"labels": ["a", "b"]}, "labels", Kind.ARRAY, Kind.STRING) == ["a", "b"]
        with pytest.raises(WrongTypeError) as exc:
            required_value({"labels": ["a", 1]}, "labels", Kind.ARRAY, Kind.STRING)
        assert "labels[1]" in exc.value.message

    def test_object(self):
        assert required_value({"meta": {"a": 1}}, "meta", Kind.OBJECT) == {"a": 1}
        with pytest.raises(WrongTypeError):
            required_value({"meta": [1]}, "meta", Kind.OBJECT)


class TestOptionalValue:
    """Test optional argument extraction."""

    @pytest.mark.parametrize(
        "kind,zero",
        [
            (Kind.STRING, ""),
            (Kind.INTEGER, 0),
            (Kind.NUMBER, 0.0),
            (Kind.BOOLEAN, False),
            (Kind.ARRAY, []),
            (Kind.OBJECT, {}),
        ],
    )
    def test_zero_value_when_absent(self, kind, zero):
        assert optional_value({}, "x", kind) == zero

    def test_explicit_default(self):
        assert optional_value({}, "page", Kind.INTEGER, 1) == 1

    def test_null_counts_as_absent(self):
        assert optional_value({"sort": None}, "sort", Kind.STRING) == ""

    def test_present_value_is_returned(self):
        assert optional_value({"sort": "indexed"}, "sort", Kind.STRING) == "indexed"

    def test_wrong_type_still_fails(self):
        with pytest.raises(WrongTypeError):
            optional_value({"draft": "yes"}, "draft", Kind.BOOLEAN)

    def test_input_is_not_mutated(self):
        args = {"labels": ["a"]}
        value = optional_value(args, "labels", Kind.ARRAY)
        value.append("b")
        assert args == {"labels": ["a"]}


class TestPresence:
    """Test supplied-vs-zero tracking used by partial updates."""

    def test_is_present(self):
        assert is_present({"draft": False}, "draft")
        assert is_present({"name": ""}, "name")
        assert not is_present({"draft": None}, "draft")
        assert not is_present({}, "draft")

    def test_lookup(self):
        assert lookup({}, "draft", Kind.BOOLEAN) == Supplied(present=False)
        assert lookup({"draft": False}, "draft", Kind.BOOLEAN) == Supplied(present=True, value=False)

    def test_build_patch_keeps_only_supplied_fields(self):
        fields = {"name": Kind.STRING, "body": Kind.STRING, "draft": Kind.BOOLEAN, "prerelease": Kind.BOOLEAN}
        patch = build_patch({"name": "", "draft": False, "prerelease": None}, fields)
        assert patch == {"name": "", "draft": False}

    def test_build_patch_validates_kinds(self):
        with pytest.raises(WrongTypeError):
            build_patch({"draft": "false"}, {"draft": Kind.BOOLEAN})


class TestPagination:
    """Test page/perPage resolution."""

    def test_defaults(self):
        assert resolve_pagination({}) == Pagination(page=1, per_page=DEFAULT_PER_PAGE)
        assert resolve_pagination({}) == Pagination(page=1, per_page=30)

    def test_explicit_values(self):
        assert resolve_pagination({"page": 3, "perPage": 50.0}) == Pagination(page=3, per_page=50)

    def test_as_query(self):
        assert Pagination(page=2, per_page=10).as_query() == {"page": 2, "per_page": 10}

    @pytest.mark.parametrize("page", [0, -1])
    def test_non_positive_page(self, page):
        with pytest.raises(OutOfRangeError) as exc:
            resolve_pagination({"page": page})
        assert "page" in exc.value.message

    def test_per_page_above_max(self):
        with pytest.raises(OutOfRangeError) as exc:
            resolve_pagination({"page": 2, "perPage": 150})
        assert exc.value.details["parameter"] == "perPage"

    def test_per_page_bounds(self):
        assert resolve_pagination({"perPage": MAX_PER_PAGE}).per_page == MAX_PER_PAGE
        with pytest.raises(OutOfRangeError):
            resolve_pagination({"perPage": 0})

    def test_non_integral_page(self):
        with pytest.raises(WrongTypeError):
            resolve_pagination({"page": 1.5})

    def test_string_page(self):
        with pytest.raises(WrongTypeError):
            resolve_pagination({"page": "2"})


class TestErrors:
    """Error classes live in one module and carry stable codes."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (MissingParameterError("owner"), "missing_parameter"),
            (WrongTypeError("page", "integer", "string"), "wrong_type"),
            (OutOfRangeError("perPage", "must be between 1 and 100, got 0"), "out_of_range"),
        ],
    )
    def test_validation_codes(self, error, code):
        assert isinstance(error, ValidationError)
        assert error.code == code
        assert error.details["parameter"] in error.message

    def test_base_does_not_re_export_errors(self):
        assert not hasattr(base, "MissingParameterError")
        assert not hasattr(base, "SanitizeError")
        assert not hasattr(base, "__all__")

    def test_upstream_error_keeps_status(self):
        error = UpstreamError("failed to get release: boom", status_code=502, body="boom")
        assert error.details == {"status_code": 502}
        assert not isinstance(error, SanitizeError)
