"""Unit tests for the wingstl exception hierarchy."""

import pytest

from wingstl.exceptions import (
    GeometryValidationError,
    InputFormatError,
    InternalInvariantError,
    ResourceError,
    WingstlError,
    validate_positive,
    validate_range,
)


@pytest.mark.parametrize(
    "error_cls",
    [InputFormatError, GeometryValidationError, ResourceError, InternalInvariantError],
)
def test_errors_share_base(error_cls):
    error = error_cls("failed")
    assert isinstance(error, WingstlError)
    assert error.details == {}
    assert str(error) == "failed"


def test_details_are_rendered():
    error = WingstlError("Bad value", details={"flag": "-b", "value": -1})
    assert str(error) == "Bad value (flag=-b, value=-1)"
    assert error.message == "Bad value"


class TestValidatePositive:
    """Test positivity checks on command-line values."""

    def test_positive_value(self):
        assert validate_positive(2.5, "semi span") == 2.5

    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_non_positive_value(self, value):
        with pytest.raises(InputFormatError, match="nonzero positive") as exc_info:
            validate_positive(value, "semi span", "-b")
        assert exc_info.value.details["flag"] == "-b"

    def test_flag_is_optional(self):
        with pytest.raises(InputFormatError) as exc_info:
            validate_positive(0, "root chord")
        assert "flag" not in exc_info.value.details


class TestValidateRange:
    """Test closed range checks."""

    def test_bounds_are_inclusive(self):
        assert validate_range(20, 20, 200, "chord points") == 20
        assert validate_range(200, 20, 200, "chord points") == 200

    def test_outside_range(self):
        with pytest.raises(InputFormatError) as exc_info:
            validate_range(201, 20, 200, "chord points", "-p")
        assert exc_info.value.details == {
            "value": 201,
            "min": 20,
            "max": 200,
            "parameter": "chord points",
            "flag": "-p",
        }
