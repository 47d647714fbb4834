import pytest

from lanescore.schemas import ValidationResult
from lanescore.services.validation import (
    ValidationError,
    fail,
    in_range,
    is_integer,
    ok,
    require_valid,
)


def test_ok_and_fail_results():
    assert ok() == ValidationResult(valid=True)
    assert ok().error is None
    result = fail("First throw is required")
    assert result.valid is False
    assert result.error == "First throw is required"


def test_require_valid_passes_through_valid_result():
    require_valid(ok())


def test_require_valid_raises_reason():
    with pytest.raises(ValidationError, match="Week of month") as exc:
        require_valid(fail("Week of month is required for monthly patterns"))
    assert exc.value.detail == "Week of month is required for monthly patterns"
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize(
    "value, expected",
    [(0, True), (10, True), (-3, True), (True, False), (False, False), (1.0, False), ("1", False), (None, False)],
    ids=["zero", "ten", "negative", "true", "false", "float", "string", "none"],
)
def test_is_integer_rejects_booleans_and_other_types(value, expected):
    assert is_integer(value) is expected


def test_in_range_bounds_are_inclusive():
    assert in_range(0, 0, 6)
    assert in_range(6, 0, 6)
    assert not in_range(7, 0, 6)
    assert not in_range(-1, 0, 6)
