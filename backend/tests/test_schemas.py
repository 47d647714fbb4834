import pydantic
import pytest

from lanescore.schemas import Frame, RecurringPattern, ValidationResult


def test_frame_accepts_camel_and_snake_case():
    camel = Frame.model_validate({"frameNumber": 3, "firstThrow": 7, "secondThrow": 3})
    snake = Frame(frame_number=3, first_throw=7, second_throw=3)
    assert camel == snake
    assert camel.throws == (7, 3, None)
    assert not camel.is_last


def test_frame_dumps_camel_case_for_storage():
    frame = Frame(frame_number=10, first_throw=10, second_throw=10, third_throw=10)
    data = frame.model_dump(by_alias=True)
    assert data["frameNumber"] == 10
    assert data["thirdThrow"] == 10
    assert data["cumulativeScore"] == 0
    assert frame.is_last


def test_frame_keeps_unset_distinct_from_zero():
    frame = Frame(frame_number=1, first_throw=0)
    assert frame.first_throw == 0
    assert frame.second_throw is None


def test_frame_is_immutable():
    frame = Frame(frame_number=1)
    with pytest.raises(pydantic.ValidationError):
        frame.first_throw = 5


@pytest.mark.parametrize("number", [0, 11])
def test_frame_number_range(number):
    with pytest.raises(pydantic.ValidationError):
        Frame(frame_number=number)


def test_frame_does_not_range_check_throws():
    # Legality is reported by validate_frame, not by the model.
    assert Frame(frame_number=1, first_throw=12).first_throw == 12


@pytest.mark.parametrize(
    "data",
    [
        {"frameNumber": 1, "firstThrow": True},
        {"frameNumber": 1, "firstThrow": "3"},
        {"frameNumber": "1"},
        {"frameNumber": True},
    ],
    ids=["bool-throw", "string-throw", "string-number", "bool-number"],
)
def test_frame_fields_are_strict_integers(data):
    with pytest.raises(pydantic.ValidationError):
        Frame.model_validate(data)


def test_recurring_pattern_aliases():
    pattern = RecurringPattern.model_validate(
        {"frequency": "monthly", "dayOfWeek": 3, "weekOfMonth": 3, "time": "19:00"}
    )
    assert pattern.day_of_week == 3
    assert pattern.week_of_month == 3
    assert pattern.model_dump(by_alias=True)["weekOfMonth"] == 3


def test_recurring_pattern_frequency_must_be_text():
    with pytest.raises(pydantic.ValidationError):
        RecurringPattern(frequency=1, day_of_week=3, time="19:00")


def test_validation_result_defaults():
    assert ValidationResult(valid=True).error is None
