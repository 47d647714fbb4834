from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

FRAMES_PER_GAME = 10
PINS = 10


class _CamelModel(BaseModel):
    """Accept both camelCase (document store / form) and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Frame(_CamelModel):
    """One of the ten frames of a game.

    Throws are strict integers with no range check: ``None`` means "not yet
    thrown", ``True`` or ``"3"`` are refused rather than coerced, and
    legality is reported by ``scoring.bowling.validate_frame``.
    The derived fields are recomputed by ``scoring.bowling.score_frames``.
    """

    frame_number: StrictInt = Field(..., ge=1, le=FRAMES_PER_GAME)
    first_throw: Optional[StrictInt] = None
    second_throw: Optional[StrictInt] = None
    third_throw: Optional[StrictInt] = None
    is_strike: bool = False
    is_spare: bool = False
    frame_score: int = 0
    cumulative_score: int = 0

    @property
    def throws(self) -> tuple:
        return (self.first_throw, self.second_throw, self.third_throw)

    @property
    def is_last(self) -> bool:
        return self.frame_number == FRAMES_PER_GAME


class RecurringPattern(_CamelModel):
    """Weekly or monthly repeating schedule, e.g. "3rd Wednesday, 19:00".

    Field values are not range-checked on construction; run
    ``services.recurrence.validate_pattern`` before relying on one.
    """

    frequency: str
    day_of_week: int
    week_of_month: Optional[int] = None
    time: str

    @field_validator("frequency", mode="before")
    @classmethod
    def _validate_frequency(cls, value: str) -> str:
        if not isinstance(value, str):
            raise ValueError("frequency must be a string")
        return value


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    error: Optional[str] = None


class GameSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_score: int
    is_complete: bool
    is_perfect: bool
    errors: List[str] = Field(default_factory=list)
