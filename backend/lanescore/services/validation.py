from typing import Any

from ..schemas import ValidationResult


class ValidationError(ValueError):
    """Raised when a submitted throw or pattern is not acceptable."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


VALID = ValidationResult(valid=True)


def ok() -> ValidationResult:
    return VALID


def fail(reason: str) -> ValidationResult:
    return ValidationResult(valid=False, error=reason)


def require_valid(result: ValidationResult) -> None:
    """Raise ``ValidationError`` carrying the reason of a failed result."""

    if not result.valid:
        raise ValidationError(result.error or "invalid value")


def is_integer(value: Any) -> bool:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    return isinstance(value, int) and not isinstance(value, bool)


def in_range(value: Any, low: int, high: int) -> bool:
    return is_integer(value) and low <= value <= high
