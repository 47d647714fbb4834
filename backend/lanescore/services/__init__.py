"""Internal application services (pure helpers, no I/O)."""

from .validation import ValidationError, require_valid
from .recurrence import (
    compute_next_occurrence,
    format_pattern,
    get_date_in_month,
    iter_occurrences,
    validate_pattern,
)

__all__ = [
    "ValidationError",
    "require_valid",
    "validate_pattern",
    "compute_next_occurrence",
    "iter_occurrences",
    "format_pattern",
    "get_date_in_month",
]
