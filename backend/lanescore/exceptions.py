from typing import List, Optional


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        title: str,
        *,
        code: str,
        detail: str | None = None,
    ) -> None:
        super().__init__(detail or title)
        self.title = title
        self.detail = detail
        self.code = code


class InvalidPattern(DomainException):
    def __init__(self, reason: str) -> None:
        super().__init__(
            title="Invalid recurring pattern",
            detail=reason,
            code="invalid_pattern",
        )


class OccurrenceNotFound(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            title="Occurrence not found",
            detail=detail,
            code="occurrence_not_found",
        )


class GameIncomplete(DomainException):
    def __init__(self, errors: Optional[List[str]] = None) -> None:
        self.errors = list(errors or [])
        super().__init__(
            title="Game incomplete",
            detail="; ".join(self.errors) or "all frames must be entered",
            code="game_incomplete",
        )
