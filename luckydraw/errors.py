"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Unknown round, prize or other resource id."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Malformed or missing request fields."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class StateConflictError(AppError):
    """Operation not allowed in the current draw/session state."""

    def __init__(self, message: str = "State conflict", details: Any | None = None) -> None:
        super().__init__(code="state_conflict", message=message, status_code=400, details=details)


class PersistenceError(AppError):
    """A data file could not be read or written."""

    def __init__(self, message: str = "Persistence error", details: Any | None = None) -> None:
        super().__init__(code="persistence_error", message=message, status_code=500, details=details)
