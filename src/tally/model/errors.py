"""
Structured error values returned by the budget engine.

The engine never raises for bad records it is handed; it reports them as
CoreError values alongside the results so the caller decides how to surface
them (exit code, message, HTTP status).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CoreError:
    """A problem with one input record."""

    kind: ErrorKind
    message: str
    subject_id: int | None = None  # id of the offending record, when known

    @property
    def is_not_found(self) -> bool:
        return self.kind == ErrorKind.NOT_FOUND

    @property
    def is_validation(self) -> bool:
        return self.kind == ErrorKind.VALIDATION

    @classmethod
    def validation(cls, message: str, subject_id: int | None = None) -> CoreError:
        return cls(kind=ErrorKind.VALIDATION, message=message, subject_id=subject_id)

    @classmethod
    def not_found(cls, message: str, subject_id: int | None = None) -> CoreError:
        return cls(kind=ErrorKind.NOT_FOUND, message=message, subject_id=subject_id)


class InvalidPeriodError(ValueError):
    """Raised when a reference month/year cannot describe a calendar month."""


__all__ = ["CoreError", "ErrorKind", "InvalidPeriodError"]
