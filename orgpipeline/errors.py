"""Exceptions raised while loading and validating organization data."""

from typing import Any


class OrgDataError(Exception):
    """Base exception for employee data that cannot be analyzed."""

    message: str = "Invalid employee data"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)


class InputShapeError(OrgDataError):
    """The record set itself is unusable: empty, duplicated ids, unreadable source."""

    message = "Malformed employee input"


class RecordFormatError(InputShapeError):
    """One or more rows of an employee export failed to parse."""

    message = "Invalid employee record"


class StructuralError(OrgDataError):
    """The reporting relationships do not form a single tree."""

    message = "Invalid reporting structure"
