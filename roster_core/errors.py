"""Exception hierarchy for roster."""

from __future__ import annotations

from collections.abc import Mapping


class RosterError(Exception):
    """Root exception for all roster errors."""


class FormatError(RosterError):
    """A persisted line could not be parsed into a Student."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class DuplicateIdError(RosterError):
    def __init__(self, student_id: int) -> None:
        super().__init__(f"Student ID {student_id} already exists")
        self.student_id = student_id


class NotFoundError(RosterError):
    def __init__(self, student_id: int) -> None:
        super().__init__(f"Student with ID {student_id} not found")
        self.student_id = student_id


class StorageIOError(RosterError):
    """Reading or writing the data file failed."""


class ValidationError(RosterError):
    """One or more field values are out of their allowed range or shape."""

    def __init__(self, problems: Mapping[str, str]) -> None:
        self.problems = dict(problems)
        detail = "; ".join(f"{field}: {reason}" for field, reason in self.problems.items())
        super().__init__(f"Invalid student data ({detail})")
