"""
Text-file-backed student repository.

The whole table is held in memory in insertion order and rewritten after
every mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypeAlias

from pydantic import ValidationError as PydanticValidationError

from roster_core.errors import (
    DuplicateIdError,
    FormatError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from roster_core.schemas import Student, StudentUpdate
from roster_core.validation import field_problems, validate_student

from .textfile import read_record_lines, write_table

logger = logging.getLogger(__name__)

UpdateInput: TypeAlias = StudentUpdate | Mapping[str, object]


class LoadStatus(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    FAILED = "failed"


@dataclass
class LoadResult:
    status: LoadStatus
    loaded: int = 0
    skipped: int = 0
    error: str | None = None


@dataclass
class UpdateResult:
    student: Student
    applied: list[str] = field(default_factory=list)
    rejected: dict[str, str] = field(default_factory=dict)


def _coerce_update(changes: UpdateInput) -> StudentUpdate:
    if isinstance(changes, StudentUpdate):
        return changes
    try:
        return StudentUpdate.from_dict(changes)
    except PydanticValidationError as e:
        problems = {
            ".".join(str(part) for part in error["loc"]) or "update": error["msg"]
            for error in e.errors()
        }
        raise ValidationError(problems) from e


class StudentStore:
    """In-memory ordered student collection persisted to a text table.

    Records handed out by read methods are copies; changing them has no
    effect on the store. Every mutating call saves before returning.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        autoload: bool = True,
        skip_malformed: bool = False,
    ) -> None:
        self.path: Path = Path(path)
        self.skip_malformed: bool = skip_malformed
        self._students: list[Student] = []
        self.last_load: LoadResult | None = None
        if autoload:
            self.load()

    def __len__(self) -> int:
        return len(self._students)

    def _find(self, student_id: int) -> Student | None:
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    # -- persistence -------------------------------------------------------

    def load(self) -> LoadResult:
        """Replace the in-memory collection with the contents of the table.

        A missing file or an unreadable one leaves the store empty and is
        reported through the returned LoadResult rather than raised.

        Raises:
            FormatError: On a malformed or duplicate-id line, unless
                ``skip_malformed`` is set. The store is left empty.
        """
        self._students = []
        try:
            lines = read_record_lines(self.path)
        except FileNotFoundError:
            logger.info(f"No existing data file at {self.path}, starting fresh")
            self.last_load = LoadResult(status=LoadStatus.MISSING)
            return self.last_load
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading from {self.path}: {e}")
            self.last_load = LoadResult(status=LoadStatus.FAILED, error=str(e))
            return self.last_load

        students: list[Student] = []
        seen: set[int] = set()
        skipped = 0
        for line_number, text in lines:
            try:
                student = Student.deserialize(text)
                if student.id in seen:
                    raise FormatError(f"duplicate id {student.id}")
            except FormatError as e:
                if not self.skip_malformed:
                    self.last_load = LoadResult(status=LoadStatus.FAILED, error=str(e))
                    raise FormatError(str(e), line_number=line_number) from e
                logger.warning(f"Skipping line {line_number} of {self.path}: {e}")
                skipped += 1
                continue
            seen.add(student.id)
            students.append(student)

        self._students = students
        logger.info(f"Loaded {len(students)} students from {self.path}")
        self.last_load = LoadResult(status=LoadStatus.LOADED, loaded=len(students), skipped=skipped)
        return self.last_load

    def save(self) -> None:
        """Rewrite the table from the in-memory collection.

        Raises:
            StorageIOError: If the file cannot be written. In-memory state is
                kept as is.
        """
        try:
            write_table(self.path, (student.serialize() for student in self._students))
        except OSError as e:
            logger.error(f"Error saving to {self.path}: {e}")
            raise StorageIOError(f"Could not save to {self.path}: {e}") from e
        logger.debug(f"Saved {len(self._students)} students to {self.path}")

    # -- queries -----------------------------------------------------------

    def exists(self, student_id: int) -> bool:
        return self._find(student_id) is not None

    def find_by_id(self, student_id: int) -> Student | None:
        student = self._find(student_id)
        return student.model_copy() if student is not None else None

    def get(self, student_id: int) -> Student:
        student = self.find_by_id(student_id)
        if student is None:
            raise NotFoundError(student_id)
        return student

    def find_by_name(self, text: str) -> list[Student]:
        """Case-insensitive substring search on name, in store order."""
        needle = text.casefold()
        return [
            student.model_copy()
            for student in self._students
            if needle in student.name.casefold()
        ]

    def all(self) -> list[Student]:
        return [student.model_copy() for student in self._students]

    def count(self) -> int:
        return len(self._students)

    # -- mutations ---------------------------------------------------------

    def add(self, student: Student) -> Student:
        """Append *student* and save.

        Raises:
            DuplicateIdError: If the id is already taken.
            ValidationError: If a field breaks its rule.
            StorageIOError: If saving fails (the record stays in memory).
        """
        if self.exists(student.id):
            raise DuplicateIdError(student.id)
        validate_student(student)
        stored = student.model_copy()
        self._students.append(stored)
        logger.info(f"Added student {stored.id}")
        self.save()
        return stored.model_copy()

    def update(self, student_id: int, changes: UpdateInput) -> UpdateResult:
        """Apply the supplied fields of *changes* to a student and save.

        A supplied value that breaks its rule is skipped and reported in
        ``UpdateResult.rejected``; the remaining fields are still applied.

        Raises:
            NotFoundError: If no student has *student_id*.
            ValidationError: If *changes* has wrong types or unknown keys.
        """
        student = self._find(student_id)
        if student is None:
            raise NotFoundError(student_id)
        update = _coerce_update(changes)

        result = UpdateResult(student=student)
        for name, value in update.supplied().items():
            problems = field_problems(**{name: value})
            if problems:
                logger.warning(
                    f"Rejected {name}={value!r} for student {student_id}: {problems[name]}"
                )
                result.rejected[name] = problems[name]
                continue
            setattr(student, name, value)
            result.applied.append(name)

        logger.info(f"Updated student {student_id}: {', '.join(result.applied) or 'no changes'}")
        self.save()
        result.student = student.model_copy()
        return result

    def delete(self, student_id: int) -> bool:
        """Remove a student and save; returns False if the id is absent."""
        student = self._find(student_id)
        if student is None:
            return False
        self._students.remove(student)
        logger.info(f"Deleted student {student_id}")
        self.save()
        return True
