from __future__ import annotations

import csv
import io
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .errors import FormatError

FIELD_NAMES = ("id", "name", "age", "grade", "email")
HEADER = ",".join(FIELD_NAMES)

TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


def _parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise FormatError(f"{field} must be an integer, got {value!r}") from None


class Student(BaseSchema):
    """A single student record.

    Only field types are enforced here. Range and shape rules (age, email,
    non-empty text) are applied by the store, see ``roster_core.validation``.
    """

    id: int = Field(frozen=True)
    name: str
    age: int
    grade: str
    email: str

    def serialize(self) -> str:
        """Render the record as one comma-delimited line without terminator.

        Values free of commas and quotes come out verbatim, so files written
        here stay readable by older plain comma-split readers.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([self.id, self.name, self.age, self.grade, self.email])
        return buffer.getvalue()[:-1]

    @classmethod
    def deserialize(cls, line: str) -> Student:
        """Parse a line produced by :meth:`serialize` (or the legacy format).

        Raises:
            FormatError: If the line does not hold exactly five fields or
                id/age are not integers.
        """
        text = line.rstrip("\r\n")
        try:
            rows = list(csv.reader([text], strict=True))
            parts = rows[0] if rows else []
            error = f"expected {len(FIELD_NAMES)} fields, got {len(parts)}"
        except csv.Error as e:
            parts = []
            error = f"unreadable record: {e}"
        if len(parts) != len(FIELD_NAMES):
            # Legacy lines are plain comma splits and may hold stray quotes.
            parts = text.split(",")
            if len(parts) != len(FIELD_NAMES):
                raise FormatError(error)
        return cls(
            id=_parse_int(parts[0], "id"),
            name=parts[1],
            age=_parse_int(parts[2], "age"),
            grade=parts[3],
            email=parts[4],
        )

    def display(self) -> str:
        return (
            f"ID: {self.id} | Name: {self.name} | Age: {self.age} | "
            f"Grade: {self.grade} | Email: {self.email}"
        )

    def __str__(self) -> str:
        return self.display()


class StudentUpdate(BaseSchema):
    """Partial update payload; ``None`` means "keep the current value"."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    age: int | None = None
    grade: str | None = None
    email: str | None = None

    def supplied(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)
