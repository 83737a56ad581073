"""Field rules applied by the store before a record is accepted."""

from __future__ import annotations

from .errors import ValidationError
from .schemas import Student

MIN_AGE = 1
MAX_AGE = 149


def _text_problem(value: str) -> str | None:
    if not value.strip():
        return "must not be empty"
    if "\n" in value or "\r" in value:
        return "must be a single line"
    return None


def check_name(value: str) -> str | None:
    return _text_problem(value)


def check_grade(value: str) -> str | None:
    return _text_problem(value)


def check_age(value: int) -> str | None:
    if not MIN_AGE <= value <= MAX_AGE:
        return f"must be between {MIN_AGE} and {MAX_AGE}"
    return None


def check_email(value: str) -> str | None:
    problem = _text_problem(value)
    if problem:
        return problem
    # Only the presence of "@" is checked.
    if "@" not in value:
        return "must contain '@'"
    return None


_CHECKS = {
    "name": check_name,
    "age": check_age,
    "grade": check_grade,
    "email": check_email,
}


def field_problems(**values: object) -> dict[str, str]:
    """Check each given field against its rule.

    Returns:
        Mapping of field name to problem description; empty when all pass.
    """
    problems: dict[str, str] = {}
    for field, value in values.items():
        check = _CHECKS.get(field)
        if check is None:
            raise KeyError(f"No rule for field: {field}")
        problem = check(value)
        if problem:
            problems[field] = problem
    return problems


def validate_student(student: Student) -> None:
    """Raise ValidationError if any mutable field of *student* breaks its rule."""
    problems = field_problems(
        name=student.name,
        age=student.age,
        grade=student.grade,
        email=student.email,
    )
    if problems:
        raise ValidationError(problems)
