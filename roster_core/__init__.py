"""
Roster Core Module

Student record model, field rules and error taxonomy.

This module provides:
- Pydantic-backed Student record with one-line text serialization
- Partial update payload (StudentUpdate)
- Field validation rules (age range, non-empty text, email shape)
- Exception hierarchy shared by the store and the console
"""

__version__ = "0.1.0"

from .errors import (
    DuplicateIdError,
    FormatError,
    NotFoundError,
    RosterError,
    StorageIOError,
    ValidationError,
)
from .schemas import FIELD_NAMES, HEADER, Student, StudentUpdate

__all__ = [
    "DuplicateIdError",
    "FIELD_NAMES",
    "FormatError",
    "HEADER",
    "NotFoundError",
    "RosterError",
    "StorageIOError",
    "Student",
    "StudentUpdate",
    "ValidationError",
]
