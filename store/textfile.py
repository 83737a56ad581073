"""
Plain text table utilities for the store module.

The table is a header line followed by one record per line. Nothing here
knows about Student; the repository converts lines to records.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from roster_core.schemas import HEADER


def read_record_lines(path: str | Path) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` for every non-blank line after the header.

    The first line is discarded whatever it contains. Line numbers are
    1-based and count the header.

    Raises:
        FileNotFoundError: If the table does not exist.
        OSError, UnicodeDecodeError: On any other read failure.
    """
    records: list[tuple[int, str]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if line_number == 1:
                continue
            text = line.rstrip("\n")
            if text.strip():
                records.append((line_number, text))
    return records


def write_table(path: str | Path, lines: Iterable[str]) -> None:
    """Overwrite *path* with the header followed by *lines*."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(HEADER + "\n")
        for line in lines:
            f.write(line + "\n")
