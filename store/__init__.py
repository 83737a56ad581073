"""
Store Module

Student storage and persistence layer.

This module provides:
- Plain text table persistence (header + one comma-delimited line per record)
- In-memory ordered collection rewritten to disk after every change
- Lookup by id and case-insensitive name search
- Validated add, partial update and delete
"""

__version__ = "0.1.0"
