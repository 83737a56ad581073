"""
Console Module

Configuration and command-line interface.

This module provides:
- YAML-based configuration loading
- One-shot commands for adding, listing, searching, updating and deleting students
- Interactive menu loop
"""

__version__ = "0.1.0"
