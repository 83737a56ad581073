#!/usr/bin/env python3
"""
Student record manager launcher (cross-platform)

Usage:
  python run.py                          # interactive menu on ./students.csv
  python run.py --data class_a.csv       # use another data file
  python run.py --config roster.yaml     # load settings from YAML
  python run.py list                     # any roster subcommand
  python run.py --help                   # show help
"""

from console.cli import app


if __name__ == "__main__":
    app(prog_name="roster")
