"""
Employee Notes CLI

Command-line interface for exporting and importing the employee dataset
without running the HTTP server.

Usage:
    python -m notes_cli export --format zip --out backup.zip
    python -m notes_cli import backup.zip
    python -m notes_cli config --init
"""

__version__ = "2.0.0"
