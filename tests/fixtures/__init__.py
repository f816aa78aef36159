"""
Test fixtures package for employee notes tests.

This package provides factory functions for creating test objects:
- common.py: Dataset models, wire documents and archive builders

Usage:
    from tests.fixtures import make_employee, make_archive

    def test_something():
        archive = make_archive(documents={"a.pdf": b"data"})
"""

from .common import (
    make_document,
    make_note,
    make_employee,
    make_database,
    make_raw_employee,
    make_raw_document,
    make_manifest,
    make_archive,
    make_archive_with_documents,
)

__all__ = [
    "make_document",
    "make_note",
    "make_employee",
    "make_database",
    "make_raw_employee",
    "make_raw_document",
    "make_manifest",
    "make_archive",
    "make_archive_with_documents",
]
