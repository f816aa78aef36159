"""
Archive Import/Export
File: manifest.py

Purpose: Manifest and entry layout of an employee notes archive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.schemas.employee import utc_timestamp

ARCHIVE_FORMAT = "employee-notes-archive"
ARCHIVE_VERSION = "2.0"

DATASET_ENTRY = "employee-data.json"
MANIFEST_ENTRY = "manifest.json"
DOCUMENTS_PREFIX = "documents/"


def document_entry_name(filename: str) -> str:
    """Archive entry name for a stored attachment filename."""
    return f"{DOCUMENTS_PREFIX}{filename}"


@dataclass
class ArchiveManifest:
    """Metadata entry identifying an archive and summarising its contents."""
    format: str = ARCHIVE_FORMAT
    version: str = ARCHIVE_VERSION
    document_count: int = 0
    employee_count: int = 0
    export_date: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exportDate": self.export_date,
            "version": self.version,
            "documentCount": self.document_count,
            "employeeCount": self.employee_count,
            "format": self.format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArchiveManifest":
        return cls(
            format=data.get("format", ""),
            version=data.get("version", ""),
            document_count=data.get("documentCount", 0),
            employee_count=data.get("employeeCount", 0),
            export_date=data.get("exportDate", ""),
        )

    def is_supported_format(self) -> bool:
        """Only the format tag is checked; the version is informational."""
        return self.format == ARCHIVE_FORMAT


__all__ = [
    "ARCHIVE_FORMAT",
    "ARCHIVE_VERSION",
    "DATASET_ENTRY",
    "MANIFEST_ENTRY",
    "DOCUMENTS_PREFIX",
    "document_entry_name",
    "ArchiveManifest",
]
