"""
Schemas
File: employee.py

Purpose: Typed models for the dataset document.

The wire format uses camelCase keys (startDate, supportingDocuments, ...);
Python code uses the snake_case field names. Unknown keys on a record are
kept, and numeric ids are read as strings, so that a document survives an
export/import round trip unchanged.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Record(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class SupportingDocument(_Record):
    """Reference to an attachment file stored in the attachment directory."""

    id: str = Field(default="", description="Document identifier")
    filename: str = Field(..., min_length=1, description="Stored filename, unique on disk")
    original_name: str = Field(default="", alias="originalName")
    path: str = Field(default="", description="Retrieval path")
    mime_type: str = Field(default="application/octet-stream", alias="mimeType")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    checksum: Optional[str] = Field(
        default=None,
        description="Lowercase hex SHA-256 of the file, only set by an archive export",
    )


class EmployeeEntry(_Record):
    """A dated free-text entry (praise or feedback)."""

    id: str = ""
    date: str = ""
    content: str = ""


class EmployeeNote(EmployeeEntry):
    """A note, optionally carrying supporting documents."""

    supporting_documents: Optional[list[SupportingDocument]] = Field(
        default=None,
        alias="supportingDocuments",
    )

    @property
    def attachments(self) -> list[SupportingDocument]:
        return self.supporting_documents or []


class Employee(_Record):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    start_date: str = Field(..., min_length=1, alias="startDate")
    notes: list[EmployeeNote] = Field(default_factory=list)
    praise: list[EmployeeEntry] = Field(default_factory=list)
    feedback: list[EmployeeEntry] = Field(default_factory=list)
    performance_reviews: list[SupportingDocument] = Field(
        default_factory=list,
        alias="performanceReviews",
    )


class EmployeeDatabase(_Record):
    """The full dataset document: every employee plus a last-updated timestamp."""

    employees: list[Employee] = Field(default_factory=list)
    last_updated: str = Field(default_factory=utc_timestamp, alias="lastUpdated")

    @classmethod
    def empty(cls) -> "EmployeeDatabase":
        return cls(employees=[], last_updated=utc_timestamp())

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    def iter_attachments(self):
        """Yield every attachment reference, note attachments before reviews, per employee."""
        for employee in self.employees:
            for note in employee.notes:
                yield from note.attachments
            yield from employee.performance_reviews

    def to_document(self) -> dict[str, Any]:
        """
        Render the wire document with camelCase keys.

        Only keys that were present on input (or assigned since) are
        written, so a stored document exports without gaining defaults.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_unset=True)


__all__ = [
    "utc_timestamp",
    "SupportingDocument",
    "EmployeeEntry",
    "EmployeeNote",
    "Employee",
    "EmployeeDatabase",
]
