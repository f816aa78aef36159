"""
Common test fixtures shared by all modules.

Provides factory functions for the dataset document and for archives:
- SupportingDocument / EmployeeNote / Employee / EmployeeDatabase
- raw (wire-format) dataset documents
- archive bytes assembled entry by entry

These build valid objects by default; tests override what they exercise.
"""

from __future__ import annotations

import io
import json
import zipfile
from typing import Any, Optional

from core.crypto.hashing import compute_checksum
from core.schemas.employee import (
    Employee,
    EmployeeDatabase,
    EmployeeEntry,
    EmployeeNote,
    SupportingDocument,
)


# =============================================================================
# Dataset Factories
# =============================================================================

def make_document(
    filename: str = "supporting-doc-Jane-Doe-2024-03-01-abc.pdf",
    doc_id: str = "doc-1",
    size: int = 12,
    checksum: Optional[str] = None,
) -> SupportingDocument:
    """Create an attachment reference for a stored file."""
    return SupportingDocument(
        id=doc_id,
        filename=filename,
        original_name="review.pdf",
        path=f"/api/files/{filename}",
        mime_type="application/pdf",
        size=size,
        checksum=checksum,
    )


def make_note(
    note_id: str = "note-1",
    content: str = "Led the quarterly planning session.",
    documents: Optional[list[SupportingDocument]] = None,
) -> EmployeeNote:
    return EmployeeNote(
        id=note_id,
        date="2024-03-01T10:00:00.000Z",
        content=content,
        supporting_documents=documents,
    )


def make_employee(
    employee_id: str = "emp-1",
    name: str = "Jane Doe",
    start_date: str = "2021-06-01",
    notes: Optional[list[EmployeeNote]] = None,
    reviews: Optional[list[SupportingDocument]] = None,
) -> Employee:
    """
    Create an Employee for testing.

    Args:
        employee_id: Record identifier.
        name: Display name.
        start_date: Start date string.
        notes: Notes; defaults to none.
        reviews: Performance review documents; defaults to none.

    Returns:
        A valid Employee instance with one praise and one feedback entry.
    """
    return Employee(
        id=employee_id,
        name=name,
        start_date=start_date,
        notes=notes or [],
        praise=[EmployeeEntry(id="praise-1", date="2024-02-01T09:00:00.000Z", content="Great demo")],
        feedback=[EmployeeEntry(id="feedback-1", date="2024-02-15T09:00:00.000Z", content="Write more tests")],
        performance_reviews=reviews or [],
    )


def make_database(employees: Optional[list[Employee]] = None) -> EmployeeDatabase:
    return EmployeeDatabase(
        employees=employees if employees is not None else [make_employee()],
        last_updated="2024-03-02T00:00:00.000Z",
    )


def make_raw_employee(**overrides: Any) -> dict[str, Any]:
    """Wire-format employee record; keys set to None are removed."""
    record: dict[str, Any] = {
        "id": "emp-1",
        "name": "Jane Doe",
        "startDate": "2021-06-01",
        "notes": [],
        "praise": [],
        "feedback": [],
        "performanceReviews": [],
    }
    record.update(overrides)
    return {k: v for k, v in record.items() if v is not None}


def make_raw_document(employees: Optional[list[Any]] = None) -> dict[str, Any]:
    return {
        "employees": employees if employees is not None else [make_raw_employee()],
        "lastUpdated": "2024-03-02T00:00:00.000Z",
    }


# =============================================================================
# Archive Factories
# =============================================================================

def make_manifest(
    format: str = "employee-notes-archive",
    document_count: int = 0,
    employee_count: int = 1,
) -> dict[str, Any]:
    return {
        "exportDate": "2024-03-02T00:00:00.000Z",
        "version": "2.0",
        "documentCount": document_count,
        "employeeCount": employee_count,
        "format": format,
    }


def make_archive(
    dataset: Optional[Any] = None,
    documents: Optional[dict[str, bytes]] = None,
    manifest: Optional[Any] = None,
    include_dataset: bool = True,
    include_manifest: bool = True,
    raw_entries: Optional[dict[str, bytes]] = None,
) -> bytes:
    """
    Assemble archive bytes entry by entry.

    Args:
        dataset: Dataset document (dict, or str/bytes written verbatim).
        documents: Stored filename -> bytes, written under documents/.
        manifest: Manifest dict (default: a valid one), or str written verbatim.
        include_dataset: Set False to omit the dataset entry.
        include_manifest: Set False to omit the manifest entry.
        raw_entries: Extra entry name -> bytes, written as given.

    Returns:
        Zip archive bytes.
    """
    documents = documents or {}
    if dataset is None:
        dataset = make_raw_document()
    if manifest is None:
        manifest = make_manifest(document_count=len(documents))

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        if include_dataset:
            zf.writestr("employee-data.json", _entry_bytes(dataset))
        for filename, data in documents.items():
            zf.writestr(f"documents/{filename}", data)
        for name, data in (raw_entries or {}).items():
            zf.writestr(name, data)
        if include_manifest:
            zf.writestr("manifest.json", _entry_bytes(manifest))
    return buffer.getvalue()


def _entry_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value, indent=2).encode("utf-8")


def make_archive_with_documents(files: dict[str, bytes]) -> tuple[bytes, dict[str, Any]]:
    """
    Archive whose dataset references every file with its correct checksum,
    one note per file on a single employee.

    Returns:
        Tuple of (archive_bytes, raw_dataset_document)
    """
    notes = []
    for index, (filename, data) in enumerate(files.items()):
        document = make_document(
            filename=filename,
            doc_id=f"doc-{index}",
            size=len(data),
            checksum=compute_checksum(data),
        )
        notes.append(make_note(note_id=f"note-{index}", documents=[document]))

    raw = make_database([make_employee(notes=notes)]).to_document()
    return make_archive(dataset=raw, documents=files), raw
