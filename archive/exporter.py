"""
Archive Import/Export
File: exporter.py

Purpose: Export the dataset as a legacy JSON document or as a zip archive
bundling the dataset, every resolvable attachment, and a manifest.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from core.crypto.hashing import compute_checksum
from core.schemas.employee import EmployeeDatabase, SupportingDocument
from core.schemas.errors import InvalidExportFormatError
from core.store.attachments import AttachmentDirectory
from core.store.database import EmployeeStore, dump_document

from archive.manifest import (
    ArchiveManifest,
    DATASET_ENTRY,
    MANIFEST_ENTRY,
    document_entry_name,
)


logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
ZIP_MEDIA_TYPE = "application/zip"


class ExportFormat(str, Enum):
    """Export formats: the bare dataset document or the full archive."""
    JSON = "json"
    ZIP = "zip"

    @classmethod
    def parse(cls, value: str | None) -> "ExportFormat":
        if not value:
            return cls.JSON
        try:
            return cls(value)
        except ValueError:
            raise InvalidExportFormatError(value)


def export_filename(export_format: ExportFormat, now: datetime | None = None) -> str:
    """Download filename carrying the current date."""
    now = now or datetime.now(timezone.utc)
    return f"employee-data-{now.date().isoformat()}.{export_format.value}"


@dataclass
class ExportResult:
    """Serialized export plus what was skipped along the way."""
    content: bytes
    media_type: str
    filename: str
    document_count: int = 0
    employee_count: int = 0
    warnings: list[str] = field(default_factory=list)


@dataclass
class _ResolvedAttachments:
    """Accumulator shared across every reference visited during one export."""
    files: dict[str, bytes] = field(default_factory=dict)
    checksums: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


class Exporter:
    """Builds exports from the dataset store and the attachment directory."""

    def __init__(self, store: EmployeeStore, attachments: AttachmentDirectory):
        self.store = store
        self.attachments = attachments

    def export(self, export_format: ExportFormat | str | None = None) -> ExportResult:
        """
        Export the dataset.

        Args:
            export_format: "json" (legacy document) or "zip" (archive)

        Returns:
            ExportResult

        Raises:
            InvalidExportFormatError: Unknown format, raised before any work
            StoreError: Dataset could not be loaded
        """
        if not isinstance(export_format, ExportFormat):
            export_format = ExportFormat.parse(export_format)

        database = self.store.load(strict=True)
        if export_format is ExportFormat.JSON:
            return self.export_document(database)
        return self.export_archive(database)

    def export_document(self, database: EmployeeDatabase) -> ExportResult:
        """Legacy mode: the dataset document verbatim, pretty-printed."""
        return ExportResult(
            content=dump_document(database).encode("utf-8"),
            media_type=JSON_MEDIA_TYPE,
            filename=export_filename(ExportFormat.JSON),
            employee_count=len(database.employees),
        )

    def _resolve(
        self,
        documents: list[SupportingDocument],
        resolved: _ResolvedAttachments,
        label: str,
    ) -> list[SupportingDocument]:
        """
        Keep the references whose file can be read, each enriched with its
        checksum. A file referenced more than once is read and hashed once.
        """
        kept: list[SupportingDocument] = []
        for document in documents:
            filename = document.filename
            if filename not in resolved.checksums:
                if not self.attachments.exists(filename):
                    message = f"{label} not found: {filename}"
                    logger.warning(message)
                    resolved.warnings.append(message)
                    continue
                try:
                    data = self.attachments.read(filename)
                except OSError as e:
                    message = f"Error processing {label.lower()} {filename}: {e}"
                    logger.warning(message)
                    resolved.warnings.append(message)
                    continue
                resolved.files[filename] = data
                resolved.checksums[filename] = compute_checksum(data)

            kept.append(document.model_copy(update={"checksum": resolved.checksums[filename]}))
        return kept

    def export_archive(self, database: EmployeeDatabase) -> ExportResult:
        """
        Archive mode: prune unresolvable references, record checksums,
        and bundle dataset + attachments + manifest into one zip.
        """
        database = database.model_copy(deep=True)
        resolved = _ResolvedAttachments()

        for employee in database.employees:
            for note in employee.notes:
                if note.supporting_documents:
                    note.supporting_documents = self._resolve(
                        note.supporting_documents, resolved, "Document"
                    )
            if employee.performance_reviews:
                employee.performance_reviews = self._resolve(
                    employee.performance_reviews, resolved, "Performance review document"
                )

        manifest = ArchiveManifest(
            document_count=len(resolved.files),
            employee_count=len(database.employees),
        )

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(DATASET_ENTRY, dump_document(database).encode("utf-8"))
            for filename, data in resolved.files.items():
                zf.writestr(document_entry_name(filename), data)
            zf.writestr(MANIFEST_ENTRY, json.dumps(manifest.to_dict(), indent=2).encode("utf-8"))

        logger.info(
            f"Exported archive: employees={manifest.employee_count} "
            f"documents={manifest.document_count} skipped={len(resolved.warnings)}"
        )

        return ExportResult(
            content=buffer.getvalue(),
            media_type=ZIP_MEDIA_TYPE,
            filename=export_filename(ExportFormat.ZIP),
            document_count=manifest.document_count,
            employee_count=manifest.employee_count,
            warnings=resolved.warnings,
        )


__all__ = [
    "JSON_MEDIA_TYPE",
    "ZIP_MEDIA_TYPE",
    "ExportFormat",
    "ExportResult",
    "Exporter",
    "export_filename",
]
