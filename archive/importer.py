"""
Archive Import/Export
File: importer.py

Purpose: Restore the dataset from an uploaded archive or legacy document.

Every client-input problem (unsupported type, corrupt archive, wrong archive
family, missing dataset entry, invalid JSON, invalid structure) is raised
before anything is written. Per-attachment problems (checksum mismatch,
missing file, failed write) are counted on the ImportOutcome instead.
"""

from __future__ import annotations

import io
import json
import logging
import posixpath
import zipfile
import zlib
from enum import Enum
from typing import Any

from core.config.runtime import TransferConfig
from core.crypto.hashing import verify_checksum
from core.schemas.employee import EmployeeDatabase, SupportingDocument
from core.schemas.errors import (
    CorruptArchiveError,
    InvalidArchiveFormatError,
    InvalidDocumentError,
    MissingDatasetEntryError,
    StoreError,
    UnsupportedFileTypeError,
)
from core.schemas.transfer import ImportOutcome
from core.store.attachments import AttachmentDirectory, is_safe_filename
from core.store.database import EmployeeStore

from archive.manifest import (
    ArchiveManifest,
    DATASET_ENTRY,
    DOCUMENTS_PREFIX,
    MANIFEST_ENTRY,
)
from archive.validation import validate_dataset


logger = logging.getLogger(__name__)

ARCHIVE_MEDIA_TYPES = frozenset({"application/zip", "application/x-zip-compressed"})
DOCUMENT_MEDIA_TYPES = frozenset({"application/json"})

# Raised by zipfile when a member cannot be decoded
_ENTRY_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError)


class UploadKind(str, Enum):
    ARCHIVE = "archive"
    DOCUMENT = "document"


def classify_upload(filename: str | None, content_type: str | None) -> UploadKind:
    """
    Decide how an upload is read from its declared media type or extension.

    Raises:
        UnsupportedFileTypeError: Neither an archive nor a JSON document
    """
    name = (filename or "").lower()
    media_type = (content_type or "").split(";")[0].strip().lower()

    if media_type in ARCHIVE_MEDIA_TYPES or name.endswith(".zip"):
        return UploadKind.ARCHIVE
    if media_type in DOCUMENT_MEDIA_TYPES or name.endswith(".json"):
        return UploadKind.DOCUMENT
    raise UnsupportedFileTypeError(filename, content_type)


def parse_document(data: bytes) -> Any:
    """Parse legacy upload bytes as JSON."""
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidDocumentError(str(e)) from e


def open_archive(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as e:
        raise CorruptArchiveError(str(e)) from e


def read_archive(zf: zipfile.ZipFile) -> tuple[EmployeeDatabase, list[zipfile.ZipInfo]]:
    """
    Check the archive's manifest and dataset entry and list its documents.

    Returns:
        Tuple of (validated_database, document_entries)
    """
    names = set(zf.namelist())

    try:
        if MANIFEST_ENTRY in names:
            manifest_data = json.loads(zf.read(MANIFEST_ENTRY).decode("utf-8"))
            if not isinstance(manifest_data, dict):
                raise InvalidArchiveFormatError(None)
            manifest = ArchiveManifest.from_dict(manifest_data)
            if not manifest.is_supported_format():
                raise InvalidArchiveFormatError(manifest.format)

        if DATASET_ENTRY not in names:
            raise MissingDatasetEntryError(DATASET_ENTRY)

        document = json.loads(zf.read(DATASET_ENTRY).decode("utf-8"))
    except (ValueError, *_ENTRY_READ_ERRORS) as e:
        raise CorruptArchiveError(str(e)) from e

    database = validate_dataset(document)

    entries = [
        info for info in zf.infolist()
        if info.filename.startswith(DOCUMENTS_PREFIX) and not info.is_dir()
    ]
    return database, entries


def recorded_checksums(database: EmployeeDatabase) -> dict[str, str]:
    """First recorded checksum per stored filename, notes before reviews."""
    checksums: dict[str, str] = {}
    for document in database.iter_attachments():
        if document.checksum and document.filename not in checksums:
            checksums[document.filename] = document.checksum
    return checksums


def _without(documents: list[SupportingDocument], filenames: set[str]) -> list[SupportingDocument]:
    return [d for d in documents if d.filename not in filenames]


class Importer:
    """Validates uploads and replaces the dataset store with their contents."""

    def __init__(
        self,
        store: EmployeeStore,
        attachments: AttachmentDirectory,
        config: TransferConfig | None = None,
    ):
        self.store = store
        self.attachments = attachments
        self.config = config or TransferConfig()

    def import_upload(self, filename: str | None, content_type: str | None, data: bytes) -> ImportOutcome:
        """
        Import an uploaded archive or legacy dataset document.

        Args:
            filename: Uploaded filename
            content_type: Declared media type
            data: Raw uploaded bytes

        Returns:
            ImportOutcome with counters and composed message

        Raises:
            TransferError: Any client-input violation; the store is untouched
            StoreError: Writing the dataset store failed
        """
        kind = classify_upload(filename, content_type)
        outcome = ImportOutcome()

        if kind is UploadKind.ARCHIVE:
            with open_archive(data) as zf:
                database, entries = read_archive(zf)
                self._restore_attachments(zf, entries, database, outcome)
        else:
            database = validate_dataset(parse_document(data))
            self._drop_missing_attachments(database, outcome)

        self.store.replace(database)

        outcome.message = outcome.compose_message()
        logger.info(
            f"Imported {kind.value} {filename!r}: employees={len(database.employees)} "
            f"imported={outcome.imported_docs_count} missing={outcome.missing_docs_count} "
            f"checksum_errors={outcome.checksum_errors}"
        )
        return outcome

    def _warn(self, outcome: ImportOutcome, message: str) -> None:
        logger.warning(message)
        outcome.warnings.append(message)

    def _restore_attachments(
        self,
        zf: zipfile.ZipFile,
        entries: list[zipfile.ZipInfo],
        database: EmployeeDatabase,
        outcome: ImportOutcome,
    ) -> None:
        """Write each archived document whose bytes match its recorded checksum."""
        try:
            self.attachments.ensure_directory()
        except OSError as e:
            raise StoreError(
                f"Cannot create attachment directory: {self.attachments.root}",
                details={"reason": str(e)},
            ) from e

        expected = recorded_checksums(database)
        rejected: set[str] = set()

        for info in entries:
            filename = posixpath.basename(info.filename)
            if not is_safe_filename(filename):
                self._warn(outcome, f"Skipping archive entry with unusable name: {info.filename}")
                continue

            try:
                data = zf.read(info)
            except _ENTRY_READ_ERRORS as e:
                self._warn(outcome, f"Corrupt archive entry {info.filename}: {e}")
                outcome.checksum_errors += 1
                rejected.add(filename)
                continue

            recorded = expected.get(filename)
            if recorded:
                ok, actual = verify_checksum(data, recorded)
                if not ok:
                    self._warn(outcome, f"Checksum mismatch for {filename}: expected {recorded}, got {actual}")
                    outcome.checksum_errors += 1
                    rejected.add(filename)
                    continue

            try:
                self.attachments.write(filename, data)
            except OSError as e:
                self._warn(outcome, f"Failed to write document {filename}: {e}")
                continue
            outcome.imported_docs_count += 1

        if rejected and self.config.prune_checksum_failures:
            for employee in database.employees:
                for note in employee.notes:
                    if note.supporting_documents:
                        note.supporting_documents = _without(note.supporting_documents, rejected)
                employee.performance_reviews = _without(employee.performance_reviews, rejected)

    def _drop_missing_attachments(self, database: EmployeeDatabase, outcome: ImportOutcome) -> None:
        """Legacy documents only: keep note attachments whose file is on disk."""
        for employee in database.employees:
            for note in employee.notes:
                if not note.supporting_documents:
                    continue
                kept = []
                for document in note.supporting_documents:
                    if self.attachments.exists(document.filename):
                        kept.append(document)
                    else:
                        outcome.missing_docs_count += 1
                        self._warn(outcome, f"Document not found: {document.filename}")
                note.supporting_documents = kept


__all__ = [
    "ARCHIVE_MEDIA_TYPES",
    "DOCUMENT_MEDIA_TYPES",
    "UploadKind",
    "classify_upload",
    "parse_document",
    "open_archive",
    "read_archive",
    "recorded_checksums",
    "Importer",
]
