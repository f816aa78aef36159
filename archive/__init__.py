"""
Archive Import/Export

Exports the employee dataset (optionally bundled with its attachment files
into a zip archive) and restores it from such an archive or from a legacy
JSON document.
"""

from archive.manifest import (
    ARCHIVE_FORMAT,
    ARCHIVE_VERSION,
    DATASET_ENTRY,
    MANIFEST_ENTRY,
    DOCUMENTS_PREFIX,
    ArchiveManifest,
    document_entry_name,
)

from archive.validation import (
    validate_dataset,
    validate_employee,
    validate_employees_collection,
)

from archive.exporter import (
    JSON_MEDIA_TYPE,
    ZIP_MEDIA_TYPE,
    ExportFormat,
    ExportResult,
    Exporter,
    export_filename,
)

from archive.importer import (
    UploadKind,
    Importer,
    classify_upload,
    parse_document,
    read_archive,
    recorded_checksums,
)

__all__ = [
    # Manifest
    "ARCHIVE_FORMAT",
    "ARCHIVE_VERSION",
    "DATASET_ENTRY",
    "MANIFEST_ENTRY",
    "DOCUMENTS_PREFIX",
    "ArchiveManifest",
    "document_entry_name",
    # Validation
    "validate_dataset",
    "validate_employee",
    "validate_employees_collection",
    # Export
    "JSON_MEDIA_TYPE",
    "ZIP_MEDIA_TYPE",
    "ExportFormat",
    "ExportResult",
    "Exporter",
    "export_filename",
    # Import
    "UploadKind",
    "Importer",
    "classify_upload",
    "parse_document",
    "read_archive",
    "recorded_checksums",
]
