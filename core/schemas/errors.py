"""
Schemas
File: errors.py

Purpose: Error taxonomy for the employee notes service.
Client-input errors raised during import/export all derive from
TransferError; StoreError marks a server-side I/O failure.
"""

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input classification
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"

    # Archive container & semantics
    CORRUPT_ARCHIVE = "CORRUPT_ARCHIVE"
    INVALID_ARCHIVE_FORMAT = "INVALID_ARCHIVE_FORMAT"
    MISSING_DATASET_ENTRY = "MISSING_DATASET_ENTRY"

    # Dataset document
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    INVALID_DATASET_STRUCTURE = "INVALID_DATASET_STRUCTURE"

    # Export
    INVALID_EXPORT_FORMAT = "INVALID_EXPORT_FORMAT"

    # Records & uploads
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    UPLOAD_REJECTED = "UPLOAD_REJECTED"

    # Storage
    STORE_FAILURE = "STORE_FAILURE"


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class NotesException(Exception):
    """
    Base exception for all employee notes errors.

    Carries a stable code, the human-readable message shown to the caller,
    and optional structured details.
    """

    def __init__(
        self,
        message: str,
        code: str = "NOTES_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class TransferError(NotesException):
    """A client-input error detected during import or export."""


class UnsupportedFileTypeError(TransferError):
    """Uploaded payload is neither an archive nor a dataset document."""

    def __init__(self, filename: str | None = None, content_type: str | None = None) -> None:
        super().__init__(
            message="File must be a JSON or ZIP file",
            code=ErrorCodes.UNSUPPORTED_FILE_TYPE,
            details={"filename": filename, "content_type": content_type},
        )


class CorruptArchiveError(TransferError):
    """Bytes claim to be an archive but cannot be read as one."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            message="Invalid ZIP archive or processing error",
            code=ErrorCodes.CORRUPT_ARCHIVE,
            details={"reason": reason} if reason else None,
        )


class InvalidArchiveFormatError(TransferError):
    """Archive opens but its manifest names another archive family."""

    def __init__(self, found: Any = None) -> None:
        super().__init__(
            message="Invalid archive format",
            code=ErrorCodes.INVALID_ARCHIVE_FORMAT,
            details={"format": found},
        )


class MissingDatasetEntryError(TransferError):
    """Archive has no dataset document entry."""

    def __init__(self, entry_name: str) -> None:
        super().__init__(
            message=f"Archive missing {entry_name}",
            code=ErrorCodes.MISSING_DATASET_ENTRY,
            details={"entry": entry_name},
        )


class InvalidDocumentError(TransferError):
    """Legacy upload is not parseable JSON."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            message="Invalid JSON format",
            code=ErrorCodes.INVALID_DOCUMENT,
            details={"reason": reason} if reason else None,
        )


class DatasetValidationError(TransferError):
    """Parsed dataset document violates the required shape."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DATASET_STRUCTURE,
            details=full_details,
        )


class InvalidExportFormatError(TransferError):
    """Export requested in a format other than json or zip."""

    def __init__(self, requested: str) -> None:
        super().__init__(
            message='Invalid format parameter. Use "json" or "zip"',
            code=ErrorCodes.INVALID_EXPORT_FORMAT,
            details={"format": requested},
        )


class EmployeeNotFoundError(NotesException):
    """No employee with the requested identifier."""

    def __init__(self, employee_id: str) -> None:
        super().__init__(
            message="Employee not found",
            code=ErrorCodes.EMPLOYEE_NOT_FOUND,
            details={"employee_id": employee_id},
        )


class UploadRejectedError(NotesException):
    """Single-file upload failed the size or extension policy."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.UPLOAD_REJECTED,
            details=details,
        )


class StoreError(NotesException):
    """I/O failure while loading or writing the dataset store."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.STORE_FAILURE,
            details=details,
        )


__all__ = [
    "ErrorCodes",
    "NotesException",
    "TransferError",
    "UnsupportedFileTypeError",
    "CorruptArchiveError",
    "InvalidArchiveFormatError",
    "MissingDatasetEntryError",
    "InvalidDocumentError",
    "DatasetValidationError",
    "InvalidExportFormatError",
    "EmployeeNotFoundError",
    "UploadRejectedError",
    "StoreError",
]
