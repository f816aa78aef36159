"""
Schemas

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error codes and exceptions
from .errors import (
    CorruptArchiveError,
    DatasetValidationError,
    EmployeeNotFoundError,
    ErrorCodes,
    InvalidArchiveFormatError,
    InvalidDocumentError,
    InvalidExportFormatError,
    MissingDatasetEntryError,
    NotesException,
    StoreError,
    TransferError,
    UnsupportedFileTypeError,
    UploadRejectedError,
)

# Dataset document
from .employee import (
    Employee,
    EmployeeDatabase,
    EmployeeEntry,
    EmployeeNote,
    SupportingDocument,
    utc_timestamp,
)

# Import results
from .transfer import BASE_IMPORT_MESSAGE, ImportOutcome

__all__ = [
    # Errors
    "CorruptArchiveError",
    "DatasetValidationError",
    "EmployeeNotFoundError",
    "ErrorCodes",
    "InvalidArchiveFormatError",
    "InvalidDocumentError",
    "InvalidExportFormatError",
    "MissingDatasetEntryError",
    "NotesException",
    "StoreError",
    "TransferError",
    "UnsupportedFileTypeError",
    "UploadRejectedError",
    # Dataset
    "Employee",
    "EmployeeDatabase",
    "EmployeeEntry",
    "EmployeeNote",
    "SupportingDocument",
    "utc_timestamp",
    # Transfer
    "BASE_IMPORT_MESSAGE",
    "ImportOutcome",
]
