"""
Storage collaborators: dataset store, attachment directory, upload service.
"""

from .attachments import AttachmentDirectory, is_safe_filename
from .database import EmployeeStore, dump_document
from .uploads import (
    CONTENT_TYPES,
    FILES_ROUTE,
    STORED_NAME_PREFIX,
    UploadService,
    content_type_for,
)

__all__ = [
    "AttachmentDirectory",
    "is_safe_filename",
    "EmployeeStore",
    "dump_document",
    "CONTENT_TYPES",
    "FILES_ROUTE",
    "STORED_NAME_PREFIX",
    "UploadService",
    "content_type_for",
]
