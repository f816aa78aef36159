"""
Upload Service

Validates and stores single uploaded files, producing the attachment
reference that notes and performance reviews carry.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Optional

from core.config.runtime import UploadConfig
from core.schemas.employee import SupportingDocument
from core.schemas.errors import UploadRejectedError
from core.store.attachments import AttachmentDirectory


logger = logging.getLogger(__name__)

STORED_NAME_PREFIX = "supporting-doc-"
FILES_ROUTE = "/api/files"

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def content_type_for(filename: str) -> str:
    """Media type served for a stored file, by extension."""
    return CONTENT_TYPES.get(PurePath(filename).suffix.lower(), "application/octet-stream")


def _entry_day(entry_date: Optional[str]) -> str:
    if not entry_date:
        return datetime.now(timezone.utc).date().isoformat()
    try:
        moment = datetime.fromisoformat(entry_date.replace("Z", "+00:00"))
    except ValueError:
        raise UploadRejectedError(f"Invalid entry date: {entry_date}")
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date().isoformat()


class UploadService:
    """Stores uploads under generated, collision-free filenames."""

    def __init__(self, attachments: AttachmentDirectory, config: UploadConfig):
        self.attachments = attachments
        self.config = config

    def is_valid_file_type(self, filename: str) -> bool:
        return PurePath(filename).suffix.lower() in self.config.allowed_extensions

    def save_upload(
        self,
        content: bytes,
        original_name: str,
        mime_type: Optional[str],
        employee_name: str,
        entry_date: Optional[str] = None,
    ) -> SupportingDocument:
        """
        Validate and store one uploaded file.

        Args:
            content: Raw file bytes
            original_name: Filename as uploaded by the user
            mime_type: Declared media type of the upload
            employee_name: Owner of the note/review, used in the stored name
            entry_date: Date of the entry the file belongs to (ISO-8601)

        Returns:
            SupportingDocument referencing the stored file

        Raises:
            UploadRejectedError: If the file is too large or its type is not allowed
        """
        if len(content) > self.config.max_file_size:
            limit_mb = self.config.max_file_size / 1024 / 1024
            raise UploadRejectedError(
                f"File size exceeds {limit_mb:g}MB limit",
                details={"size": len(content), "max_file_size": self.config.max_file_size},
            )

        extension = PurePath(original_name).suffix.lower()
        if extension not in self.config.allowed_extensions:
            raise UploadRejectedError(
                f"File type {extension or '(none)'} is not allowed. "
                f"Allowed types: {', '.join(self.config.allowed_extensions)}",
                details={"extension": extension},
            )

        sanitized_name = re.sub(r"[^a-zA-Z0-9]", "-", employee_name)
        file_id = str(uuid.uuid4())
        filename = f"{STORED_NAME_PREFIX}{sanitized_name}-{_entry_day(entry_date)}-{file_id}{extension}"

        self.attachments.ensure_directory()
        self.attachments.write(filename, content)
        logger.info(f"Stored upload {original_name!r} as {filename} ({len(content)} bytes)")

        return SupportingDocument(
            id=file_id,
            filename=filename,
            original_name=original_name,
            path=f"{FILES_ROUTE}/{filename}",
            mime_type=mime_type or content_type_for(filename),
            size=len(content),
        )

    def delete_upload(self, filename: str) -> bool:
        try:
            return self.attachments.delete(filename)
        except (OSError, ValueError) as e:
            logger.error(f"Error deleting file {filename}: {e}")
            return False


__all__ = [
    "STORED_NAME_PREFIX",
    "FILES_ROUTE",
    "CONTENT_TYPES",
    "content_type_for",
    "UploadService",
]
