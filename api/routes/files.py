"""
File Routes

Upload a supporting document and serve stored attachment files.
Uploaded files can be removed again.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from api.deps import get_attachments, get_upload_service
from api.errors import InvalidRequestError, MissingFileError, NotFoundError

from core.schemas.errors import UploadRejectedError
from core.store.attachments import AttachmentDirectory
from core.store.uploads import STORED_NAME_PREFIX, UploadService, content_type_for


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


@router.post("", status_code=201)
async def upload_file(
    file: Optional[UploadFile] = File(default=None),
    employee_name: Optional[str] = Form(default=None, alias="employeeName"),
    entry_date: Optional[str] = Form(default=None, alias="entryDate"),
    uploads: UploadService = Depends(get_upload_service),
) -> dict[str, Any]:
    """Store one supporting document and return its reference."""
    if file is None or not file.filename:
        raise MissingFileError("No file provided")
    if not employee_name:
        raise InvalidRequestError("Employee name is required")

    content = await file.read()
    try:
        document = uploads.save_upload(
            content,
            original_name=file.filename,
            mime_type=file.content_type,
            employee_name=employee_name,
            entry_date=entry_date,
        )
    except UploadRejectedError as e:
        raise InvalidRequestError(e.message, code=e.code, details=e.details)
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("/{filename}")
async def get_file(
    filename: str,
    attachments: AttachmentDirectory = Depends(get_attachments),
) -> Response:
    """Serve a stored supporting document."""
    if not filename.startswith(STORED_NAME_PREFIX) or not attachments.exists(filename):
        raise NotFoundError("File not found")

    try:
        content = attachments.read(filename)
    except OSError as e:
        logger.warning(f"Could not read {filename}: {e}")
        raise NotFoundError("File not found")

    return Response(
        content=content,
        media_type=content_type_for(filename),
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "private, max-age=0, no-cache",
        },
    )


@router.delete("/{filename}")
async def delete_file(
    filename: str,
    uploads: UploadService = Depends(get_upload_service),
) -> dict[str, Any]:
    """Remove a stored supporting document."""
    if not filename.startswith(STORED_NAME_PREFIX) or not uploads.delete_upload(filename):
        raise NotFoundError("File not found")
    return {"success": True}
