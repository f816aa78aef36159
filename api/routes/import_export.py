"""
Import/Export Routes

Download the dataset as a JSON document or zip archive, and restore it
from an uploaded archive or document.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from api.deps import get_exporter, get_importer
from api.errors import InternalError, InvalidRequestError, MissingFileError

from archive.exporter import Exporter
from archive.importer import Importer
from core.schemas.errors import InvalidExportFormatError, StoreError, TransferError
from core.schemas.transfer import ImportOutcome


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/import-export", tags=["import-export"])


@router.get("/export")
async def export_data(
    format: Optional[str] = Query(default="json", description='Export format: "json" or "zip"'),
    exporter: Exporter = Depends(get_exporter),
) -> StreamingResponse:
    """
    Export the dataset.

    - `json` - the dataset document alone (legacy format)
    - `zip` - archive with the dataset, attachment files and a manifest
    """
    try:
        result = exporter.export(format)
    except InvalidExportFormatError as e:
        raise InvalidRequestError(e.message, code=e.code, details=e.details)
    except StoreError:
        logger.exception("Export error")
        raise InternalError("Failed to export data")

    for warning in result.warnings:
        logger.debug(f"Export skipped: {warning}")

    return StreamingResponse(
        io.BytesIO(result.content),
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post("/import", response_model=ImportOutcome)
async def import_data(
    file: Optional[UploadFile] = File(default=None, description="Archive (.zip) or dataset document (.json)"),
    importer: Importer = Depends(get_importer),
) -> ImportOutcome:
    """
    Import a dataset, replacing the current one.

    Archive attachments are checksum-verified before being written; a legacy
    document has its references to files absent from disk removed.
    """
    if file is None or not file.filename:
        raise MissingFileError("No file provided")

    data = await file.read()

    try:
        return importer.import_upload(file.filename, file.content_type, data)
    except TransferError as e:
        logger.info(f"Import of {file.filename!r} rejected: {e.message}")
        raise InvalidRequestError(e.message, code=e.code, details=e.details)
    except StoreError:
        logger.exception("Import error")
        raise InternalError("Failed to import data")
