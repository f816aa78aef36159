"""
API Request Models

Pydantic models for request bodies. Required-field checks are done in the
route handlers so that every violation maps to the handler's own message.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.employee import SupportingDocument


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateEmployeeRequest(_Request):
    """Request body for POST /api/employees."""

    name: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")


class EntryRequest(_Request):
    """Request body for praise and feedback entries."""

    content: Optional[str] = None
    date: Optional[str] = Field(default=None, description="ISO-8601 date, defaults to now")


class NoteRequest(EntryRequest):
    """Request body for POST /api/employees/{id}/notes."""

    supporting_documents: Optional[list[SupportingDocument]] = Field(
        default=None,
        alias="supportingDocuments",
    )


class PerformanceReviewRequest(_Request):
    """Request body for POST /api/employees/{id}/performance-reviews."""

    document: Optional[dict[str, Any]] = None
