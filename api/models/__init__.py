"""API request and response models."""

from api.models.requests import (
    CreateEmployeeRequest,
    EntryRequest,
    NoteRequest,
    PerformanceReviewRequest,
)
from api.models.responses import (
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "CreateEmployeeRequest",
    "EntryRequest",
    "NoteRequest",
    "PerformanceReviewRequest",
    "HealthResponse",
    "ErrorResponse",
]
