"""
Employee Routes

Thin CRUD handlers over the dataset store.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ValidationError

from api.deps import get_store
from api.errors import InternalError, InvalidRequestError, NotFoundError
from api.models.requests import (
    CreateEmployeeRequest,
    EntryRequest,
    NoteRequest,
    PerformanceReviewRequest,
)

from core.schemas.employee import SupportingDocument
from core.schemas.errors import EmployeeNotFoundError, StoreError
from core.store.database import EmployeeStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/employees", tags=["employees"])

REVIEW_DOCUMENT_FIELDS = ("id", "filename", "originalName", "path", "mimeType", "size")


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("")
async def list_employees(store: EmployeeStore = Depends(get_store)) -> list[dict[str, Any]]:
    try:
        return [_dump(e) for e in store.list_employees()]
    except StoreError:
        logger.exception("Error fetching employees")
        raise InternalError("Failed to fetch employees")


@router.post("", status_code=201)
async def create_employee(
    request: CreateEmployeeRequest,
    store: EmployeeStore = Depends(get_store),
) -> dict[str, Any]:
    if not request.name or not request.start_date:
        raise InvalidRequestError("Name and start date are required")
    try:
        return _dump(store.create_employee(request.name, request.start_date))
    except StoreError:
        logger.exception("Error creating employee")
        raise InternalError("Failed to create employee")


@router.get("/{employee_id}")
async def get_employee(employee_id: str, store: EmployeeStore = Depends(get_store)) -> dict[str, Any]:
    try:
        employee = store.get_employee(employee_id)
    except StoreError:
        logger.exception("Error fetching employee")
        raise InternalError("Failed to fetch employee")
    if employee is None:
        raise NotFoundError("Employee not found", details={"employee_id": employee_id})
    return _dump(employee)


@router.post("/{employee_id}/notes", status_code=201)
async def add_note(
    employee_id: str,
    request: NoteRequest,
    store: EmployeeStore = Depends(get_store),
) -> dict[str, Any]:
    if not request.content:
        raise InvalidRequestError("Content is required")
    try:
        note = store.add_note(employee_id, request.content, request.date, request.supporting_documents)
    except EmployeeNotFoundError as e:
        raise NotFoundError(e.message, details=e.details)
    except StoreError:
        logger.exception("Error adding note")
        raise InternalError("Failed to add note")
    return _dump(note)


@router.post("/{employee_id}/praise", status_code=201)
async def add_praise(
    employee_id: str,
    request: EntryRequest,
    store: EmployeeStore = Depends(get_store),
) -> dict[str, Any]:
    if not request.content:
        raise InvalidRequestError("Content is required")
    try:
        praise = store.add_praise(employee_id, request.content, request.date)
    except EmployeeNotFoundError as e:
        raise NotFoundError(e.message, details=e.details)
    except StoreError:
        logger.exception("Error adding praise")
        raise InternalError("Failed to add praise")
    return _dump(praise)


@router.post("/{employee_id}/feedback", status_code=201)
async def add_feedback(
    employee_id: str,
    request: EntryRequest,
    store: EmployeeStore = Depends(get_store),
) -> dict[str, Any]:
    if not request.content:
        raise InvalidRequestError("Content is required")
    try:
        feedback = store.add_feedback(employee_id, request.content, request.date)
    except EmployeeNotFoundError as e:
        raise NotFoundError(e.message, details=e.details)
    except StoreError:
        logger.exception("Error adding feedback")
        raise InternalError("Failed to add feedback")
    return _dump(feedback)


@router.post("/{employee_id}/performance-reviews", status_code=201)
async def add_performance_review(
    employee_id: str,
    request: PerformanceReviewRequest,
    store: EmployeeStore = Depends(get_store),
) -> dict[str, Any]:
    if not request.document:
        raise InvalidRequestError("Performance review document is required")
    if not all(request.document.get(name) for name in REVIEW_DOCUMENT_FIELDS):
        raise InvalidRequestError("Document must have id, filename, originalName, path, mimeType, and size")
    try:
        document = SupportingDocument.model_validate(request.document)
    except ValidationError as e:
        raise InvalidRequestError("Invalid performance review document", details={"reason": str(e)})

    try:
        review = store.add_performance_review(employee_id, document)
    except EmployeeNotFoundError as e:
        raise NotFoundError(e.message, details=e.details)
    except StoreError:
        logger.exception("Error adding performance review")
        raise InternalError("Failed to add performance review")
    return _dump(review)
