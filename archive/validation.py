"""
Archive Import/Export
File: validation.py

Purpose: Structural validation of an imported dataset document.

Checks run in a fixed order and the first violation is reported:
1. employees collection present
2. per employee: id, name, startDate present
3. per employee: notes, praise, feedback are lists
4. per employee: performanceReviews is a list (absent defaults to empty)
Anything these checks let through is then parsed into the typed model.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from core.schemas.employee import EmployeeDatabase
from core.schemas.errors import DatasetValidationError


MISSING_EMPLOYEES = "Invalid data structure: missing employees array"
MISSING_REQUIRED_FIELDS = "Invalid employee structure: missing required fields (id, name, startDate)"
ENTRIES_NOT_LISTS = "Invalid employee structure: notes, praise, and feedback must be arrays"
REVIEWS_NOT_LIST = "Invalid employee structure: performanceReviews must be an array"

REQUIRED_EMPLOYEE_FIELDS = ("id", "name", "startDate")
ENTRY_COLLECTIONS = ("notes", "praise", "feedback")


def validate_employees_collection(document: Any) -> list[Any]:
    """Return the employees list or fail."""
    if not isinstance(document, dict) or not isinstance(document.get("employees"), list):
        raise DatasetValidationError(MISSING_EMPLOYEES, field_path="employees")
    return document["employees"]


def validate_employee(employee: Any, index: int) -> None:
    """Check one raw employee record, defaulting performanceReviews in place."""
    path = f"employees[{index}]"

    if not isinstance(employee, dict) or not all(employee.get(f) for f in REQUIRED_EMPLOYEE_FIELDS):
        raise DatasetValidationError(MISSING_REQUIRED_FIELDS, field_path=path)

    if not all(isinstance(employee.get(name), list) for name in ENTRY_COLLECTIONS):
        raise DatasetValidationError(ENTRIES_NOT_LISTS, field_path=path)

    # Backward compatibility: documents written before reviews existed
    if employee.get("performanceReviews") in (None, False, "", 0):
        employee["performanceReviews"] = []
    elif not isinstance(employee["performanceReviews"], list):
        raise DatasetValidationError(REVIEWS_NOT_LIST, field_path=f"{path}.performanceReviews")


def _describe(error: ValidationError) -> tuple[str, str]:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return location, first.get("msg", "invalid value")


def validate_dataset(document: Any) -> EmployeeDatabase:
    """
    Validate a parsed dataset document and return it typed.

    Args:
        document: Result of parsing the dataset JSON

    Returns:
        EmployeeDatabase

    Raises:
        DatasetValidationError: On the first structural violation found
    """
    employees = validate_employees_collection(document)
    for index, employee in enumerate(employees):
        validate_employee(employee, index)

    try:
        return EmployeeDatabase.model_validate(document)
    except ValidationError as e:
        location, reason = _describe(e)
        raise DatasetValidationError(
            f"Invalid employee structure: {location}: {reason}",
            field_path=location,
        ) from e


__all__ = [
    "MISSING_EMPLOYEES",
    "MISSING_REQUIRED_FIELDS",
    "ENTRIES_NOT_LISTS",
    "REVIEWS_NOT_LIST",
    "validate_employees_collection",
    "validate_employee",
    "validate_dataset",
]
