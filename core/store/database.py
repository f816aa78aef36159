"""
Dataset Store

JSON-file backed store for the employee dataset document. The whole document
is read and written at once; there are no partial updates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Callable, Optional, TypeVar

from core.schemas.employee import (
    Employee,
    EmployeeDatabase,
    EmployeeEntry,
    EmployeeNote,
    SupportingDocument,
    utc_timestamp,
)
from core.schemas.errors import EmployeeNotFoundError, StoreError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def dump_document(database: EmployeeDatabase) -> str:
    """Serialize the dataset as pretty-printed JSON."""
    return json.dumps(database.to_document(), indent=2, ensure_ascii=False)


class EmployeeStore:
    """
    Load/replace access to the dataset file plus the record-level helpers
    used by the CRUD endpoints.

    Writes go through a temp file and an atomic rename, serialized by an
    in-process lock. Separate processes are not coordinated.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _ensure_data_dir(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create data directory: {self.path.parent}") from e

    def _write(self, database: EmployeeDatabase) -> None:
        self._ensure_data_dir()
        content = dump_document(database)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(
                f"Failed to write dataset store: {self.path}",
                details={"reason": str(e)},
            ) from e

    def load(self, strict: bool = False) -> EmployeeDatabase:
        """
        Load the full dataset.

        A missing file is initialised with an empty dataset. A file that is
        not a valid dataset document is left on disk untouched for
        inspection: reads get an empty dataset, strict loads (every write
        path and the exporter) raise StoreError.
        """
        self._ensure_data_dir()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            database = EmployeeDatabase.empty()
            with self._lock:
                self._write(database)
            return database
        except OSError as e:
            raise StoreError(
                f"Failed to read dataset store: {self.path}",
                details={"reason": str(e)},
            ) from e

        try:
            return EmployeeDatabase.model_validate(json.loads(raw))
        except ValueError as e:
            logger.error(f"Dataset store {self.path} is not a valid dataset document: {e}")
            if strict:
                raise StoreError(
                    f"Dataset store is not a valid dataset document: {self.path}",
                    details={"reason": str(e)},
                ) from e
            return EmployeeDatabase.empty()

    def replace(self, database: EmployeeDatabase) -> None:
        """Replace the stored dataset wholesale, stamping lastUpdated."""
        with self._lock:
            database.last_updated = utc_timestamp()
            self._write(database)

    # ------------------------------------------------------------------
    # Record helpers
    # ------------------------------------------------------------------

    def list_employees(self) -> list[Employee]:
        return self.load().employees

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self.load().find_employee(employee_id)

    def create_employee(self, name: str, start_date: str) -> Employee:
        employee = Employee(
            id=str(uuid.uuid4()),
            name=name,
            start_date=start_date,
            notes=[],
            praise=[],
            feedback=[],
            performance_reviews=[],
        )
        with self._lock:
            database = self.load(strict=True)
            database.employees.append(employee)
            self.replace(database)
        return employee

    def _update_employee(self, employee_id: str, apply: Callable[[Employee], T]) -> T:
        with self._lock:
            database = self.load(strict=True)
            employee = database.find_employee(employee_id)
            if employee is None:
                raise EmployeeNotFoundError(employee_id)
            result = apply(employee)
            self.replace(database)
        return result

    def add_note(
        self,
        employee_id: str,
        content: str,
        date: Optional[str] = None,
        supporting_documents: Optional[list[SupportingDocument]] = None,
    ) -> EmployeeNote:
        note = EmployeeNote(
            id=str(uuid.uuid4()),
            date=date or utc_timestamp(),
            content=content,
            supporting_documents=supporting_documents or None,
        )
        return self._update_employee(employee_id, lambda e: e.notes.append(note) or note)

    def add_praise(self, employee_id: str, content: str, date: Optional[str] = None) -> EmployeeEntry:
        praise = EmployeeEntry(id=str(uuid.uuid4()), date=date or utc_timestamp(), content=content)
        return self._update_employee(employee_id, lambda e: e.praise.append(praise) or praise)

    def add_feedback(self, employee_id: str, content: str, date: Optional[str] = None) -> EmployeeEntry:
        feedback = EmployeeEntry(id=str(uuid.uuid4()), date=date or utc_timestamp(), content=content)
        return self._update_employee(employee_id, lambda e: e.feedback.append(feedback) or feedback)

    def add_performance_review(self, employee_id: str, document: SupportingDocument) -> SupportingDocument:
        return self._update_employee(
            employee_id,
            lambda e: e.performance_reviews.append(document) or document,
        )


__all__ = [
    "EmployeeStore",
    "dump_document",
]
