"""
Storage Unit Tests
Tests for core/store/database.py, attachments.py and uploads.py

Tests:
- dataset store load/replace semantics and CRUD helpers
- attachment directory filename safety
- upload service naming and policy enforcement
"""
import json
import re

import pytest

from core.config.runtime import UploadConfig
from core.schemas.employee import EmployeeDatabase
from core.schemas.errors import EmployeeNotFoundError, StoreError, UploadRejectedError
from core.store.attachments import AttachmentDirectory, is_safe_filename
from core.store.database import EmployeeStore
from core.store.uploads import UploadService, content_type_for

from fixtures import make_database, make_document


class TestEmployeeStoreLoad:
    """Tests for EmployeeStore.load()."""

    def test_missing_file_is_initialised(self, store):
        """Test a missing dataset file is created empty."""
        database = store.load()

        assert database.employees == []
        assert store.path.exists()
        assert json.loads(store.path.read_text())["employees"] == []

    def test_unparsable_file_yields_empty_and_is_kept(self, store):
        """Test a corrupt file reads as empty and is not overwritten."""
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{broken")

        database = store.load()

        assert database.employees == []
        assert store.path.read_text() == "{broken"

    def test_strict_load_of_unparsable_file_raises(self, store):
        """Test a strict load refuses a corrupt file."""
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{broken")

        with pytest.raises(StoreError):
            store.load(strict=True)

    def test_numeric_ids_are_read_as_strings(self, store):
        """Test a stored employee with a numeric id loads with a string id."""
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps({
            "employees": [{"id": 7, "name": "Ada", "startDate": "2020-01-06", "notes": [{"id": 1, "content": "x"}]}],
        }))

        employee = store.load().employees[0]

        assert employee.id == "7"
        assert employee.notes[0].id == "1"

    def test_unreadable_path_raises_store_error(self, store):
        """Test an OS-level read failure is a StoreError."""
        store.path.mkdir(parents=True)

        with pytest.raises(StoreError):
            store.load()


class TestEmployeeStoreReplace:
    """Tests for EmployeeStore.replace()."""

    def test_replace_round_trip(self, store, database):
        """Test a replaced dataset loads back unchanged apart from lastUpdated."""
        store.replace(database)
        loaded = store.load()

        assert loaded.employees == database.employees

    def test_replace_stamps_last_updated(self, store):
        """Test lastUpdated is refreshed on every write."""
        database = make_database()
        database.last_updated = "2000-01-01T00:00:00.000Z"

        store.replace(database)

        assert store.load().last_updated != "2000-01-01T00:00:00.000Z"

    def test_written_file_is_pretty_printed(self, store, database):
        """Test the stored document is indented JSON with camelCase keys."""
        store.replace(database)
        text = store.path.read_text()

        assert text.startswith("{\n  ")
        assert '"startDate"' in text
        assert '"lastUpdated"' in text

    def test_no_temp_files_left_behind(self, store, database):
        """Test the atomic write cleans up after itself."""
        store.replace(database)

        leftovers = [p.name for p in store.path.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_sparse_records_are_not_padded(self, store):
        """Test rewriting a sparse document adds nothing but lastUpdated."""
        document = {
            "employees": [{
                "id": "e1",
                "name": "Ada",
                "startDate": "2020-01-06",
                "notes": [{"content": "x", "supportingDocuments": [{"filename": "supporting-doc-a.pdf"}]}],
                "praise": [],
                "feedback": [],
            }],
        }

        store.replace(EmployeeDatabase.model_validate(document))

        written = json.loads(store.path.read_text())
        assert written.pop("lastUpdated").endswith("Z")
        assert written == document


class TestEmployeeStoreRecords:
    """Tests for the CRUD helpers."""

    def test_create_and_get(self, store):
        """Test a created employee can be fetched by id."""
        created = store.create_employee("Ada Lovelace", "2020-01-06")

        fetched = store.get_employee(created.id)

        assert fetched is not None
        assert fetched.name == "Ada Lovelace"
        assert fetched.start_date == "2020-01-06"
        assert [e.id for e in store.list_employees()] == [created.id]

    def test_get_unknown_returns_none(self, store):
        """Test an unknown id is not an error for get."""
        assert store.get_employee("nope") is None

    def test_add_entries(self, store):
        """Test notes, praise and feedback are appended."""
        employee = store.create_employee("Ada Lovelace", "2020-01-06")
        document = make_document()

        note = store.add_note(employee.id, "1:1 notes", supporting_documents=[document])
        store.add_praise(employee.id, "Great talk", "2024-01-01T00:00:00.000Z")
        store.add_feedback(employee.id, "More docs please")

        stored = store.get_employee(employee.id)
        assert stored.notes[0].id == note.id
        assert stored.notes[0].attachments[0].filename == document.filename
        assert stored.praise[0].date == "2024-01-01T00:00:00.000Z"
        assert stored.feedback[0].content == "More docs please"
        assert stored.feedback[0].date.endswith("Z")

    def test_note_without_documents_omits_key(self, store):
        """Test a plain note has no supportingDocuments key on disk."""
        employee = store.create_employee("Ada Lovelace", "2020-01-06")
        store.add_note(employee.id, "plain")

        raw = json.loads(store.path.read_text())
        assert "supportingDocuments" not in raw["employees"][0]["notes"][0]

    def test_add_performance_review(self, store):
        """Test a review document is appended."""
        employee = store.create_employee("Ada Lovelace", "2020-01-06")
        store.add_performance_review(employee.id, make_document(filename="supporting-doc-review.pdf"))

        assert store.get_employee(employee.id).performance_reviews[0].filename == "supporting-doc-review.pdf"

    def test_unknown_employee_raises(self, store):
        """Test adding to an unknown employee raises EmployeeNotFoundError."""
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            store.add_praise("missing", "hello")
        assert exc_info.value.message == "Employee not found"


class TestEmployeeStoreCorruptFile:
    """Tests that writes never replace a store file they could not parse."""

    TRUNCATED = '{"employees": [{"id": "e1", "name": "Ada", "startDate": "2020-01-06", "notes": ['

    @pytest.fixture
    def corrupt_store(self, store):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(self.TRUNCATED)
        return store

    def test_create_employee_leaves_file_intact(self, corrupt_store):
        """Test creating an employee fails and keeps the original bytes."""
        before = corrupt_store.path.read_bytes()

        with pytest.raises(StoreError):
            corrupt_store.create_employee("Bob", "2021-02-01")

        assert corrupt_store.path.read_bytes() == before

    @pytest.mark.parametrize("write", [
        lambda s: s.add_note("e1", "hello"),
        lambda s: s.add_praise("e1", "hello"),
        lambda s: s.add_feedback("e1", "hello"),
        lambda s: s.add_performance_review("e1", make_document()),
    ])
    def test_entry_writes_leave_file_intact(self, corrupt_store, write):
        """Test every entry helper fails and keeps the original bytes."""
        before = corrupt_store.path.read_bytes()

        with pytest.raises(StoreError):
            write(corrupt_store)

        assert corrupt_store.path.read_bytes() == before

    def test_reads_still_return_empty(self, corrupt_store):
        """Test listing stays available on a corrupt file."""
        assert corrupt_store.list_employees() == []
        assert corrupt_store.get_employee("e1") is None


class TestAttachmentDirectory:
    """Tests for AttachmentDirectory and filename safety."""

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b.pdf", "..\\x.pdf", "a\x00.pdf", "/etc/passwd"])
    def test_unsafe_names(self, name):
        """Test names that could escape the directory are rejected."""
        assert not is_safe_filename(name)

    def test_safe_name(self):
        """Test an ordinary stored name is accepted."""
        assert is_safe_filename("supporting-doc-Jane-2024-01-01-x.pdf")

    def test_write_read_delete(self, attachments):
        """Test the basic file lifecycle."""
        attachments.write("a.pdf", b"data")

        assert attachments.exists("a.pdf")
        assert attachments.read("a.pdf") == b"data"
        assert attachments.delete("a.pdf") is True
        assert attachments.delete("a.pdf") is False
        assert not attachments.exists("a.pdf")

    def test_unsafe_name_access(self, attachments):
        """Test exists() is False and path_for() raises for unsafe names."""
        assert attachments.exists("../employees.json") is False
        with pytest.raises(ValueError):
            attachments.write("../escape.pdf", b"x")


class TestUploadService:
    """Tests for UploadService.save_upload()."""

    @pytest.fixture
    def uploads(self, attachments):
        return UploadService(attachments, UploadConfig(max_file_size=1024))

    def test_stored_name_and_reference(self, uploads, attachments):
        """Test the generated name, retrieval path and stored bytes."""
        document = uploads.save_upload(
            b"%PDF",
            original_name="Review Q1.PDF",
            mime_type="application/pdf",
            employee_name="Jane O'Neil",
            entry_date="2024-03-01T23:30:00.000Z",
        )

        assert re.fullmatch(
            r"supporting-doc-Jane-O-Neil-2024-03-01-[0-9a-f-]{36}\.pdf",
            document.filename,
        )
        assert document.filename.endswith(f"{document.id}.pdf")
        assert document.path == f"/api/files/{document.filename}"
        assert document.original_name == "Review Q1.PDF"
        assert document.size == 4
        assert attachments.read(document.filename) == b"%PDF"

    def test_oversize_rejected(self, uploads):
        """Test the size limit is enforced."""
        with pytest.raises(UploadRejectedError) as exc_info:
            uploads.save_upload(b"x" * 2048, "big.pdf", "application/pdf", "Jane")
        assert "File size exceeds" in exc_info.value.message

    def test_extension_rejected(self, uploads):
        """Test the extension allow-list is enforced."""
        with pytest.raises(UploadRejectedError) as exc_info:
            uploads.save_upload(b"MZ", "tool.exe", "application/octet-stream", "Jane")
        assert exc_info.value.message.startswith("File type .exe is not allowed.")

    def test_invalid_entry_date_rejected(self, uploads):
        """Test a malformed entry date is rejected."""
        with pytest.raises(UploadRejectedError):
            uploads.save_upload(b"x", "a.pdf", "application/pdf", "Jane", entry_date="yesterday")

    def test_delete_upload(self, uploads):
        """Test deleting a stored upload and a missing one."""
        document = uploads.save_upload(b"x", "a.png", "image/png", "Jane")

        assert uploads.delete_upload(document.filename) is True
        assert uploads.delete_upload(document.filename) is False

    def test_delete_upload_unsafe_name(self, uploads):
        """Test an unsafe name is refused rather than resolved."""
        assert uploads.delete_upload("../employees.json") is False

    def test_content_type_for(self):
        """Test served media types by extension."""
        assert content_type_for("x.PDF") == "application/pdf"
        assert content_type_for("x.jpeg") == "image/jpeg"
        assert content_type_for("x.bin") == "application/octet-stream"
