"""
Pytest configuration and shared fixtures for employee notes tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_employee = _common.make_employee
make_database = _common.make_database

from core.config.runtime import RuntimeConfig, StorageConfig
from core.store.attachments import AttachmentDirectory
from core.store.database import EmployeeStore


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep NOTES_* variables from the developer's shell out of the tests."""
    for name in (
        "NOTES_DATA_DIR",
        "NOTES_DATABASE_FILE",
        "NOTES_RESOURCES_DIR",
        "NOTES_MAX_UPLOAD_BYTES",
        "NOTES_PRUNE_CHECKSUM_FAILURES",
        "NOTES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runtime_config(tmp_path):
    """RuntimeConfig rooted in a temporary data directory."""
    return RuntimeConfig(storage=StorageConfig(data_dir=tmp_path / "data"))


@pytest.fixture
def store(runtime_config):
    """Dataset store backed by the temporary data directory."""
    return EmployeeStore(runtime_config.storage.database_path)


@pytest.fixture
def attachments(runtime_config):
    """Attachment directory inside the temporary data directory (created)."""
    directory = AttachmentDirectory(runtime_config.storage.resources_path)
    directory.ensure_directory()
    return directory


@pytest.fixture
def database():
    """Provide a default single-employee EmployeeDatabase."""
    return make_database()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
