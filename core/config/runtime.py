"""
Runtime Configuration

Central configuration for storage locations, upload limits and import/export
behaviour. A RuntimeConfig is built once at startup and handed to the store,
attachment directory, exporter and importer.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_ALLOWED_EXTENSIONS = (".doc", ".docx", ".pdf", ".png", ".jpg", ".jpeg")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

CONFIG_SEARCH_PATHS = (
    Path("notes.json"),
    Path(".notes.json"),
    Path("~/.config/employee-notes/config.json"),
)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class StorageConfig:
    """Where the dataset document and the attachment files live."""
    data_dir: Path = Path("data")
    database_file: str = "employees.json"
    resources_dir: str = "resources"

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_file

    @property
    def resources_path(self) -> Path:
        return self.data_dir / self.resources_dir


@dataclass
class UploadConfig:
    """Limits for single-file uploads attached to notes and reviews."""
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS

    def __post_init__(self):
        self.allowed_extensions = tuple(ext.lower() for ext in self.allowed_extensions)


@dataclass
class TransferConfig:
    """Import/export behaviour."""
    # When False, references whose archived file failed checksum validation
    # stay in the restored dataset even though the file is not written.
    prune_checksum_failures: bool = False


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the employee notes service.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    uploads: UploadConfig = field(default_factory=UploadConfig)
    transfer: TransferConfig = field(default_factory=TransferConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - NOTES_DATA_DIR: Base directory for the dataset and attachments
        - NOTES_DATABASE_FILE: Dataset file name inside the data dir
        - NOTES_RESOURCES_DIR: Attachment directory name inside the data dir
        - NOTES_MAX_UPLOAD_BYTES: Upload size limit in bytes
        - NOTES_PRUNE_CHECKSUM_FAILURES: Drop references to corrupt files (true/false)
        - NOTES_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv("NOTES_DATA_DIR"):
            overrides.setdefault("storage", {})["data_dir"] = os.getenv("NOTES_DATA_DIR")
        if os.getenv("NOTES_DATABASE_FILE"):
            overrides.setdefault("storage", {})["database_file"] = os.getenv("NOTES_DATABASE_FILE")
        if os.getenv("NOTES_RESOURCES_DIR"):
            overrides.setdefault("storage", {})["resources_dir"] = os.getenv("NOTES_RESOURCES_DIR")

        if os.getenv("NOTES_MAX_UPLOAD_BYTES"):
            overrides.setdefault("uploads", {})["max_file_size"] = int(
                os.getenv("NOTES_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_FILE_SIZE))
            )

        if os.getenv("NOTES_PRUNE_CHECKSUM_FAILURES"):
            overrides.setdefault("transfer", {})["prune_checksum_failures"] = _env_bool(
                "NOTES_PRUNE_CHECKSUM_FAILURES"
            )

        if os.getenv("NOTES_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("NOTES_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            if path.suffix in (".yaml", ".yml"):
                import yaml
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        storage_data = data.get("storage", {})
        uploads_data = dict(data.get("uploads", {}))
        transfer_data = data.get("transfer", {})

        if "allowed_extensions" in uploads_data:
            uploads_data["allowed_extensions"] = tuple(uploads_data["allowed_extensions"])

        return cls(
            storage=StorageConfig(**storage_data) if storage_data else StorageConfig(),
            uploads=UploadConfig(**uploads_data) if uploads_data else UploadConfig(),
            transfer=TransferConfig(**transfer_data) if transfer_data else TransferConfig(),
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("storage", "uploads", "transfer"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)
        new_config.storage.data_dir = Path(new_config.storage.data_dir)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "storage": {
                "data_dir": str(self.storage.data_dir),
                "database_file": self.storage.database_file,
                "resources_dir": self.storage.resources_dir,
            },
            "uploads": {
                "max_file_size": self.uploads.max_file_size,
                "allowed_extensions": list(self.uploads.allowed_extensions),
            },
            "transfer": {
                "prune_checksum_failures": self.transfer.prune_checksum_failures,
            },
            "log_level": self.log_level,
        }


def load_runtime_config(path: Optional[str | Path] = None) -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    An explicit ``path`` must exist. Without one, the first existing file of
    CONFIG_SEARCH_PATHS is used; a file that fails to parse is skipped with a
    warning. Environment variables ALWAYS override config file values.
    """
    if path is not None:
        return RuntimeConfig.from_file(path).with_env_overrides()

    config: RuntimeConfig | None = None
    for candidate in CONFIG_SEARCH_PATHS:
        candidate = candidate.expanduser()
        if candidate.exists():
            try:
                config = RuntimeConfig.from_file(candidate)
                logger.info(f"Loaded config from {candidate}")
                break
            except Exception as e:
                logger.warning(f"Failed to parse {candidate}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
