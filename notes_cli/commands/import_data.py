"""
CLI Import Command

Replace the dataset in the configured data directory from an archive or a
legacy JSON document. The upload kind is inferred from the file extension.

Usage:
    notes import backup.zip
    notes import employees.json --json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any

from archive.importer import Importer
from core.config.runtime import RuntimeConfig
from core.schemas.errors import StoreError, TransferError
from core.store.attachments import AttachmentDirectory
from core.store.database import EmployeeStore


logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


@dataclass
class ImportSummary:
    """Summary of an import for CLI output."""
    source_path: str = ""
    message: str = ""
    imported_docs_count: int = 0
    missing_docs_count: int = 0
    checksum_errors: int = 0
    warnings: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        return d


def print_summary_human(summary: ImportSummary) -> None:
    """Print summary in human-readable format."""
    if summary.success:
        print(summary.message)
        for warning in summary.warnings:
            print(f"warning: {warning}")
    else:
        print(f"Import of {summary.source_path} failed", file=sys.stderr)
        if summary.error:
            print(f"Error: {summary.error}", file=sys.stderr)


def print_summary_json(summary: ImportSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def _emit(summary: ImportSummary, output_json: bool) -> None:
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)


def import_cmd(args: Namespace) -> int:
    """
    Execute the import command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.runtime_config
    source = Path(args.path)
    summary = ImportSummary(source_path=str(source))

    try:
        data = source.read_bytes()
    except OSError as e:
        summary.error = f"Cannot read {source}: {e}"
        _emit(summary, args.json)
        return EXIT_RUNTIME_ERROR

    importer = Importer(
        EmployeeStore(config.storage.database_path),
        AttachmentDirectory(config.storage.resources_path),
        config.transfer,
    )

    try:
        outcome = importer.import_upload(source.name, None, data)
    except TransferError as e:
        summary.error = e.message
        _emit(summary, args.json)
        return EXIT_REJECTED
    except StoreError as e:
        logger.error(f"Import error: {e.message}")
        summary.error = "Failed to import data"
        _emit(summary, args.json)
        return EXIT_RUNTIME_ERROR

    summary.message = outcome.message
    summary.imported_docs_count = outcome.imported_docs_count
    summary.missing_docs_count = outcome.missing_docs_count
    summary.checksum_errors = outcome.checksum_errors
    summary.warnings = outcome.warnings
    summary.success = True
    _emit(summary, args.json)
    return EXIT_SUCCESS
