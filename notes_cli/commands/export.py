"""
CLI Export Command

Write the dataset (or a full archive) from the configured data directory.

Usage:
    notes export --format zip --out backup.zip
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any

from archive.exporter import Exporter
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
class ExportSummary:
    """Summary of an export for CLI output."""
    format: str = ""
    output_path: str = ""
    employee_count: int = 0
    document_count: int = 0
    warnings: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["error"] is None:
            del d["error"]
        return d


def print_summary_human(summary: ExportSummary) -> None:
    """Print summary in human-readable format."""
    if summary.success:
        print(f"Exported {summary.format}: {summary.output_path}")
        print(f"employees: {summary.employee_count}")
        if summary.format == "zip":
            print(f"documents: {summary.document_count}")
        for warning in summary.warnings:
            print(f"warning: {warning}")
    else:
        print("Export failed", file=sys.stderr)
        if summary.error:
            print(f"Error: {summary.error}", file=sys.stderr)


def print_summary_json(summary: ExportSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def _emit(summary: ExportSummary, output_json: bool) -> None:
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)


def export_cmd(args: Namespace) -> int:
    """
    Execute the export command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = args.runtime_config
    out_path = Path(args.out)
    summary = ExportSummary(format=args.format, output_path=str(out_path))

    exporter = Exporter(
        EmployeeStore(config.storage.database_path),
        AttachmentDirectory(config.storage.resources_path),
    )

    try:
        result = exporter.export(args.format)
    except TransferError as e:
        summary.error = e.message
        _emit(summary, args.json)
        return EXIT_REJECTED
    except StoreError as e:
        logger.error(f"Export error: {e.message}")
        summary.error = "Failed to export data"
        _emit(summary, args.json)
        return EXIT_RUNTIME_ERROR

    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(result.content)
    except OSError as e:
        summary.error = f"Failed to write {out_path}: {e}"
        _emit(summary, args.json)
        return EXIT_RUNTIME_ERROR

    summary.employee_count = result.employee_count
    summary.document_count = result.document_count
    summary.warnings = result.warnings
    summary.success = True
    _emit(summary, args.json)
    return EXIT_SUCCESS
