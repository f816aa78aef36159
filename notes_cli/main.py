"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m notes_cli export [--format json|zip] --out PATH [--json]
    python -m notes_cli import PATH [--json]
    python -m notes_cli config --init [--path PATH]
    python -m notes_cli config --show [--path PATH]

Environment Variables:
    NOTES_DATA_DIR                  Base directory for dataset and attachments
    NOTES_DATABASE_FILE             Dataset file name (default: employees.json)
    NOTES_RESOURCES_DIR             Attachment directory name (default: resources)
    NOTES_MAX_UPLOAD_BYTES          Upload size limit in bytes
    NOTES_PRUNE_CHECKSUM_FAILURES   Drop references to corrupt attachments on import
    NOTES_LOG_LEVEL                 Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from notes_cli.commands import export, import_data
from core.config.runtime import get_default_config_template, load_runtime_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="notes",
        description="Employee Notes CLI - Export and import the employee dataset.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 2.0.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./notes.json or ~/.config/employee-notes/config.json)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Data directory holding the dataset and attachments (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- export command ---
    export_parser = subparsers.add_parser(
        "export",
        help="Export the dataset",
        description="Write the dataset as a JSON document or as an archive with its attachments.",
    )
    export_parser.add_argument(
        "--format", "-f",
        type=str,
        choices=["json", "zip"],
        default="json",
        help="Export format (default: json)",
    )
    export_parser.add_argument(
        "--out", "-o",
        type=str,
        required=True,
        help="Output file path",
    )
    export_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    export_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )
    export_parser.set_defaults(func=export.export_cmd)

    # --- import command ---
    import_parser = subparsers.add_parser(
        "import",
        help="Replace the dataset from an archive or JSON document",
        description="Validate an archive (.zip) or dataset document (.json) and replace the stored dataset.",
    )
    import_parser.add_argument(
        "path",
        type=str,
        help="Path to the archive or dataset document",
    )
    import_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    import_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )
    import_parser.set_defaults(func=import_data.import_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="notes.json",
        help="Path for the file written by --init (default: notes.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (NOTES_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: notes config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=input rejected)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.data_dir is not None:
        config.storage.data_dir = args.data_dir

    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
