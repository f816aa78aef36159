"""
CLI command modules.
"""

from notes_cli.commands import export, import_data

__all__ = ["export", "import_data"]
