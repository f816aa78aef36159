"""API route handlers."""

from api.routes import health, import_export, employees, files

__all__ = ["health", "import_export", "employees", "files"]
