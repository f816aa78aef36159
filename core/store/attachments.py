"""
Attachment Directory

Flat directory of attachment files keyed by stored filename.
"""

from __future__ import annotations

from pathlib import Path


def is_safe_filename(filename: str) -> bool:
    """A stored filename must be a single, non-special path component."""
    if not filename or filename in (".", ".."):
        return False
    return not any(sep in filename for sep in ("/", "\\", "\x00"))


class AttachmentDirectory:
    """Read/write access to stored attachment files."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        if not is_safe_filename(filename):
            raise ValueError(f"Unsafe attachment filename: {filename!r}")
        return self.root / filename

    def ensure_directory(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def exists(self, filename: str) -> bool:
        if not is_safe_filename(filename):
            return False
        return (self.root / filename).is_file()

    def read(self, filename: str) -> bytes:
        return self.path_for(filename).read_bytes()

    def write(self, filename: str, data: bytes) -> None:
        self.path_for(filename).write_bytes(data)

    def delete(self, filename: str) -> bool:
        """Remove a stored file. Returns False if it was not there."""
        path = self.path_for(filename)
        if not path.exists():
            return False
        path.unlink()
        return True


__all__ = [
    "AttachmentDirectory",
    "is_safe_filename",
]
