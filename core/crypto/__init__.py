"""
Core cryptographic utilities.

Checksums used to detect attachment corruption between export and import.
"""
from .hashing import (
    CHECKSUM_LENGTH,
    sha256,
    compute_checksum,
    is_checksum,
    verify_checksum,
)

__all__ = [
    "CHECKSUM_LENGTH",
    "sha256",
    "compute_checksum",
    "is_checksum",
    "verify_checksum",
]
