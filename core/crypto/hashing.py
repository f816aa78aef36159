"""
Checksum Utilities

SHA-256 checksums for attachment files travelling inside an archive.

This module provides:
- SHA-256 hashing for raw bytes
- Lowercase hex checksums for attachment references
- Checksum comparison for archive import

Determinism Notes:
- Always hash the exact file bytes, no normalization of any kind
- The same bytes produce the same 64-character digest on every machine
"""
from __future__ import annotations

import hashlib
import hmac
import re

CHECKSUM_LENGTH = 64

_CHECKSUM_RE = re.compile(r"[0-9a-f]{64}")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def compute_checksum(data: bytes) -> str:
    """
    Compute the checksum recorded on an attachment reference.

    Args:
        data: Exact bytes of the attachment file

    Returns:
        Lowercase hex SHA-256 digest (64 characters)
    """
    return sha256(data).hex()


def is_checksum(value: object) -> bool:
    """Check whether value looks like a lowercase hex SHA-256 digest."""
    return isinstance(value, str) and bool(_CHECKSUM_RE.fullmatch(value))


def verify_checksum(data: bytes, expected: str) -> tuple[bool, str]:
    """
    Recompute the checksum of data and compare it with expected.

    Args:
        data: Bytes to check
        expected: Recorded checksum (lowercase hex, compared exactly)

    Returns:
        Tuple of (matches, actual_checksum)
    """
    actual = compute_checksum(data)
    if not is_checksum(expected):
        return False, actual
    return hmac.compare_digest(actual, expected), actual


__all__ = [
    "CHECKSUM_LENGTH",
    "sha256",
    "compute_checksum",
    "is_checksum",
    "verify_checksum",
]
