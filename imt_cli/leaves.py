"""
Leaf file loading for CLI commands.

A leaves file is a JSON array. Each entry becomes one leaf:
- a "0x..." string is taken as raw node bytes
- anything else is hashed with hash_canonical()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from imt.crypto.hashing import from_hex, hash_canonical
from imt.schemas.errors import ErrorCodes, IMTException


logger = logging.getLogger(__name__)


class LeavesFileError(IMTException):
    """Raised when a leaves file cannot be read or has the wrong shape."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        details: dict[str, Any] = {}
        if path is not None:
            details["path"] = str(path)
        super().__init__(message=message, code=ErrorCodes.LEAVES_FILE_ERROR, details=details)


def leaf_from_entry(entry: Any) -> bytes:
    """Turn one JSON entry into a leaf."""
    if isinstance(entry, str) and entry.startswith("0x"):
        return from_hex(entry)
    return hash_canonical(entry)


def load_leaves(path: str | Path) -> list[bytes]:
    """
    Load leaves from a JSON array file.

    Raises:
        LeavesFileError: Missing file, invalid JSON, not an array, or a
            malformed hex entry
    """
    path = Path(path)
    if not path.exists():
        raise LeavesFileError(f"Leaves file not found: {path}", path=path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LeavesFileError(f"Invalid JSON in {path}: {e}", path=path) from e

    if not isinstance(data, list):
        raise LeavesFileError(
            f"Leaves file must contain a JSON array, got {type(data).__name__}", path=path
        )

    leaves = []
    for i, entry in enumerate(data):
        try:
            leaves.append(leaf_from_entry(entry))
        except ValueError as e:
            raise LeavesFileError(f"Invalid leaf at position {i}: {e}", path=path) from e

    logger.info(f"Loaded {len(leaves)} leaves from {path}")
    return leaves
