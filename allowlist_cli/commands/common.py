"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.schemas.entries import MerkleTreeType, parse_tree_type

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def load_entries_file(
    path: str | Path,
    tree_type: str | None = None,
) -> tuple[MerkleTreeType, list[Any]]:
    """
    Read an entries file.

    Accepts either a bare JSON list of entries or an object
    {"type": ..., "data": [...]}. An explicit tree_type wins over the
    file's own; the default is recipientAmount.

    Raises:
        FileNotFoundError: path does not exist
        ValueError: the file is neither a list nor an object with "data"
        InvalidTypeError: unsupported tree type
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")

    with open(path) as f:
        payload = json.load(f)

    file_type = None
    if isinstance(payload, dict):
        if "data" not in payload:
            raise ValueError(f"{path}: expected a list of entries or an object with 'data'")
        file_type = payload.get("type")
        entries = payload["data"]
    else:
        entries = payload

    if not isinstance(entries, list):
        raise ValueError(f"{path}: entries must be a JSON list")

    resolved = parse_tree_type(tree_type or file_type or MerkleTreeType.RECIPIENT_AMOUNT)
    return resolved, entries


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))
