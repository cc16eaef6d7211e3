"""
Database Module (JSON Documents)

The Bookstore API persists its data in two JSON documents:

    data/users.json  ->  {"users": [...]}
    data/books.json  ->  {"books": [...]}

This module is the storage gateway: it reads and writes a WHOLE document.
There are no partial or ranged updates. Every caller reads the full
document, changes it in memory and writes the full document back.

Failure Modes
=============
- File missing: FileNotFoundError (the record store creates it empty)
- File corrupted: DocumentDecodeError (e.g. a crash in the middle of a write
  left truncated content behind). Corrupted documents are never repaired
  automatically; the API reports a server-side failure instead.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class DocumentDecodeError(Exception):
    """Raised when a document's content is not a valid collection document."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not decode {self.path}: {reason}")


def read_json_file(path: Path) -> dict[str, Any]:
    """
    Read and parse the full contents of a JSON document.

    Args:
        path: Location of the document

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If the document does not exist
        DocumentDecodeError: If the content is not a UTF-8 encoded JSON object
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.loads(f.read())
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DocumentDecodeError(path, str(e)) from e

    if not isinstance(data, dict):
        raise DocumentDecodeError(path, "top-level value is not an object")

    return data


def write_json_file(path: Path, content: dict[str, Any]) -> None:
    """
    Serialize a document and overwrite the file with it.

    The parent directory is created if needed. The file is overwritten
    in place (no temp file + rename).

    Args:
        path: Location of the document
        content: The full document to store
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(content, f, indent=2, ensure_ascii=False)

    logger.debug(f"Wrote document {path}")
