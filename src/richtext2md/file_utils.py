"""File utilities for reading and writing intermediate JSON data."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from richtext2md.exceptions import ParseError, SourceNotAvailableError


def read_json(path: Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        SourceNotAvailableError: If the file does not exist.
        ParseError: If the file is not valid JSON.
    """
    if not path.is_file():
        raise SourceNotAvailableError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in {path}: {exc}") from exc


def write_json(path: Path, data: Any) -> Path:
    """Write ``data`` as indented JSON, creating parent directories.

    Returns:
        The path written to.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


async def write_json_async(path: Path, data: Any) -> Path:
    """Write a JSON file asynchronously using a thread pool."""
    return await asyncio.to_thread(write_json, path, data)
