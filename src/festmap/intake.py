"""Turn raw submissions into candidate map payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from festmap.contracts.config import DEFAULT_MAX_FILE_SIZE
from festmap.contracts.exceptions import MalformedInputError


def parse_submission(raw: bytes | str) -> Any:
    """Parse a raw request body or uploaded file.

    Only parsing happens here; the shape is checked by the structure validator.

    Raises:
        MalformedInputError: If *raw* is empty or not valid JSON.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedInputError("map data is not valid UTF-8") from exc
    if not raw.strip():
        raise MalformedInputError("no map data provided")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"map data is not valid JSON: {exc}") from exc


def load_submission(path: str | Path, *, max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> Any:
    """Read and parse an uploaded map file.

    Raises:
        MalformedInputError: If the file is missing, not ``.json``, too large, or not JSON.
    """
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise MalformedInputError(f"only JSON files are accepted: {file_path.name}")
    try:
        size = file_path.stat().st_size
        if size > max_file_size:
            raise MalformedInputError(f"file too large: {size} bytes (limit {max_file_size})")
        raw = file_path.read_bytes()
    except OSError as exc:
        raise MalformedInputError(f"failed to read map file: {file_path}") from exc
    return parse_submission(raw)
