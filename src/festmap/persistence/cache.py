"""Local copy of the canonical document kept by ``sync``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from festmap.contracts.document import MapDocument, render_document
from festmap.contracts.exceptions import BackupError

_LOG = logging.getLogger(__name__)


def load_cached_document(path: Path) -> MapDocument | None:
    """Return the cached document, or ``None`` when absent or unreadable.

    An unreadable cache is treated as absent so the next sync replaces it.
    """
    if not path.exists():
        return None
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
        return MapDocument.from_payload(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        _LOG.warning("Ignoring unreadable local cache %s: %s", path, exc)
        return None


def write_cached_document(path: Path, document: MapDocument) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(render_document(document))
    except OSError as exc:
        raise BackupError(f"failed to write local cache: {path}") from exc
