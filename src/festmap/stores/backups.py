"""Local, write-once backup snapshots."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from festmap.contracts.exceptions import BackupError
from festmap.contracts.store import BackupEntry, BackupStore

_LOG = logging.getLogger(__name__)

BACKUP_PREFIX = "backup_"


def backup_label(moment: datetime) -> str:
    return f"{BACKUP_PREFIX}{moment.strftime('%Y-%m-%d_%H-%M-%S')}"


class LocalBackupStore(BackupStore):
    """Keeps snapshots as ``backup_<timestamp>.json`` files in one directory.

    Existing snapshots are never overwritten: a label that is already taken gets
    a numeric suffix.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, content: bytes, label: str) -> str:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            backup_id = label
            suffix = 0
            while True:
                path = self._directory / f"{backup_id}.json"
                try:
                    with path.open("xb") as handle:
                        handle.write(content)
                    break
                except FileExistsError:
                    suffix += 1
                    backup_id = f"{label}_{suffix}"
        except OSError as exc:
            raise BackupError(f"failed to write backup {label} in {self._directory}") from exc
        _LOG.info("Backup created: %s", backup_id)
        return backup_id

    def list_by_recency(self) -> list[BackupEntry]:
        if not self._directory.exists():
            return []
        entries: list[BackupEntry] = []
        try:
            for path in self._directory.glob(f"{BACKUP_PREFIX}*.json"):
                stat = path.stat()
                entries.append(
                    BackupEntry(
                        backup_id=path.stem,
                        path=path,
                        created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                        size=stat.st_size,
                    )
                )
        except OSError as exc:
            raise BackupError(f"failed to list backups in {self._directory}") from exc
        entries.sort(key=lambda entry: (entry.created_at, entry.backup_id), reverse=True)
        return entries

    def delete_oldest(self, *, beyond: int) -> list[str]:
        stale = self.list_by_recency()[max(beyond, 0) :]
        deleted: list[str] = []
        for entry in stale:
            try:
                entry.path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise BackupError(f"failed to delete backup {entry.backup_id}") from exc
            deleted.append(entry.backup_id)
        if deleted:
            _LOG.debug("Pruned %d old backups", len(deleted))
        return deleted
