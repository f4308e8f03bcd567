"""Store adapter contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from types import TracebackType


@dataclass(frozen=True)
class StoredDocument:
    """Raw content of the canonical document and the revision it was read at.

    ``version_token`` is ``None`` when the document does not exist yet.
    """

    content: bytes
    version_token: str | None


@dataclass(frozen=True)
class WriteReceipt:
    version_token: str | None
    commit_sha: str | None = None
    commit_url: str | None = None


@dataclass(frozen=True)
class BackupEntry:
    backup_id: str
    path: Path
    created_at: datetime
    size: int


class DocumentStore(ABC):
    """Remote, version-controlled home of the canonical document."""

    @abstractmethod
    async def __aenter__(self) -> DocumentStore: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def read(self) -> StoredDocument:
        """Fetch the current document.

        Raises:
            UpstreamFetchError: If the store is unreachable or answers with a failure.
        """

    @abstractmethod
    async def write(self, content: bytes, *, expected_version: str | None, message: str) -> WriteReceipt:
        """Commit *content*, conditioned on the store still being at *expected_version*.

        Raises:
            PersistError: If the store rejects the write.
        """


class BackupStore(ABC):
    """Write-once local snapshots of the canonical document."""

    @abstractmethod
    def save(self, content: bytes, label: str) -> str:
        """Persist *content* as a new snapshot and return its backup id."""

    @abstractmethod
    def list_by_recency(self) -> list[BackupEntry]:
        """Return snapshots, newest first."""

    @abstractmethod
    def delete_oldest(self, *, beyond: int) -> list[str]:
        """Delete every snapshot except the newest *beyond* and return the deleted ids."""
