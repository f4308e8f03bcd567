"""In-memory document store."""

from __future__ import annotations

import hashlib
from types import TracebackType

from festmap.contracts.exceptions import PersistError, UpstreamFetchError
from festmap.contracts.store import DocumentStore, StoredDocument, WriteReceipt


def content_token(content: bytes) -> str:
    """Git-style blob sha of *content*."""
    header = f"blob {len(content)}\0".encode()
    return hashlib.sha1(header + content).hexdigest()


class InMemoryDocumentStore(DocumentStore):
    """Store that keeps the canonical document in memory.

    Writes are checked against the version token the same way the GitHub
    contents API checks blob shas, so stale writes are rejected.
    """

    def __init__(self, content: bytes | None = None) -> None:
        self._content = content
        self.commits: list[tuple[str, bytes]] = []

    async def __aenter__(self) -> InMemoryDocumentStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @property
    def content(self) -> bytes | None:
        return self._content

    @property
    def version_token(self) -> str | None:
        if self._content is None:
            return None
        return content_token(self._content)

    async def read(self) -> StoredDocument:
        if self._content is None:
            raise UpstreamFetchError("document does not exist in memory store")
        return StoredDocument(content=self._content, version_token=self.version_token)

    async def write(self, content: bytes, *, expected_version: str | None, message: str) -> WriteReceipt:
        if expected_version != self.version_token:
            raise PersistError(
                f"stale version token: store is at {self.version_token}, write expected {expected_version}",
                status_code=409,
                stale=True,
            )
        self._content = content
        self.commits.append((message, content))
        token = self.version_token
        return WriteReceipt(version_token=token, commit_sha=f"memory-{len(self.commits)}")
