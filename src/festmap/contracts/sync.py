"""Coordinator result contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from festmap.contracts.document import MapDocument, MergeStats


class FetchResult(BaseModel):
    document: MapDocument
    version_token: str | None = None
    raw: bytes = Field(default=b"", exclude=True, repr=False)


class SubmitResult(BaseModel):
    stats: MergeStats
    total_locations: int
    commit_message: str
    backup_id: str | None = None
    version_token: str | None = None
    document: MapDocument | None = Field(default=None, exclude=True, repr=False)
    dry_run: bool = False


class LocalSyncResult(BaseModel):
    updated: bool
    document: MapDocument


class ValidationReport(BaseModel):
    valid: bool
    error: str | None = None
    total_locations: int | None = None
    categories: list[str] = Field(default_factory=list)
    version: str | None = None


class BackupInfo(BaseModel):
    backup_id: str
    created_at: datetime
    size: int


class StatusReport(BaseModel):
    system: str
    timestamp: datetime
    target: str
    token_configured: bool
    backup_dir_writable: bool
    backup_count: int = 0
    last_backup: BackupInfo | None = None
    store_reachable: bool | None = None
