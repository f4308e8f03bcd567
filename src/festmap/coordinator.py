"""Composition root: fetch, validate, merge and commit the festival map."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from festmap.auth import create_token_resolver
from festmap.contracts.config import FestMapConfig
from festmap.contracts.document import MapDocument, MergeStats, canonical_json, count_locations, render_document
from festmap.contracts.exceptions import (
    AuthenticationError,
    BackupError,
    FestMapError,
    InvalidJsonError,
    InvalidStructureError,
    MergeAbortedError,
    UpstreamFetchError,
)
from festmap.contracts.store import BackupStore, DocumentStore, StoredDocument
from festmap.contracts.sync import (
    BackupInfo,
    FetchResult,
    LocalSyncResult,
    StatusReport,
    SubmitResult,
    ValidationReport,
)
from festmap.progress import NullSyncProgress, SyncProgress
from festmap.reconcile import MapStructureValidator, MergeEngine
from festmap.stores import InMemoryDocumentStore, LocalBackupStore, backup_label, create_store

_LOG = logging.getLogger(__name__)

SYSTEM_NAME = "festmap sync"


def commit_message(stats: MergeStats) -> str:
    return f"Auto-update: +{stats.new_locations} new, ~{stats.updated_locations} updated locations"


def document_from_payload(payload: Mapping[str, Any]) -> MapDocument:
    """Build a MapDocument from a payload that already passed structure validation."""
    try:
        return MapDocument.from_payload(payload)
    except ValidationError as exc:
        raise InvalidStructureError(str(exc)) from exc


def validate_document(payload: Any, *, validator: MapStructureValidator | None = None) -> ValidationReport:
    """Validate a candidate document and summarize it."""
    result = (validator or MapStructureValidator()).validate(payload)
    if not result.valid:
        return ValidationReport(valid=False, error=result.error)
    version = payload.get("version")
    return ValidationReport(
        valid=True,
        total_locations=count_locations(payload),
        categories=list(payload["locations"]),
        version=str(version) if version is not None else None,
    )


def _is_writable(path: Path) -> bool:
    candidate = path
    while not candidate.exists():
        if candidate.parent == candidate:
            return False
        candidate = candidate.parent
    return candidate.is_dir() and os.access(candidate, os.W_OK)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncCoordinator:
    """Orchestrates fetch-compare-write cycles against the remote store.

    Submissions are not serialized here. Two submissions that read the same
    canonical revision race; the loser's write is rejected by the store's
    version token check (``PersistError``) and nothing is merged for it.
    """

    def __init__(
        self,
        *,
        store: DocumentStore | None,
        backups: BackupStore,
        config: FestMapConfig,
        merge_engine: MergeEngine | None = None,
        validator: MapStructureValidator | None = None,
        progress: SyncProgress | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._backups = backups
        self._config = config
        self._clock = clock or _utcnow
        self._merge_engine = merge_engine or MergeEngine(clock=self._clock)
        self._validator = validator or MapStructureValidator()
        self._progress = progress or NullSyncProgress()

    @classmethod
    async def from_config(
        cls,
        config: FestMapConfig,
        *,
        progress: SyncProgress | None = None,
        require_token: bool = True,
    ) -> SyncCoordinator:
        try:
            token: str | None = await create_token_resolver(config).resolve()
        except AuthenticationError:
            if require_token:
                raise
            token = None
        store = create_store(config, token=token) if token else None
        return cls(store=store, backups=LocalBackupStore(config.backup_dir), config=config, progress=progress)

    async def fetch_canonical(self) -> FetchResult:
        """Retrieve and validate the canonical document.

        Raises:
            UpstreamFetchError: The store could not be read.
            InvalidJsonError: The stored content is not JSON.
            InvalidStructureError: The stored document fails structure validation.
        """
        store = self._require_store()
        self._progress.phase_start("Fetch")
        try:
            async with store:
                stored = await store.read()
            document = self._decode(stored)
        except (UpstreamFetchError, InvalidStructureError) as exc:
            self._progress.phase_error("Fetch", exc)
            raise
        self._progress.phase_done("Fetch")
        _LOG.info(
            "Fetched canonical document: %d locations in %s",
            document.total_locations(),
            ", ".join(document.categories) or "no categories",
        )
        return FetchResult(document=document, version_token=stored.version_token, raw=stored.content)

    async def submit(self, incoming: MapDocument | Mapping[str, Any], *, dry_run: bool = False) -> SubmitResult:
        """Validate, back up, merge and commit an incoming map document.

        With *dry_run* the merge runs against the real canonical document but
        is committed to a throwaway in-memory copy, and no backup is taken.

        Raises:
            InvalidStructureError: *incoming* fails structure validation.
            MergeAbortedError: The canonical document could not be obtained.
            PersistError: The store rejected the merged document.
        """
        payload = incoming.to_payload() if isinstance(incoming, MapDocument) else incoming
        validation = self._validator.validate(payload)
        if not validation.valid:
            raise InvalidStructureError(validation.error or "unknown error")
        incoming_document = document_from_payload(payload)

        store = self._require_store()
        async with store:
            self._progress.phase_start("Fetch")
            try:
                stored = await store.read()
                canonical = self._decode(stored)
            except (UpstreamFetchError, InvalidStructureError) as exc:
                self._progress.phase_error("Fetch", exc)
                _LOG.error("Merge aborted: %s", exc)
                raise MergeAbortedError(f"Failed to fetch canonical document: {exc}") from exc
            self._progress.phase_done("Fetch")

            backup_id = None if dry_run else self._take_backup(stored.content)

            self._progress.phase_start("Merge", total=incoming_document.total_locations())
            merged = self._merge_engine.merge(
                canonical,
                incoming_document,
                on_record=lambda: self._progress.item_done("Merge"),
            )
            self._progress.phase_done("Merge")

            message = commit_message(merged.stats)
            target: DocumentStore
            if dry_run:
                preview = InMemoryDocumentStore(stored.content)
                target, expected_version = preview, preview.version_token
            else:
                target, expected_version = store, stored.version_token
            self._progress.phase_start("Persist")
            try:
                receipt = await target.write(
                    render_document(merged.document),
                    expected_version=expected_version,
                    message=message,
                )
            except FestMapError as exc:
                self._progress.phase_error("Persist", exc)
                raise
            self._progress.phase_done("Persist")

        _LOG.info(
            "Processed submission: backup=%s new=%d updated=%d",
            backup_id,
            merged.stats.new_locations,
            merged.stats.updated_locations,
        )
        return SubmitResult(
            stats=merged.stats,
            total_locations=merged.document.total_locations(),
            commit_message=message,
            backup_id=backup_id,
            version_token=receipt.version_token,
            document=merged.document,
            dry_run=dry_run,
        )

    async def sync_local(self, cached: MapDocument | None) -> LocalSyncResult:
        """Report whether the canonical document differs from a cached copy."""
        fetched = await self.fetch_canonical()
        updated = cached is None or canonical_json(cached) != canonical_json(fetched.document)
        _LOG.info("Sync completed: %s", "data updated" if updated else "no changes")
        return LocalSyncResult(updated=updated, document=fetched.document)

    async def create_backup(self) -> str | None:
        """Snapshot the raw remote document and prune old snapshots.

        Returns ``None`` when the remote document could not be read.

        Raises:
            BackupError: The snapshot could not be written or pruned.
        """
        store = self._require_store()
        self._progress.phase_start("Backup")
        try:
            async with store:
                stored = await store.read()
        except UpstreamFetchError as exc:
            self._progress.phase_error("Backup", exc)
            _LOG.error("Backup skipped, remote document unavailable: %s", exc)
            return None
        try:
            backup_id = self._backups.save(stored.content, backup_label(self._clock()))
            self._backups.delete_oldest(beyond=self._config.backup_keep)
        except BackupError as exc:
            self._progress.phase_error("Backup", exc)
            raise
        self._progress.phase_done("Backup")
        return backup_id

    async def status(self) -> StatusReport:
        last_backup: BackupInfo | None = None
        backup_count = 0
        try:
            entries = self._backups.list_by_recency()
        except BackupError as exc:
            _LOG.warning("Could not list backups: %s", exc)
            entries = []
        if entries:
            backup_count = len(entries)
            latest = entries[0]
            last_backup = BackupInfo(backup_id=latest.backup_id, created_at=latest.created_at, size=latest.size)

        store_reachable: bool | None = None
        if self._store is not None:
            try:
                async with self._store:
                    await self._store.read()
                store_reachable = True
            except UpstreamFetchError as exc:
                _LOG.warning("Store probe failed: %s", exc)
                store_reachable = False

        return StatusReport(
            system=SYSTEM_NAME,
            timestamp=self._clock(),
            target=self._config.store.target,
            token_configured=self._store is not None,
            backup_dir_writable=_is_writable(self._config.backup_dir),
            backup_count=backup_count,
            last_backup=last_backup,
            store_reachable=store_reachable,
        )

    def _take_backup(self, content: bytes) -> str | None:
        self._progress.phase_start("Backup")
        try:
            backup_id = self._backups.save(content, backup_label(self._clock()))
            self._backups.delete_oldest(beyond=self._config.backup_keep)
        except BackupError as exc:
            self._progress.phase_error("Backup", exc)
            _LOG.warning("Backup failed, continuing without one: %s", exc)
            return None
        self._progress.phase_done("Backup")
        return backup_id

    def _decode(self, stored: StoredDocument) -> MapDocument:
        try:
            payload: Any = json.loads(stored.content.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InvalidJsonError(f"Invalid JSON data from store: {exc}") from exc
        validation = self._validator.validate(payload)
        if not validation.valid:
            raise InvalidStructureError(validation.error or "unknown error")
        return document_from_payload(payload)

    def _require_store(self) -> DocumentStore:
        if self._store is None:
            raise AuthenticationError("No store credential configured; set GITHUB_TOKEN or use token auth")
        return self._store
