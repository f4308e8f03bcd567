"""Contract exports."""

from festmap.contracts.config import FestMapConfig, StoreConfig
from festmap.contracts.document import Location, MapDocument, MergeResult, MergeStats, ValidationResult
from festmap.contracts.store import BackupEntry, BackupStore, DocumentStore, StoredDocument, WriteReceipt
from festmap.contracts.sync import FetchResult, LocalSyncResult, StatusReport, SubmitResult, ValidationReport

__all__ = [
    "BackupEntry",
    "BackupStore",
    "DocumentStore",
    "FestMapConfig",
    "FetchResult",
    "LocalSyncResult",
    "Location",
    "MapDocument",
    "MergeResult",
    "MergeStats",
    "StatusReport",
    "StoreConfig",
    "StoredDocument",
    "SubmitResult",
    "ValidationReport",
    "ValidationResult",
    "WriteReceipt",
]
