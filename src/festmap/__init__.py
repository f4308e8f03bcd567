"""Public API surface for festmap."""

__version__ = "1.0.0"

from festmap.auth import create_token_resolver
from festmap.config import load_config
from festmap.contracts.config import FestMapConfig, StoreConfig
from festmap.contracts.document import (
    Location,
    MapDocument,
    MergeResult,
    MergeStats,
    ValidationResult,
    canonical_json,
    count_locations,
)
from festmap.contracts.exceptions import (
    AuthenticationError,
    BackupError,
    ConfigError,
    FestMapError,
    InvalidJsonError,
    InvalidStructureError,
    MalformedInputError,
    MergeAbortedError,
    PersistError,
    UpstreamFetchError,
)
from festmap.contracts.store import BackupStore, DocumentStore, StoredDocument, WriteReceipt
from festmap.contracts.sync import FetchResult, LocalSyncResult, StatusReport, SubmitResult, ValidationReport
from festmap.coordinator import SyncCoordinator, validate_document
from festmap.intake import load_submission, parse_submission
from festmap.progress import SyncProgress
from festmap.reconcile import GeoMatcher, LocationValidator, MapStructureValidator, MergeEngine, is_same_location
from festmap.stores import GitHubContentsStore, InMemoryDocumentStore, LocalBackupStore, create_store

__all__ = [
    "AuthenticationError",
    "BackupError",
    "BackupStore",
    "ConfigError",
    "DocumentStore",
    "FestMapConfig",
    "FestMapError",
    "FetchResult",
    "GeoMatcher",
    "GitHubContentsStore",
    "InMemoryDocumentStore",
    "InvalidJsonError",
    "InvalidStructureError",
    "LocalBackupStore",
    "LocalSyncResult",
    "Location",
    "LocationValidator",
    "MalformedInputError",
    "MapDocument",
    "MapStructureValidator",
    "MergeAbortedError",
    "MergeEngine",
    "MergeResult",
    "MergeStats",
    "PersistError",
    "StatusReport",
    "StoreConfig",
    "StoredDocument",
    "SubmitResult",
    "SyncCoordinator",
    "SyncProgress",
    "UpstreamFetchError",
    "ValidationReport",
    "ValidationResult",
    "WriteReceipt",
    "__version__",
    "canonical_json",
    "count_locations",
    "create_store",
    "create_token_resolver",
    "is_same_location",
    "load_config",
    "load_submission",
    "parse_submission",
]
