"""Document and backup store implementations."""

from festmap.stores.backups import LocalBackupStore, backup_label
from festmap.stores.factory import create_store
from festmap.stores.github import GitHubContentsStore
from festmap.stores.memory import InMemoryDocumentStore

__all__ = ["GitHubContentsStore", "InMemoryDocumentStore", "LocalBackupStore", "backup_label", "create_store"]
