"""CLI progress displays."""

from festmap.cli.progress.rich import RichSyncProgress

__all__ = ["RichSyncProgress"]
