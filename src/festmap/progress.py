"""Observer hooks for the phases of a coordinator run.

A submission walks through Fetch, Backup, Merge and Persist in that order;
``fetch``, ``sync`` and ``backup`` use a subset. Merge is the only phase with a
known size (one step per incoming location record).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SyncProgress(ABC):
    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """Called when *phase* begins; *total* is the number of steps when known."""

    @abstractmethod
    def item_done(self, phase: str) -> None:
        """Called after each step of a sized phase."""

    @abstractmethod
    def phase_done(self, phase: str) -> None:
        """Called when *phase* completed."""

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """Called when *phase* failed. A failed Backup during submit is skipped, anything else is re-raised."""


class NullSyncProgress(SyncProgress):
    """Discards every event. Used when the caller passes no observer."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
