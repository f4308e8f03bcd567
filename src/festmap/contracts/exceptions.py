"""Exception hierarchy for festmap.

All festmap exceptions inherit from :class:`FestMapError`, so callers can catch
every library failure with one ``except`` clause while still handling specific
failure modes (bad input, upstream outage, rejected write) individually.
"""

from __future__ import annotations


class FestMapError(Exception):
    """Base exception for all festmap errors."""


class ConfigError(FestMapError):
    """Configuration loading or validation failure."""


class AuthenticationError(FestMapError):
    """No usable credential for the remote document store."""


class MalformedInputError(FestMapError):
    """Submission is not parseable as structured data."""


class InvalidStructureError(FestMapError):
    """Document failed map structure validation.

    Attributes:
        error: The first validation failure, naming the offending path and rule.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Invalid map structure: {error}")


class UpstreamFetchError(FestMapError):
    """Remote store unreachable or returned a non-success response."""


class InvalidJsonError(UpstreamFetchError):
    """Remote store returned content that is not parseable JSON."""


class MergeAbortedError(FestMapError):
    """The canonical document could not be obtained, so no merge was attempted."""


class PersistError(FestMapError):
    """Remote store rejected the write of the merged document."""

    def __init__(self, message: str, *, status_code: int | None = None, stale: bool = False) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.stale = stale


class BackupError(FestMapError):
    """Local backup snapshot could not be written, listed or pruned."""
