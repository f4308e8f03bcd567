"""GitHub store adapter."""

from festmap.stores.github.store import GitHubContentsStore

__all__ = ["GitHubContentsStore"]
