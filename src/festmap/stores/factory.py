"""Factory for creating document stores from configuration."""

from __future__ import annotations

from festmap.contracts.config import FestMapConfig
from festmap.contracts.exceptions import ConfigError
from festmap.contracts.store import DocumentStore
from festmap.stores.github.store import GitHubContentsStore

USER_AGENT = "festmap-sync"


def create_store(config: FestMapConfig, *, token: str | None = None) -> DocumentStore:
    """Create the document store named by ``config.store.provider``.

    The returned store is an async context manager::

        async with create_store(config, token=token) as store:
            stored = await store.read()

    Raises:
        ConfigError: If the provider is unknown or a GitHub store has no token.
    """
    store_config = config.store
    if store_config.provider != "github":
        raise ConfigError(f"Unknown store provider: {store_config.provider!r}. Available: github")
    if not token:
        raise ConfigError("github store requires an access token")
    return GitHubContentsStore(
        owner=store_config.owner,
        repo=store_config.repo,
        branch=store_config.branch,
        file_path=store_config.file_path,
        token=token,
        api_url=store_config.api_url,
        timeout=store_config.timeout,
        user_agent=USER_AGENT,
    )
