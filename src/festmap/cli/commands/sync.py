"""Sync command."""

from __future__ import annotations

import argparse

from festmap.cli.common import progress_display
from festmap.contracts.sync import LocalSyncResult
from festmap.persistence import load_cached_document, write_cached_document


async def run_sync(args: argparse.Namespace) -> LocalSyncResult:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    cached = load_cached_document(config.cache_path)
    with progress_display(verbose=args.verbose) as progress:
        coordinator = await cli.SyncCoordinator.from_config(config, progress=progress)
        result = await coordinator.sync_local(cached)

    if result.updated:
        write_cached_document(config.cache_path, result.document)
        print(f"festmap - data synchronized to {config.cache_path}")
    else:
        print("festmap - data already up to date")
    return result


__all__ = ["run_sync"]
