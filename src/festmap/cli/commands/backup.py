"""Backup command."""

from __future__ import annotations

import argparse

from festmap.cli.common import progress_display


async def run_backup(args: argparse.Namespace) -> str | None:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    with progress_display(verbose=args.verbose) as progress:
        coordinator = await cli.SyncCoordinator.from_config(config, progress=progress)
        backup_id = await coordinator.create_backup()

    if backup_id is None:
        print("festmap - backup skipped, canonical map unavailable")
    else:
        print(f"festmap - backup created: {backup_id} in {config.backup_dir}")
    return backup_id


__all__ = ["run_backup"]
