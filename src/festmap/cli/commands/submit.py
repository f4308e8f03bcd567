"""Submit command."""

from __future__ import annotations

import argparse

from festmap.cli.common import progress_display
from festmap.contracts.sync import SubmitResult
from festmap.intake import load_submission


def format_submit_summary(result: SubmitResult) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"festmap - submission merged ({mode})",
        "",
        f"  New:         {result.stats.new_locations}",
        f"  Updated:     {result.stats.updated_locations}",
        f"  Total:       {result.total_locations} locations",
        f"  Commit:      {result.commit_message}",
        f"  Backup:      {result.backup_id or 'none'}",
    ]
    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")
    else:
        lines.append(f"  Revision:    {result.version_token or 'unknown'}")
    lines.append("")
    return "\n".join(lines)


async def run_submit(args: argparse.Namespace) -> SubmitResult:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    payload = load_submission(args.file, max_file_size=config.max_file_size)
    with progress_display(verbose=args.verbose) as progress:
        coordinator = await cli.SyncCoordinator.from_config(config, progress=progress)
        result = await coordinator.submit(payload, dry_run=args.dry_run)

    print(format_submit_summary(result))
    return result


__all__ = ["format_submit_summary", "run_submit"]
