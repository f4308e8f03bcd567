"""Status command."""

from __future__ import annotations

import argparse

from festmap.contracts.sync import StatusReport


def _yes_no(value: bool | None) -> str:
    if value is None:
        return "not checked"
    return "yes" if value else "no"


def format_status(report: StatusReport) -> str:
    lines = [
        "",
        f"{report.system} - status",
        "",
        f"  Time:            {report.timestamp.isoformat(timespec='seconds')}",
        f"  Target:          {report.target}",
        f"  Token:           {'configured' if report.token_configured else 'missing'}",
        f"  Store reachable: {_yes_no(report.store_reachable)}",
        f"  Backups dir:     {'writable' if report.backup_dir_writable else 'not writable'}",
        f"  Backups:         {report.backup_count}",
    ]
    if report.last_backup is not None:
        latest = report.last_backup
        lines.append(
            f"  Last backup:     {latest.backup_id} ({latest.size} bytes, {latest.created_at.isoformat(timespec='seconds')})"
        )
    lines.append("")
    return "\n".join(lines)


async def run_status(args: argparse.Namespace) -> StatusReport:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    coordinator = await cli.SyncCoordinator.from_config(config, require_token=False)
    report = await coordinator.status()
    print(format_status(report))
    return report


__all__ = ["format_status", "run_status"]
