"""Fetch command."""

from __future__ import annotations

import argparse
from pathlib import Path

from festmap.cli.common import format_comma_or_none, progress_display
from festmap.contracts.sync import FetchResult
from festmap.persistence import write_cached_document


def format_fetch_summary(result: FetchResult, *, output: str | None = None) -> str:
    document = result.document
    lines = [
        "",
        "festmap - fetch complete",
        "",
        f"  Version:     {document.version if document.version is not None else 'unknown'}",
        f"  Updated:     {document.last_updated or 'unknown'}",
        f"  Revision:    {result.version_token or 'none'}",
        f"  Locations:   {document.total_locations()}",
        f"  Categories:  {format_comma_or_none(document.categories)}",
    ]
    if output:
        lines.append(f"  Written to:  {output}")
    lines.append("")
    return "\n".join(lines)


async def run_fetch(args: argparse.Namespace) -> FetchResult:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    with progress_display(verbose=args.verbose) as progress:
        coordinator = await cli.SyncCoordinator.from_config(config, progress=progress)
        result = await coordinator.fetch_canonical()

    if args.output:
        write_cached_document(Path(args.output), result.document)

    print(format_fetch_summary(result, output=args.output))
    return result


__all__ = ["format_fetch_summary", "run_fetch"]
