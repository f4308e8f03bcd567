"""Shared CLI helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from festmap.cli.progress.rich import RichSyncProgress
from festmap.progress import SyncProgress


def format_comma_or_none(values: list[str]) -> str:
    if not values:
        return "none"
    return ", ".join(values)


@contextmanager
def progress_display(*, verbose: bool) -> Iterator[SyncProgress | None]:
    """Yield a Rich progress display, or ``None`` when debug logging is on."""
    if verbose:
        yield None
        return
    with RichSyncProgress() as progress:
        yield progress
