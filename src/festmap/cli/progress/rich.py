"""Terminal progress for ``fetch``, ``submit``, ``sync`` and ``backup``."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from festmap.progress import SyncProgress


class RichSyncProgress(SyncProgress):
    """One Rich task row per coordinator phase, drawn on stderr.

    Fetch, Backup and Persist are single network or disk operations and show a
    spinner; Merge counts incoming records. A failed phase keeps its row with a
    red mark so a skipped backup stays visible after the submit finishes::

        with RichSyncProgress() as progress:
            coordinator = await SyncCoordinator.from_config(config, progress=progress)
            await coordinator.submit(payload)
    """

    _PHASE_LABELS: ClassVar[dict[str, str]] = {
        "Fetch": "[cyan]Fetch map[/]",
        "Backup": "[yellow]Backup[/]",
        "Merge": "[green]Merge records[/]",
        "Persist": "[magenta]Commit[/]",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>16}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
        )
        self._tasks: dict[str, RichTaskID] = {}

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self._tasks[phase] = self._progress.add_task(self._PHASE_LABELS.get(phase, phase), total=total)

    def item_done(self, phase: str) -> None:
        if phase in self._tasks:
            self._progress.advance(self._tasks[phase])

    def phase_done(self, phase: str) -> None:
        task_id = self._tasks.get(phase)
        if task_id is None:
            return
        total = self._progress.tasks[task_id].total
        # Unsized phases are drawn as one completed step.
        self._progress.update(task_id, total=total or 1, completed=total or 1)

    def phase_error(self, phase: str, error: BaseException) -> None:
        task_id = self._tasks.get(phase)
        if task_id is not None:
            self._progress.update(task_id, description=f"[red]✗ {phase}[/red]")
