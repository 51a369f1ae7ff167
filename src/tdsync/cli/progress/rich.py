"""Rich progress bar for sync passes."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from tdsync.engine import PHASE_PULL, PHASE_PUSH, PHASE_PUSH_ONE
from tdsync.engine.progress import SyncProgress

_PHASE_STYLES = {PHASE_PULL: "cyan", PHASE_PUSH: "green", PHASE_PUSH_ONE: "green"}


@dataclass
class _PhaseTask:
    task_id: TaskID
    failed: int = 0


class RichSyncProgress(SyncProgress):
    """One bar per phase, with a running count of issues that produced sync errors.

    Use as a context manager around the engine call::

        with RichSyncProgress() as progress:
            result = await SyncEngine(provider, ..., progress=progress).push()
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("{task.fields[status]}"),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._phases: dict[str, _PhaseTask] = {}

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

    def failures(self, phase: str) -> int:
        phase_task = self._phases.get(phase)
        return phase_task.failed if phase_task else 0

    def phase_start(self, phase: str, total: int | None = None) -> None:
        phase_task = self._phases.get(phase)
        if phase_task is not None:
            self._progress.update(phase_task.task_id, total=total)
            return
        style = _PHASE_STYLES.get(phase, "white")
        task_id = self._progress.add_task(f"[{style}]{phase}[/]", total=total, status="")
        self._phases[phase] = _PhaseTask(task_id)

    def item_done(self, phase: str, *, failed: bool = False) -> None:
        phase_task = self._phases.get(phase)
        if phase_task is None:
            return
        self._progress.advance(phase_task.task_id)
        if failed:
            phase_task.failed += 1
            self._progress.update(phase_task.task_id, status=f"[red]{phase_task.failed} failed[/]")

    def phase_done(self, phase: str) -> None:
        phase_task = self._phases.get(phase)
        if phase_task is None:
            return
        task = self._progress.tasks[phase_task.task_id]
        # An empty pass never learns a total; show it as complete.
        total = task.total if task.total else 1
        self._progress.update(phase_task.task_id, total=total, completed=total)

    def phase_error(self, phase: str, error: BaseException) -> None:
        phase_task = self._phases.get(phase)
        if phase_task is None:
            return
        status = "[yellow]cancelled[/]" if isinstance(error, asyncio.CancelledError) else "[red]aborted[/]"
        self._progress.update(phase_task.task_id, status=status)
