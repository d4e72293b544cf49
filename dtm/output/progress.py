"""Download progress reporting.

The installer reports ``(completed, total)`` after every chunk; how that is
drawn is up to the reporter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console
    from rich.progress import Progress, TaskID

__all__ = ["ProgressReporter", "RichProgressReporter", "NullProgress", "RecordingProgress"]


class ProgressReporter(Protocol):
    def update(self, completed: int, total: int) -> None: ...

    def finish(self) -> None: ...


class RichProgressReporter:
    """Rich progress bar: spinner, bar, percentage, bytes, rate, ETA.

    The bar is created on the first update so nothing is drawn for a
    download that fails before any byte arrives.
    """

    def __init__(self, console: Console | None = None, description: str = "downloading") -> None:
        self._console = console
        self._description = description
        self._bar: tuple[Progress, TaskID] | None = None

    def update(self, completed: int, total: int) -> None:
        if self._bar is None:
            self._bar = self._start(total)
        progress, task = self._bar
        progress.update(task, completed=completed, total=total)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar[0].stop()
        self._bar = None

    def _start(self, total: int) -> tuple[Progress, TaskID]:
        from rich.progress import (
            BarColumn,
            DownloadColumn,
            Progress,
            SpinnerColumn,
            TaskProgressColumn,
            TextColumn,
            TimeRemainingColumn,
            TransferSpeedColumn,
        )

        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("•"),
            DownloadColumn(binary_units=True),
            TextColumn("•"),
            TransferSpeedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            console=self._console,
            transient=False,
        )
        progress.start()
        return progress, progress.add_task(self._description, total=total)


class NullProgress:
    """Reporter that draws nothing."""

    def update(self, completed: int, total: int) -> None:
        pass

    def finish(self) -> None:
        pass


class RecordingProgress:
    """Reporter that keeps every update, for tests."""

    def __init__(self) -> None:
        self.updates: list[tuple[int, int]] = []
        self.finished = False

    def update(self, completed: int, total: int) -> None:
        self.updates.append((completed, total))

    def finish(self) -> None:
        self.finished = True
