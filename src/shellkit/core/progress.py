"""Progress rendering for TTY and CLI output separation with Rich."""

import os
import sys
from typing import TextIO

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


def is_tty() -> bool:
    """Check if stderr is a TTY (interactive terminal)."""
    return sys.stderr.isatty()


def is_ci() -> bool:
    """Check if running in CI environment."""
    ci_vars = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]
    return any(os.environ.get(var) for var in ci_vars)


def should_use_pretty() -> bool:
    """Determine if pretty output should be used based on TTY and CI detection."""
    return is_tty() and not is_ci()


class ChunkProgress:
    """Progress bar over the source file while chunks are written.

    Used as a context manager; ``advance`` is wired to the chunker's
    ``on_chunk`` callback. When disabled every method is a no-op.
    """

    def __init__(
        self,
        total: int,
        description: str = "Splitting",
        enabled: bool | None = None,
        file: TextIO | None = None,
        no_color: bool = False,
    ):
        self.enabled = enabled if enabled is not None else should_use_pretty()
        self.total = total
        self.description = description
        self.completed = 0
        self.chunks = 0
        self.console = Console(
            file=file or sys.stderr,
            color_system=None if no_color else "auto",
            force_terminal=self.enabled,
        )
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "ChunkProgress":
        if self.enabled:
            self._progress = Progress(
                TextColumn("[bold blue]{task.description}"),
                BarColumn(),
                DownloadColumn(binary_units=True),
                TextColumn("{task.fields[chunks]} parts"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True,
            )
            self._progress.start()
            self._task = self._progress.add_task(
                self.description, total=self.total or None, chunks=0
            )
        return self

    def advance(self, amount: int) -> None:
        self.completed += amount
        self.chunks += 1
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, advance=amount, chunks=self.chunks)

    def __exit__(self, *exc_info) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
