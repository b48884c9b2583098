"""progress and output handling for batch conversion."""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TaskID,
    TextColumn,
)

DESCRIPTION_COLUMN = "[progress.description]{task.description}"


@dataclass
class ConversionTally:
    """document outcomes counted over one conversion run."""

    converted: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.converted + self.skipped + self.failed

    def summary(self) -> str:
        parts = [f"{self.converted} converted"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        parts.append(f"{self.failed} failed")
        return f"Processed {self.total} document(s): " + ", ".join(parts)


def _spinner_columns() -> tuple[ProgressColumn, ...]:
    return (SpinnerColumn(), TextColumn(DESCRIPTION_COLUMN))


def _bar_columns() -> tuple[ProgressColumn, ...]:
    return (
        SpinnerColumn(),
        TextColumn(DESCRIPTION_COLUMN),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("- {task.fields[name]}"),
    )


class ProgressHandler:
    """
    reports conversion progress and outcomes.

    Each document is recorded exactly once as converted, skipped or failed;
    recording advances the progress bar and feeds the final summary.
    """

    def __init__(self, quiet: bool = False, show_progress: bool = False) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self.tally = ConversionTally()
        self._console = Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ProgressHandler":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_id = None

    def _start(
        self,
        columns: tuple[ProgressColumn, ...],
        description: str,
        total: Optional[int] = None,
    ) -> None:
        if not self.show_progress:
            return

        self._stop()
        self._progress = Progress(*columns, console=self._console, transient=True)
        self._progress.start()
        self._task_id = self._progress.add_task(description, total=total, name="")

    def _advance(self, name: str) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(self._task_id, advance=1, name=name)

    def _notice(self, message: str) -> None:
        # progress bars and notices would interleave on stderr
        if self.quiet or self.show_progress:
            return
        self._console.print(message)

    def start_discovery(self) -> None:
        """shows a spinner while source files are collected."""
        self._start(_spinner_columns(), "Discovering documents...")

    def set_total(self, total: int) -> None:
        """replaces the spinner with a bar counting documents."""
        self._start(_bar_columns(), "Converting", total)

    def log_info(self, message: str) -> None:
        """prints a message unless quiet or a progress bar is showing."""
        self._notice(message)

    def log_error(self, message: str) -> None:
        """prints an error, even in quiet mode."""
        self._console.print(f"[red]ERROR:[/red] {message}")

    def record_converted(self, name: str, target: str) -> None:
        self.tally.converted += 1
        self._advance(name)
        self._notice(f"Converted: {name} -> {target}")

    def record_skipped(self, name: str, target: str) -> None:
        """counts a document left alone because its HTML already exists."""
        self.tally.skipped += 1
        self._advance(name)
        self._notice(f"[yellow]Skipped:[/yellow] {name} ({target} exists)")

    def record_failed(self, name: str, error: Exception) -> None:
        self.tally.failed += 1
        self._advance(name)
        self.log_error(f"Failed: {name}: {error}")

    def finish(self) -> int:
        """
        stops progress display and prints the summary unless quiet.

        Returns:
            exit code (0 if every document converted or was skipped, else 1)
        """
        self._stop()

        if not self.quiet:
            self._console.print(self.tally.summary())
        return 1 if self.tally.failed else 0
