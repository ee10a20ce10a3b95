"""Observer pattern for validation runs."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .models import Commit, RuleViolation


class ValidationObserver(ABC):
    """Abstract base class for validation observers."""

    @abstractmethod
    def on_range_resolved(self, ref: str, commits: List[Commit]) -> None:
        """Called when the commits to check for a ref are known."""
        pass

    @abstractmethod
    def on_commit_skipped(self, commit: Commit, reason: str) -> None:
        """Called when a commit is skipped by a filter."""
        pass

    @abstractmethod
    def on_commit_checked(
        self, commit: Commit, ref: str, violations: List[RuleViolation]
    ) -> None:
        """Called after the rules were evaluated for a commit."""
        pass


class ConsoleLogObserver(ValidationObserver):
    """Observer that logs validation progress to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def on_range_resolved(self, ref: str, commits: List[Commit]) -> None:
        self.console.print(
            f"[blue]Checking {len(commits)} commit(s) in {escape(ref)}[/blue]"
        )

    def on_commit_skipped(self, commit: Commit, reason: str) -> None:
        self.console.print(
            f"[dim]Skipped {commit.short_sha} ({escape(reason)}): {escape(commit.summary)}[/dim]"
        )

    def on_commit_checked(
        self, commit: Commit, ref: str, violations: List[RuleViolation]
    ) -> None:
        if violations:
            self.console.print(
                f"[red]✗ {commit.short_sha} {escape(commit.summary)} "
                f"({len(violations)} violation(s))[/red]"
            )
        else:
            self.console.print(f"[green]✓ {commit.short_sha} {escape(commit.summary)}[/green]")


class FileLogObserver(ValidationObserver):
    """Observer that logs validation progress to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_range_resolved(self, ref: str, commits: List[Commit]) -> None:
        self._log(f"Checking {len(commits)} commit(s) in {ref}")

    def on_commit_skipped(self, commit: Commit, reason: str) -> None:
        self._log(f"Skipped {commit.hexsha} ({reason})")

    def on_commit_checked(
        self, commit: Commit, ref: str, violations: List[RuleViolation]
    ) -> None:
        if violations:
            names = ", ".join(v.rule.name for v in violations)
            self._log(f"Failed {commit.hexsha} in {ref}: {names}")
        else:
            self._log(f"Passed {commit.hexsha} in {ref}")
