from __future__ import annotations

from pathlib import Path
from typing import Iterator

from rich.console import Console
from rich.markup import escape

from compatlint.checks.context import RepoData
from compatlint.checks.registry import GlobalCheck, get_global_checks

from .pipeline import FileOutcome, describe_exception, run_pipeline
from .sink import DiagnosticSink, DirectSink
from .walker import FileEntry


class FailureRegistry:
    """Failing files in first-failure order: display path -> absolute path."""

    def __init__(self) -> None:
        self._entries: dict[str, FileEntry] = {}

    def add(self, entry: FileEntry) -> bool:
        if entry.display in self._entries:
            return False
        self._entries[entry.display] = entry
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, display: object) -> bool:
        return display in self._entries

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(list(self._entries.values()))

    def as_dict(self) -> dict[str, Path]:
        return {display: entry.path for display, entry in self._entries.items()}


class ResultAggregator:
    def __init__(self) -> None:
        self.registry = FailureRegistry()
        self.file_errors = False
        self.global_results: dict[str, bool] = {}
        self.files_checked = 0

    def record(self, entry: FileEntry, outcome: FileOutcome) -> bool:
        self.files_checked += 1
        if outcome.has_errors:
            self.file_errors = True
            self.registry.add(entry)
        return outcome.has_errors

    def fold_global(self, check_id: str, has_errors: bool) -> None:
        if check_id in self.global_results:
            raise ValueError(f"global check {check_id!r} already recorded")
        self.global_results[check_id] = has_errors

    @property
    def has_errors(self) -> bool:
        return self.file_errors or any(self.global_results.values())


def run_global_check(check: GlobalCheck, repo: RepoData, categories: tuple[str, ...], sink: DiagnosticSink) -> bool:
    """Run one whole-repository check; a raising check counts as failed."""
    try:
        results = check.run(repo, categories)
    except Exception as e:
        sink.write(describe_exception(e))
        return True
    failed = [r for r in results if r.failed]
    for r in failed:
        sink.write(r.render())
    return bool(failed)


def run_global_checks(
    aggregator: ResultAggregator,
    repo: RepoData,
    categories: tuple[str, ...],
    sink: DiagnosticSink | None = None,
) -> None:
    sink = sink or DirectSink()
    for check in get_global_checks():
        aggregator.fold_global(check.check_id, run_global_check(check, repo, categories, sink))


class ReplayReporter:
    """Final report: a summary line, then every failing file rerun without the gate."""

    def __init__(self, repo: RepoData, *, err: Console | None = None, sink: DiagnosticSink | None = None) -> None:
        self.repo = repo
        self.err = err if err is not None else Console(stderr=True, highlight=False, soft_wrap=True)
        self.sink = sink or DirectSink()

    def summary(self, count: int) -> None:
        noun = "file" if count == 1 else "files"
        self.err.print("")
        self.err.print(f"[red]Problems in [bold]{count}[/bold] {noun}:[/red]")

    def replay(self, registry: FailureRegistry) -> list[FileOutcome]:
        outcomes: list[FileOutcome] = []
        for entry in registry:
            self.err.print(f"[bold red]✖ {escape(entry.display)}[/bold red]")
            outcomes.append(run_pipeline(entry, self.sink, self.repo))
        return outcomes
