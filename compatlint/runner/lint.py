from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from compatlint.checks.context import RepoData
from compatlint.config import LintConfig

from .pipeline import run_pipeline
from .progress import ProgressReporter
from .report import ReplayReporter, ResultAggregator, run_global_checks
from .sink import GatedSink
from .walker import FileEntry, TreeWalker


EXIT_OK = 0
EXIT_ERRORS = 1


@dataclass(frozen=True)
class LintReport:
    has_errors: bool
    files_checked: int
    failures: dict[str, Path]
    global_results: dict[str, bool] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        return EXIT_ERRORS if self.has_errors else EXIT_OK


def run_lint(
    targets: Sequence[str] | None,
    config: LintConfig,
    *,
    progress: ProgressReporter | None = None,
    replay: ReplayReporter | None = None,
) -> LintReport:
    """Live pass over the targets, global checks, then the replay of failing files.

    With no targets the configured default categories are walked. The failure
    registry is fixed by the live pass; the replay only re-reports it.
    """

    repo = RepoData(config.repo_root)
    progress = progress or ProgressReporter(interactive=config.interactive)
    replay = replay or ReplayReporter(repo, err=progress.err)
    aggregator = ResultAggregator()

    def visit(entry: FileEntry) -> bool:
        handle = progress.handle(entry.display)
        handle.start()
        sink = GatedSink(handle.fail)
        try:
            outcome = run_pipeline(entry, sink, repo)
        except BaseException:
            handle.fail()
            raise
        aggregator.record(entry, outcome)
        if outcome.has_errors:
            handle.fail()
        else:
            handle.succeed()
        return outcome.has_errors

    walker = TreeWalker(config.repo_root, config.cwd, visit)
    walker.walk(*(targets or config.categories))

    run_global_checks(aggregator, repo, config.categories)

    if aggregator.has_errors:
        replay.summary(len(aggregator.registry))
        replay.replay(aggregator.registry)

    return LintReport(
        has_errors=aggregator.has_errors,
        files_checked=aggregator.files_checked,
        failures=aggregator.registry.as_dict(),
        global_results=dict(aggregator.global_results),
    )

