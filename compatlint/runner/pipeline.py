from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from compatlint.checks.base import SYNTAX_ERROR
from compatlint.checks.context import FileContext, RepoData
from compatlint.checks.registry import get_checks, with_schema_override

from .sink import DiagnosticSink, DirectSink
from .walker import FileEntry, TreeWalker


@dataclass
class FileOutcome:
    path: Path
    results: dict[str, bool] = field(default_factory=dict)
    syntax_error: bool = False

    @property
    def has_errors(self) -> bool:
        return self.syntax_error or any(self.results.values())

    @property
    def failed_checks(self) -> list[str]:
        return [check_id for check_id, failed in self.results.items() if failed]


def describe_exception(e: BaseException) -> str:
    return f"  {SYNTAX_ERROR}: {type(e).__name__}: {e}"


def run_pipeline(entry: FileEntry, sink: DiagnosticSink, repo: RepoData, *, schema: str | None = None) -> FileOutcome:
    """Run every check of the entry's variant, in order, to completion.

    Loading failures (unreadable file, malformed or too deeply nested JSON)
    set the syntax flag and are reported once; no check runs without a
    document. A check that raises sets the syntax flag, is reported, and the
    remaining checks still run.
    `schema` replaces the schema file used by the schema check.
    """

    outcome = FileOutcome(path=entry.path)

    try:
        ctx = FileContext.load(entry.path, repo)
    except Exception as e:
        outcome.syntax_error = True
        sink.write(describe_exception(e))
        return outcome

    checks = get_checks(entry.variant)
    if schema is not None:
        checks = with_schema_override(checks, schema)

    for check in checks:
        try:
            results = check.run(ctx)
        except Exception as e:
            outcome.syntax_error = True
            outcome.results[check.check_id] = False
            sink.write(describe_exception(e))
            continue

        failed = [r for r in results if r.failed]
        for r in failed:
            sink.write(r.render())
        outcome.results[check.check_id] = bool(failed)

    return outcome


def check_file(
    path: Path,
    schema: str | None = None,
    *,
    repo_root: Path,
    cwd: Path | None = None,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Run the applicable pipeline for a single file; True when it has errors."""
    if not path.is_absolute():
        path = repo_root / path
    walker = TreeWalker(repo_root, cwd or repo_root)
    entry = walker.entry_for(path)
    return run_pipeline(entry, sink or DirectSink(), RepoData(repo_root), schema=schema).has_errors
