"""End-to-end lint runs: live pass, global checks, summary and replay."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from compatlint.checks.base import fail, passed
from compatlint.checks.registry import GlobalCheck
from compatlint.config import LintConfig
from compatlint.runner import lint, report
from compatlint.runner.progress import ProgressHandle, ProgressReporter, ProgressState
from tests.data_helpers import feature_file, write_json


pytestmark = pytest.mark.repo_local


def _config(root: Path, *, interactive: bool = False) -> LintConfig:
    return LintConfig(repo_root=root, cwd=root, interactive=interactive)


def _fake_globals(calls: dict[str, int], failing: set[str] = frozenset()) -> list[GlobalCheck]:
    def make(check_id: str):
        def run(repo, categories):
            calls[check_id] = calls.get(check_id, 0) + 1
            if check_id in failing:
                return [fail(check_id, "MigrationError", f"{check_id} found leftovers")]
            return [passed(check_id, "ok")]

        return run

    return [GlobalCheck(cid, "FakeError", make(cid)) for cid in ("compare", "migrations", "format")]


class RecordingReporter(ProgressReporter):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.handles: list[ProgressHandle] = []

    def handle(self, text: str) -> ProgressHandle:
        h = super().handle(text)
        self.handles.append(h)
        return h


def _spy(monkeypatch: pytest.MonkeyPatch, module, calls: list[str]) -> None:
    real = module.run_pipeline

    def spy(entry, sink, repo):
        calls.append(entry.display)
        return real(entry, sink, repo)

    monkeypatch.setattr(module, "run_pipeline", spy)


def test_clean_repository_exits_zero(data_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    result = lint.run_lint(None, _config(data_repo))

    assert result.exit_code == 0
    assert result.failures == {}
    assert result.files_checked == 3
    assert result.global_results == {"compare": False, "migrations": False, "format": False}
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["✔ browsers/chrome.json", "✔ browsers/firefox.json", "✔ css/a.json"]
    assert captured.err == ""


def test_style_failure_is_registered_and_replayed(
    data_repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    write_json(data_repo / "css" / "b.json", feature_file("css", "b"), indent=4)
    live: list[str] = []
    replayed: list[str] = []
    _spy(monkeypatch, lint, live)
    _spy(monkeypatch, report, replayed)

    result = lint.run_lint(["css"], _config(data_repo))

    assert result.has_errors is True
    assert result.exit_code == 1
    assert result.failures == {"css/b.json": data_repo / "css" / "b.json"}
    assert live == ["css/a.json", "css/b.json"]
    assert replayed == ["css/b.json"]

    captured = capsys.readouterr()
    assert captured.out == "✔ css/a.json\n"
    err = captured.err.splitlines()
    assert err[0] == "✖ css/b.json"
    assert err[1].startswith("  StyleError: not formatted with two-space indentation")
    assert err[2:5] == ["", "Problems in 1 file:", "✖ css/b.json"]
    assert err[5] == err[1]
    assert len(err) == 6


def test_missing_explicit_file_is_not_an_error(data_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    result = lint.run_lint(["css/does-not-exist.json"], _config(data_repo))

    assert result.has_errors is False
    assert result.exit_code == 0
    assert result.failures == {}
    assert result.files_checked == 0
    assert capsys.readouterr().err == ""


def test_malformed_browsers_file_reports_syntax_error_live_and_on_replay(
    data_repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = data_repo / "browsers" / "broken.json"
    broken.write_text("{not json\n", encoding="utf-8")

    result = lint.run_lint(["browsers"], _config(data_repo))

    assert result.exit_code == 1
    assert result.failures == {"browsers/broken.json": broken}
    err = capsys.readouterr().err
    assert err.count("SyntaxError: JSONDecodeError") == 2
    assert err.startswith("✖ browsers/broken.json\n  SyntaxError: JSONDecodeError")
    assert "Problems in 1 file:" in err


def test_global_failure_alone_fails_the_run(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: dict[str, int] = {}
    monkeypatch.setattr(report, "get_global_checks", lambda: _fake_globals(calls, {"migrations"}))

    result = lint.run_lint(None, _config(tmp_path))

    assert result.files_checked == 0
    assert result.failures == {}
    assert result.global_results == {"compare": False, "migrations": True, "format": False}
    assert result.exit_code == 1
    err = capsys.readouterr().err
    assert "  MigrationError: migrations found leftovers" in err
    assert "Problems in 0 files:" in err


def test_global_checks_run_once_regardless_of_file_count(data_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("b", "c", "d", "e"):
        write_json(data_repo / "css" / f"{name}.json", feature_file("css", name))
    calls: dict[str, int] = {}
    monkeypatch.setattr(report, "get_global_checks", lambda: _fake_globals(calls))

    result = lint.run_lint(None, _config(data_repo))

    assert result.files_checked == 7
    assert calls == {"compare": 1, "migrations": 1, "format": 1}


def test_raising_global_check_counts_as_failure(
    data_repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def boom(repo, categories):
        raise OSError("disk went away")

    monkeypatch.setattr(report, "get_global_checks", lambda: [GlobalCheck("format", "FormatError", boom)])

    result = lint.run_lint(None, _config(data_repo))

    assert result.global_results == {"format": True}
    assert result.exit_code == 1
    assert "OSError: disk went away" in capsys.readouterr().err


def test_registry_is_in_first_failure_order_without_duplicates(data_repo: Path) -> None:
    write_json(data_repo / "html" / "z.json", feature_file("html", "z", description="Bad."))
    write_json(data_repo / "css" / "m.json", feature_file("css", "m", description="Bad."))

    result = lint.run_lint(["html", "css", "css/m.json", "html/z.json"], _config(data_repo))

    assert list(result.failures) == ["html/z.json", "css/m.json"]


def test_interactive_mode_only_changes_animation(data_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_json(data_repo / "css" / "b.json", feature_file("css", "b", description="Bad."), indent=4)

    plain = lint.run_lint(None, _config(data_repo, interactive=False))
    plain_out = capsys.readouterr()
    animated = lint.run_lint(None, _config(data_repo, interactive=True))
    animated_out = capsys.readouterr()

    assert plain == animated

    def diagnostics(text: str) -> list[str]:
        return [line for line in text.splitlines() if "Error:" in line or line.startswith(("✔", "✖"))]

    assert diagnostics(plain_out.err) == diagnostics(animated_out.err)
    assert diagnostics(plain_out.out) == diagnostics(animated_out.out)


def test_two_runs_are_identical(data_repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_json(data_repo / "css" / "b.json", feature_file("css", "b", support={"chrome": {"version_added": "7"}}))

    first = lint.run_lint(None, _config(data_repo))
    first_out = capsys.readouterr()
    second = lint.run_lint(None, _config(data_repo))
    second_out = capsys.readouterr()

    assert first == second
    assert first_out == second_out


def test_no_handle_is_left_running(data_repo: Path) -> None:
    write_json(data_repo / "css" / "b.json", feature_file("css", "b"), indent=4)
    reporter = RecordingReporter(interactive=False)

    lint.run_lint(None, _config(data_repo), progress=reporter)

    states = {h.text: h.state for h in reporter.handles}
    assert states["css/b.json"] is ProgressState.FAILED
    assert states["css/a.json"] is ProgressState.SUCCEEDED
    assert ProgressState.RUNNING not in states.values()


def test_interrupt_inside_pipeline_still_stops_progress(data_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted(entry, sink, repo):
        raise KeyboardInterrupt

    monkeypatch.setattr(lint, "run_pipeline", interrupted)
    reporter = RecordingReporter(interactive=True)

    with pytest.raises(KeyboardInterrupt):
        lint.run_lint(["css"], _config(data_repo), progress=reporter)

    assert [h.state for h in reporter.handles] == [ProgressState.FAILED]
    assert not reporter.handles[0].animated


def test_too_deeply_nested_file_does_not_stop_the_run(
    data_repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    deep = data_repo / "css" / "deep.json"
    deep.write_text("[" * 200000 + "]" * 200000 + "\n", encoding="utf-8")
    write_json(data_repo / "css" / "z.json", feature_file("css", "z"))
    live: list[str] = []
    _spy(monkeypatch, lint, live)

    result = lint.run_lint(["css"], _config(data_repo))

    assert live == ["css/a.json", "css/deep.json", "css/z.json"]
    assert result.failures == {"css/deep.json": deep}
    assert result.global_results == {"compare": False, "migrations": False, "format": False}
    assert result.exit_code == 1
    captured = capsys.readouterr()
    assert captured.err.count("SyntaxError: RecursionError") == 2
    assert "✔ css/z.json" in captured.out


def test_dangling_symlink_in_walked_directory_is_not_a_failure(data_repo: Path) -> None:
    try:
        os.symlink(data_repo / "css" / "gone.json", data_repo / "css" / "b.json")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    result = lint.run_lint(["css"], _config(data_repo))

    assert result.failures == {}
    assert result.files_checked == 1
    assert result.exit_code == 0
