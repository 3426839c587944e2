from __future__ import annotations

from compatlint.core.paths import display_path

from .base import FORMAT_ERROR, CheckResult, fail, passed
from .context import RepoData, iter_category_files


CHECK_ID = "format"

_BOM = b"\xef\xbb\xbf"


def byte_problems(data: bytes) -> list[str]:
    """Byte-level hygiene problems of one file, in a fixed order."""
    problems: list[str] = []
    if data.startswith(_BOM):
        problems.append("starts with a UTF-8 byte order mark")
    if b"\r" in data:
        problems.append("contains CR line endings")
    if not data.endswith(b"\n"):
        problems.append("does not end with a newline")
    elif data.endswith(b"\n\n"):
        problems.append("ends with more than one newline")
    for i, line in enumerate(data.split(b"\n"), start=1):
        if line.rstrip(b"\r") != line.rstrip(b"\r").rstrip(b" \t"):
            problems.append(f"trailing whitespace on line {i}")
            break
    return problems


def run(repo: RepoData, categories: tuple[str, ...]) -> list[CheckResult]:
    """Every JSON file in the repository is stored canonically at the byte level."""

    results: list[CheckResult] = []
    for p in iter_category_files(repo.repo_root, categories):
        rel = display_path(p, repo.repo_root)
        for problem in byte_problems(p.read_bytes()):
            results.append(fail(CHECK_ID, FORMAT_ERROR, problem, rel))
    return results or [passed(CHECK_ID, "all files are canonically stored")]
