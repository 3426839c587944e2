from __future__ import annotations

import json
from typing import Any

from compatlint.core.paths import display_path

from .base import COMPARE_ERROR, CheckResult, fail, passed
from .context import RepoData, iter_category_files


CHECK_ID = "compare"


def feature_sort_key(name: str) -> tuple[bool, str, str]:
    """Order used for sibling identifiers: __compat first, then case-insensitive by name."""
    return (name != "__compat", name.lower(), name)


def _check_order(node: Any, path: str, rel: str, results: list[CheckResult]) -> None:
    if not isinstance(node, dict):
        return
    keys = list(node.keys())
    for a, b in zip(keys, keys[1:]):
        if feature_sort_key(b) < feature_sort_key(a):
            results.append(
                fail(CHECK_ID, COMPARE_ERROR, f"{b!r} must be sorted before {a!r}", f"{rel}: {path or '$'}")
            )
            break
    for key, value in node.items():
        if key == "__compat":
            continue
        _check_order(value, f"{path}.{key}" if path else key, rel, results)


def run(repo: RepoData, categories: tuple[str, ...]) -> list[CheckResult]:
    """Sibling features in every data file are sorted."""

    results: list[CheckResult] = []
    for p in iter_category_files(repo.repo_root, [c for c in categories if c != "browsers"]):
        try:
            data = json.loads(p.read_text(encoding="utf-8", errors="strict"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError):
            # Malformed files fail their own syntax check.
            continue
        _check_order(data, "", display_path(p, repo.repo_root), results)
    return results or [passed(CHECK_ID, "features are sorted")]
