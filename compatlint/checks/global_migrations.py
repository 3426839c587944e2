from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

from compatlint.core.paths import display_path

from .base import MIGRATION_ERROR, CheckResult, fail, passed
from .context import RepoData, iter_category_files, iter_features, iter_statements


CHECK_ID = "migrations"


@dataclass(frozen=True)
class Migration:
    migration_id: str
    summary: str
    detect: Callable[[str, dict[str, Any]], bool]


def _uses_legacy_range(browser: str, statement: dict[str, Any]) -> bool:
    return any(
        isinstance(statement.get(k), str) and statement[k].startswith("<=")
        for k in ("version_added", "version_removed")
    )


def _webview_flags(browser: str, statement: dict[str, Any]) -> bool:
    return browser == "webview_android" and "flags" in statement


# Completed data migrations; data matching `detect` was left behind by one of them.
MIGRATIONS: tuple[Migration, ...] = (
    Migration("001-ranged-versions", "ranged versions use '≤' instead of '<='", _uses_legacy_range),
    Migration("002-remove-webview-flags", "webview_android statements carry no flags", _webview_flags),
)


def run(repo: RepoData, categories: tuple[str, ...]) -> list[CheckResult]:
    results: list[CheckResult] = []
    for p in iter_category_files(repo.repo_root, [c for c in categories if c != "browsers"]):
        try:
            data = json.loads(p.read_text(encoding="utf-8", errors="strict"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError):
            # Malformed files fail their own syntax check.
            continue
        rel = display_path(p, repo.repo_root)
        for feature, compat in iter_features(data):
            for browser, statement in iter_statements(compat):
                for m in MIGRATIONS:
                    if m.detect(browser, statement):
                        results.append(
                            fail(
                                CHECK_ID,
                                MIGRATION_ERROR,
                                f"not migrated by {m.migration_id} ({m.summary})",
                                f"{rel}: {feature} ({browser})",
                            )
                        )
    return results or [passed(CHECK_ID, "all data migrations applied")]
