from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from compatlint.core.paths import repo_rel_parts


_VERSION_RE = re.compile(r"^(≤?)(\d+(?:\.\d+)*)$")


def parse_version(value: Any) -> tuple[int, ...] | None:
    """Numeric release tuple for a version string ('≤' ranges included), else None."""
    if not isinstance(value, str):
        return None
    m = _VERSION_RE.match(value)
    if m is None:
        return None
    return tuple(int(x) for x in m.group(2).split("."))


def strip_range(value: str) -> str:
    return value[1:] if value.startswith("≤") else value


class RepoData:
    """Read-only, lazily loaded view of repository-wide data shared by the checks of one run."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root
        self._releases: dict[str, set[str]] | None = None

    @property
    def browser_releases(self) -> dict[str, set[str]]:
        """Browser id -> known release versions, from browsers/*.json."""
        if self._releases is None:
            self._releases = self._load_browser_releases()
        return self._releases

    def _load_browser_releases(self) -> dict[str, set[str]]:
        out: dict[str, set[str]] = {}
        browsers_dir = self.repo_root / "browsers"
        if not browsers_dir.is_dir():
            return out
        for p in sorted(browsers_dir.glob("*.json")):
            try:
                obj = json.loads(p.read_text(encoding="utf-8", errors="strict"))
            except (UnicodeDecodeError, json.JSONDecodeError, RecursionError):
                # Reported by that file's own schema check.
                continue
            browsers = obj.get("browsers") if isinstance(obj, dict) else None
            if not isinstance(browsers, dict):
                continue
            for browser_id, browser in browsers.items():
                releases = browser.get("releases") if isinstance(browser, dict) else None
                out.setdefault(browser_id, set())
                if isinstance(releases, dict):
                    out[browser_id].update(str(k) for k in releases)
        return out


@dataclass(frozen=True)
class FileContext:
    repo: RepoData
    path: Path
    text: str
    data: Any
    category: str | None = None
    rel_parts: tuple[str, ...] = field(default_factory=tuple)

    @property
    def repo_root(self) -> Path:
        return self.repo.repo_root

    @classmethod
    def load(cls, path: Path, repo: RepoData) -> "FileContext":
        """Read and parse a data file; raises on unreadable, malformed or too deeply nested JSON."""
        text = path.read_text(encoding="utf-8", errors="strict")
        data = json.loads(text)
        parts = repo_rel_parts(repo.repo_root, path) or ()
        category = parts[0] if len(parts) > 1 else None
        return cls(repo=repo, path=path, text=text, data=data, category=category, rel_parts=parts)


def iter_features(data: Any, prefix: str = "") -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (dotted feature path, __compat object) depth-first in key order."""
    if not isinstance(data, dict):
        return
    for key, value in data.items():
        if key == "__compat" or not isinstance(value, dict):
            continue
        feature = f"{prefix}.{key}" if prefix else key
        compat = value.get("__compat")
        if isinstance(compat, dict):
            yield feature, compat
        yield from iter_features(value, feature)


def iter_identifiers(data: Any, prefix: str = "") -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (dotted path, identifier object) for every nested identifier, depth-first."""
    if not isinstance(data, dict):
        return
    for key, value in data.items():
        if key == "__compat" or not isinstance(value, dict):
            continue
        feature = f"{prefix}.{key}" if prefix else key
        yield feature, value
        yield from iter_identifiers(value, feature)


def iter_statements(compat: dict[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (browser id, simple support statement), flattening statement arrays."""
    support = compat.get("support")
    if not isinstance(support, dict):
        return
    for browser, statement in support.items():
        items = statement if isinstance(statement, list) else [statement]
        for item in items:
            if isinstance(item, dict):
                yield browser, item


def primary_statement(compat: dict[str, Any], browser: str) -> dict[str, Any] | None:
    support = compat.get("support")
    if not isinstance(support, dict):
        return None
    statement = support.get(browser)
    if isinstance(statement, list):
        statement = statement[0] if statement else None
    return statement if isinstance(statement, dict) else None


def iter_category_files(repo_root: Path, categories: tuple[str, ...] | list[str]) -> Iterator[Path]:
    """Yield every *.json file under the given top-level category directories, sorted per category."""
    for category in categories:
        base = repo_root / category
        if not base.is_dir():
            continue
        yield from sorted(p for p in base.rglob("*.json") if p.is_file())
