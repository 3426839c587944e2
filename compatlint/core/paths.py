from __future__ import annotations

import os
from pathlib import Path


def repo_rel_parts(repo_root: Path, path: Path) -> tuple[str, ...] | None:
    """Return the path components of `path` below `repo_root`, or None when outside."""

    try:
        return path.resolve().relative_to(repo_root.resolve()).parts
    except ValueError:
        return None


def resolve_target(raw: str, repo_root: Path) -> Path | None:
    """Resolve a user-supplied target against the repository root.

    Relative input is taken relative to `repo_root`; absolute input is kept
    as given. Returns None when the resolved path does not exist, so that
    missing targets are skipped without raising.
    """

    if not isinstance(raw, str) or not raw:
        return None
    if "\x00" in raw:
        return None

    p = Path(raw)
    if not p.is_absolute():
        p = repo_root / p
    p = Path(os.path.abspath(p))

    if not p.exists():
        return None
    return p


def display_path(path: Path, cwd: Path) -> str:
    """Render `path` relative to the invocation directory (absolute if no relative form exists)."""

    try:
        return Path(os.path.relpath(path, cwd)).as_posix()
    except ValueError:
        # Different drives on Windows.
        return path.as_posix()
