from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from compatlint.checks.registry import PipelineVariant, classify
from compatlint.core.paths import display_path, resolve_target


DATA_EXTENSION = ".json"


@dataclass(frozen=True)
class FileEntry:
    path: Path
    display: str
    variant: PipelineVariant


class TreeWalker:
    """Depth-first, left-to-right expansion of targets into data files.

    Directory children are visited in name order before the next sibling of
    the directory. A file reachable through several targets is yielded once
    (deduplicated by resolved path).
    """

    def __init__(self, repo_root: Path, cwd: Path, visit: Callable[[FileEntry], bool] | None = None) -> None:
        self.repo_root = repo_root
        self.cwd = cwd
        self._visit = visit
        self._seen_files: set[Path] = set()
        self._seen_dirs: set[Path] = set()

    def entry_for(self, path: Path) -> FileEntry:
        return FileEntry(
            path=path,
            display=display_path(path, self.cwd),
            variant=classify(path, self.repo_root),
        )

    def iter_entries(self, *targets: str) -> Iterator[FileEntry]:
        stack: list[Path] = []
        for raw in reversed(targets):
            p = resolve_target(raw, self.repo_root)
            if p is not None:
                stack.append(p)

        while stack:
            p = stack.pop()
            # Dangling symlinks and entries removed since listing are skipped like missing targets.
            if not p.exists():
                continue
            if p.is_dir():
                key = p.resolve()
                if key in self._seen_dirs:
                    continue
                self._seen_dirs.add(key)
                children = sorted(p.iterdir(), key=lambda c: c.name)
                stack.extend(reversed(children))
                continue

            if p.suffix != DATA_EXTENSION:
                continue
            key = p.resolve()
            if key in self._seen_files:
                continue
            self._seen_files.add(key)
            yield self.entry_for(p)

    def walk(self, *targets: str) -> bool:
        """True iff any visited file had errors. Every file is visited regardless of earlier results."""
        if self._visit is None:
            raise ValueError("TreeWalker.walk requires a visit callback")
        has_errors = False
        for entry in self.iter_entries(*targets):
            has_errors = self._visit(entry) or has_errors
        return has_errors
