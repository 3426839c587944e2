from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_CATEGORIES: tuple[str, ...] = (
    "api",
    "browsers",
    "css",
    "html",
    "http",
    "svg",
    "javascript",
    "mathml",
    "webdriver",
    "webextensions",
    "xpath",
    "xslt",
)

ROOT_ENV_VAR = "COMPATLINT_ROOT"


def is_ci() -> bool:
    """Continuous integration environments set CI to a non-empty value."""
    return bool(os.environ.get("CI"))


@dataclass(frozen=True)
class LintConfig:
    repo_root: Path
    cwd: Path
    interactive: bool = True
    categories: tuple[str, ...] = field(default=DEFAULT_CATEGORIES)

    @classmethod
    def from_env(cls) -> "LintConfig":
        cwd = Path.cwd()
        root_raw = os.environ.get(ROOT_ENV_VAR)
        repo_root = Path(root_raw).resolve() if root_raw else cwd.resolve()
        if not repo_root.is_dir():
            raise ValueError(f"{ROOT_ENV_VAR} does not point to a directory: {repo_root}")
        return cls(repo_root=repo_root, cwd=cwd, interactive=not is_ci())
