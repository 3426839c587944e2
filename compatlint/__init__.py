"""compatlint: validation runner for browser compatibility data repositories."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def __getattr__(name: str):
    if name == "__version__":
        try:
            return version("compatlint")
        except PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)
