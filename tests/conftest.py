from __future__ import annotations

import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tests.data_helpers import browser_file, feature_file, write_json


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("COMPATLINT_ROOT", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture
def data_repo(tmp_path: Path) -> Path:
    """A small repository that passes every check."""
    write_json(tmp_path / "browsers" / "chrome.json", browser_file("chrome", "Chrome", ["1", "2", "50", "100"]))
    write_json(tmp_path / "browsers" / "firefox.json", browser_file("firefox", "Firefox", ["1", "2", "60", "110"]))
    write_json(tmp_path / "css" / "a.json", feature_file("css", "a"))
    return tmp_path
