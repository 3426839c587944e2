from __future__ import annotations

import json
from typing import Any


def canonical_json_text(obj: Any) -> str:
    """Return the canonical on-disk form of a data file (two-space indent, key order kept, trailing LF)."""

    return json.dumps(obj, ensure_ascii=False, indent=2) + "\n"


def first_difference(actual: str, expected: str) -> tuple[int, str, str] | None:
    """Return (1-based line, expected line, actual line) for the first mismatching line, or None."""

    actual_lines = actual.split("\n")
    expected_lines = expected.split("\n")
    for i in range(max(len(actual_lines), len(expected_lines))):
        a = actual_lines[i] if i < len(actual_lines) else ""
        e = expected_lines[i] if i < len(expected_lines) else ""
        if a != e:
            return i + 1, e, a
    return None
