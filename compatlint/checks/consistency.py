from __future__ import annotations

from typing import Any

from .base import CONSISTENCY_ERROR, CheckResult, fail, passed
from .context import FileContext, parse_version, primary_statement


CHECK_ID = "consistency"


def _compare_with_parent(
    parent: dict[str, Any], child: dict[str, Any], child_path: str, results: list[CheckResult]
) -> None:
    child_support = child.get("support")
    if not isinstance(child_support, dict):
        return
    for browser in child_support:
        p = primary_statement(parent, browser)
        c = primary_statement(child, browser)
        if p is None or c is None:
            continue
        p_added = p.get("version_added")
        c_added = c.get("version_added")
        if p_added is False and c_added not in (False, None):
            results.append(
                fail(
                    CHECK_ID,
                    CONSISTENCY_ERROR,
                    f"supported in {browser} ({c_added!r}) but the parent feature is not",
                    child_path,
                )
            )
            continue
        p_v = parse_version(p_added)
        c_v = parse_version(c_added)
        if p_v is not None and c_v is not None and c_v < p_v:
            results.append(
                fail(
                    CHECK_ID,
                    CONSISTENCY_ERROR,
                    f"{browser} version_added {c_added!r} is earlier than the parent's {p_added!r}",
                    child_path,
                )
            )


def _walk(node: Any, path: str, parent_compat: dict[str, Any] | None, results: list[CheckResult]) -> None:
    if not isinstance(node, dict):
        return
    compat = node.get("__compat")
    if not isinstance(compat, dict):
        compat = None
    if compat is not None and parent_compat is not None:
        _compare_with_parent(parent_compat, compat, path, results)
    for key, value in node.items():
        if key == "__compat":
            continue
        child_path = f"{path}.{key}" if path else key
        _walk(value, child_path, compat if compat is not None else parent_compat, results)


def run(ctx: FileContext) -> list[CheckResult]:
    """Subfeatures must not claim support earlier than, or in the absence of, their parent."""

    results: list[CheckResult] = []
    _walk(ctx.data, "", None, results)
    return results or [passed(CHECK_ID, "subfeatures are consistent with their parents")]
