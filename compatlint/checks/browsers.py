from __future__ import annotations

from .base import BROWSER_MATRIX_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features


CHECK_ID = "browsers"


def run(ctx: FileContext) -> list[CheckResult]:
    """Every support block lists at least one browser, and only browsers known to the repository."""

    known = ctx.repo.browser_releases
    results: list[CheckResult] = []

    for feature, compat in iter_features(ctx.data):
        support = compat.get("support")
        if not isinstance(support, dict):
            continue
        if not support:
            results.append(fail(CHECK_ID, BROWSER_MATRIX_ERROR, "support must list at least one browser", feature))
            continue
        if not known:
            continue
        for browser in support:
            if browser not in known:
                results.append(fail(CHECK_ID, BROWSER_MATRIX_ERROR, f"unknown browser {browser!r}", feature))

    return results or [passed(CHECK_ID, "browser matrix is valid")]
