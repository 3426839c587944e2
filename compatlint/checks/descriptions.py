from __future__ import annotations

from .base import DESCRIPTION_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features


CHECK_ID = "descriptions"


def run(ctx: FileContext) -> list[CheckResult]:
    results: list[CheckResult] = []
    for feature, compat in iter_features(ctx.data):
        if "description" not in compat:
            continue
        desc = compat["description"]
        if not isinstance(desc, str) or not desc.strip():
            results.append(fail(CHECK_ID, DESCRIPTION_ERROR, "description must not be empty", feature))
            continue
        if desc != desc.strip():
            results.append(fail(CHECK_ID, DESCRIPTION_ERROR, "description has leading or trailing whitespace", feature))
        if desc.rstrip().endswith("."):
            results.append(fail(CHECK_ID, DESCRIPTION_ERROR, "description must not end with a period", feature))
    return results or [passed(CHECK_ID, "descriptions are well-formed")]
