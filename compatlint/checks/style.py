from __future__ import annotations

from compatlint.core.json_canon import canonical_json_text, first_difference

from .base import STYLE_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_identifiers


CHECK_ID = "style"


def run(ctx: FileContext) -> list[CheckResult]:
    results: list[CheckResult] = []

    diff = first_difference(ctx.text, canonical_json_text(ctx.data))
    if diff is not None:
        line, expected, actual = diff
        results.append(
            fail(
                CHECK_ID,
                STYLE_ERROR,
                f"not formatted with two-space indentation: expected {expected.strip()!r}, got {actual.strip()!r}",
                f"line {line}",
            )
        )

    for feature, ident in iter_identifiers(ctx.data):
        keys = list(ident.keys())
        if "__compat" in keys and keys[0] != "__compat":
            results.append(fail(CHECK_ID, STYLE_ERROR, "__compat must be the first key", feature))

    return results or [passed(CHECK_ID, "formatting is canonical")]
