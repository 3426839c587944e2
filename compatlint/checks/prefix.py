from __future__ import annotations

import re

from .base import PREFIX_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features, iter_statements


CHECK_ID = "prefix"

_PREFIX_PATTERNS = {
    "css": re.compile(r"^-[a-z]+-$"),
    "api": re.compile(r"^[a-zA-Z]+$"),
    "javascript": re.compile(r"^[a-zA-Z]+$"),
}
_DEFAULT_PATTERN = re.compile(r"^\S+$")


def run(ctx: FileContext) -> list[CheckResult]:
    """Vendor prefixes have the shape their category uses and never combine with alternative_name."""

    pattern = _PREFIX_PATTERNS.get(ctx.category or "", _DEFAULT_PATTERN)
    results: list[CheckResult] = []

    for feature, compat in iter_features(ctx.data):
        for browser, statement in iter_statements(compat):
            if "prefix" not in statement:
                continue
            where = f"{feature} ({browser})"
            prefix = statement["prefix"]
            if not isinstance(prefix, str) or pattern.match(prefix) is None:
                results.append(
                    fail(CHECK_ID, PREFIX_ERROR, f"invalid prefix {prefix!r} for {ctx.category or 'this'} data", where)
                )
            if "alternative_name" in statement:
                results.append(fail(CHECK_ID, PREFIX_ERROR, "prefix and alternative_name are mutually exclusive", where))

    return results or [passed(CHECK_ID, "prefixes are valid")]
