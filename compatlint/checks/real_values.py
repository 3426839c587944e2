from __future__ import annotations

from .base import REAL_VALUE_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features, iter_statements


CHECK_ID = "real_values"

# Browsers whose data must always carry an actual release (or false).
REAL_VALUE_BROWSERS = frozenset(
    {
        "chrome",
        "chrome_android",
        "edge",
        "firefox",
        "firefox_android",
        "opera",
        "safari",
        "safari_ios",
        "samsunginternet_android",
        "webview_android",
    }
)


def run(ctx: FileContext) -> list[CheckResult]:
    results: list[CheckResult] = []
    for feature, compat in iter_features(ctx.data):
        for browser, statement in iter_statements(compat):
            if browser not in REAL_VALUE_BROWSERS:
                continue
            for field_name in ("version_added", "version_removed"):
                if field_name not in statement:
                    continue
                value = statement[field_name]
                if value is True or value is None:
                    results.append(
                        fail(
                            CHECK_ID,
                            REAL_VALUE_ERROR,
                            f"{field_name} must be a real version or false, not {value!r}",
                            f"{feature} ({browser})",
                        )
                    )
    return results or [passed(CHECK_ID, "all values are real")]
