from __future__ import annotations

from typing import Any

from .base import VERSION_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features, iter_statements, parse_version, strip_range


CHECK_ID = "versions"


def _valid_value(value: Any, *, allow_preview: bool) -> bool:
    if value is None or isinstance(value, bool):
        return True
    if value == "preview":
        return allow_preview
    return parse_version(value) is not None


def run(ctx: FileContext) -> list[CheckResult]:
    known = ctx.repo.browser_releases
    results: list[CheckResult] = []

    def bad(message: str, feature: str, browser: str) -> None:
        results.append(fail(CHECK_ID, VERSION_ERROR, message, f"{feature} ({browser})"))

    for feature, compat in iter_features(ctx.data):
        for browser, statement in iter_statements(compat):
            added = statement.get("version_added")
            removed = statement.get("version_removed")

            if not _valid_value(added, allow_preview=True):
                bad(f"invalid version_added {added!r}", feature, browser)
                continue
            if "version_removed" in statement and not _valid_value(removed, allow_preview=False):
                bad(f"invalid version_removed {removed!r}", feature, browser)
                continue

            releases = known.get(browser)
            if releases:
                for field_name, value in (("version_added", added), ("version_removed", removed)):
                    if parse_version(value) is not None and strip_range(value) not in releases:
                        bad(f"{field_name} {value!r} is not a known {browser} release", feature, browser)

            if added is False and "version_removed" in statement:
                bad("version_removed is not allowed when version_added is false", feature, browser)
                continue

            added_v = parse_version(added)
            removed_v = parse_version(removed)
            if added_v is not None and removed_v is not None and removed_v <= added_v:
                bad(f"version_removed {removed!r} must be later than version_added {added!r}", feature, browser)

    return results or [passed(CHECK_ID, "versions are valid")]
