from __future__ import annotations

import re

from .base import LINK_ERROR, CheckResult, fail, passed
from .context import FileContext, iter_features, iter_statements


CHECK_ID = "links"
MDN_PREFIX = "https://developer.mozilla.org/docs/"

_LOCALE_RE = re.compile(r"^https://developer\.mozilla\.org/[a-z]{2}(?:-[A-Z]{2})?/")
_HTTP_LINK_RE = re.compile(r"http://[^\s\"'<>)]+")


def _note_texts(statement: dict) -> list[str]:
    notes = statement.get("notes")
    if isinstance(notes, str):
        return [notes]
    if isinstance(notes, list):
        return [n for n in notes if isinstance(n, str)]
    return []


def run(ctx: FileContext) -> list[CheckResult]:
    results: list[CheckResult] = []

    for feature, compat in iter_features(ctx.data):
        mdn_url = compat.get("mdn_url")
        if isinstance(mdn_url, str):
            if _LOCALE_RE.match(mdn_url):
                results.append(fail(CHECK_ID, LINK_ERROR, f"mdn_url must not contain a locale: {mdn_url}", feature))
            elif not mdn_url.startswith(MDN_PREFIX):
                results.append(fail(CHECK_ID, LINK_ERROR, f"mdn_url must start with {MDN_PREFIX}: {mdn_url}", feature))

        spec_urls = compat.get("spec_url")
        if isinstance(spec_urls, str):
            spec_urls = [spec_urls]
        if isinstance(spec_urls, list):
            for url in spec_urls:
                if not isinstance(url, str):
                    continue
                if not url.startswith("https://"):
                    results.append(fail(CHECK_ID, LINK_ERROR, f"spec_url must use https: {url}", feature))
                elif "#" not in url:
                    results.append(fail(CHECK_ID, LINK_ERROR, f"spec_url must link to a fragment: {url}", feature))

        for browser, statement in iter_statements(compat):
            for note in _note_texts(statement):
                for link in _HTTP_LINK_RE.findall(note):
                    results.append(
                        fail(CHECK_ID, LINK_ERROR, f"use https for links in notes: {link}", f"{feature} ({browser})")
                    )

    return results or [passed(CHECK_ID, "links are well-formed")]
