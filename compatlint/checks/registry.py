from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from functools import partial
from pathlib import Path
from typing import Callable

from compatlint.core.paths import repo_rel_parts

from . import (
    browsers,
    consistency,
    descriptions,
    global_compare,
    global_format,
    global_migrations,
    links,
    prefix,
    real_values,
    schema,
    style,
    versions,
)
from .base import (
    BROWSER_MATRIX_ERROR,
    COMPARE_ERROR,
    CONSISTENCY_ERROR,
    DESCRIPTION_ERROR,
    FORMAT_ERROR,
    LINK_ERROR,
    MIGRATION_ERROR,
    PREFIX_ERROR,
    REAL_VALUE_ERROR,
    SCHEMA_ERROR,
    STYLE_ERROR,
    VERSION_ERROR,
    CheckResult,
)
from .context import FileContext, RepoData


BROWSERS_CATEGORY = "browsers"


class PipelineVariant(enum.Enum):
    DATA = "data"
    BROWSERS = "browsers"


@dataclass(frozen=True)
class Check:
    check_id: str
    kind: str
    run: Callable[[FileContext], list[CheckResult]]


@dataclass(frozen=True)
class GlobalCheck:
    check_id: str
    kind: str
    run: Callable[[RepoData, tuple[str, ...]], list[CheckResult]]


def classify(path: Path, repo_root: Path) -> PipelineVariant:
    """Files directly or indirectly under <repo_root>/browsers/ hold browser release data."""
    parts = repo_rel_parts(repo_root, path)
    if parts and len(parts) > 1 and parts[0] == BROWSERS_CATEGORY:
        return PipelineVariant.BROWSERS
    return PipelineVariant.DATA


_BROWSERS_CHECKS: tuple[Check, ...] = (
    Check(schema.CHECK_ID, SCHEMA_ERROR, partial(schema.run, schema=schema.BROWSERS_SCHEMA)),
    Check(links.CHECK_ID, LINK_ERROR, links.run),
)

_DATA_CHECKS: tuple[Check, ...] = (
    Check(schema.CHECK_ID, SCHEMA_ERROR, schema.run),
    Check(style.CHECK_ID, STYLE_ERROR, style.run),
    Check(links.CHECK_ID, LINK_ERROR, links.run),
    Check(browsers.CHECK_ID, BROWSER_MATRIX_ERROR, browsers.run),
    Check(versions.CHECK_ID, VERSION_ERROR, versions.run),
    Check(consistency.CHECK_ID, CONSISTENCY_ERROR, consistency.run),
    Check(real_values.CHECK_ID, REAL_VALUE_ERROR, real_values.run),
    Check(prefix.CHECK_ID, PREFIX_ERROR, prefix.run),
    Check(descriptions.CHECK_ID, DESCRIPTION_ERROR, descriptions.run),
)


def get_checks(variant: PipelineVariant) -> list[Check]:
    if variant is PipelineVariant.BROWSERS:
        return list(_BROWSERS_CHECKS)
    return list(_DATA_CHECKS)


def with_schema_override(checks: list[Check], schema_name: str) -> list[Check]:
    """Rebind the schema check of a check list to another schema file."""
    bound = partial(schema.run, schema=schema_name)
    return [replace(c, run=bound) if c.check_id == schema.CHECK_ID else c for c in checks]


def get_global_checks() -> list[GlobalCheck]:
    return [
        GlobalCheck(global_compare.CHECK_ID, COMPARE_ERROR, global_compare.run),
        GlobalCheck(global_migrations.CHECK_ID, MIGRATION_ERROR, global_migrations.run),
        GlobalCheck(global_format.CHECK_ID, FORMAT_ERROR, global_format.run),
    ]
