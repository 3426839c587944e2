from __future__ import annotations

from compatlint.core.schema import load_schema, validate_schema

from .base import SCHEMA_ERROR, CheckResult, fail, passed
from .context import FileContext


CHECK_ID = "schema"
DATA_SCHEMA = "compat-data.schema.json"
BROWSERS_SCHEMA = "browsers.schema.json"


def run(ctx: FileContext, *, schema: str | None = None) -> list[CheckResult]:
    """Validate the whole document against the data schema (or the given override)."""

    name = schema or DATA_SCHEMA
    sch = load_schema(name, repo_root=ctx.repo_root)
    errs = validate_schema(ctx.data, sch, root_schema=sch, path="$")
    if not errs:
        return [passed(CHECK_ID, f"validates against {name}")]
    return [fail(CHECK_ID, SCHEMA_ERROR, e.message, e.path) for e in errs]
