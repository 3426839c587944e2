"""Lowest-level compatlint utilities.

Dependency direction rules:
- compatlint.core must not import compatlint.checks or compatlint.runner
"""

from compatlint.core.json_canon import canonical_json_text, first_difference
from compatlint.core.paths import display_path, repo_rel_parts, resolve_target
from compatlint.core.schema import SchemaError, load_schema, validate_schema

__all__ = [
    "SchemaError",
    "canonical_json_text",
    "display_path",
    "first_difference",
    "load_schema",
    "repo_rel_parts",
    "resolve_target",
    "validate_schema",
]
