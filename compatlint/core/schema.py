from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import date
from importlib.resources import files
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SchemaError:
    path: str
    message: str


_SCHEMA_CACHE: dict[str, dict[str, Any]] = {}


def load_schema(name: str, *, repo_root: Path | None = None) -> dict[str, Any]:
    """Load a schema by file name.

    A repository-local `schemas/<name>` takes precedence over the copy bundled
    with the package. Raises ValueError when neither exists or the file is not
    a JSON object.
    """

    if not isinstance(name, str) or not name or "/" in name or "\\" in name:
        raise ValueError(f"invalid schema name: {name!r}")

    if repo_root is not None:
        local = repo_root / "schemas" / name
        if local.is_file():
            key = str(local.resolve())
            cached = _SCHEMA_CACHE.get(key)
            if cached is None:
                cached = _parse_schema_text(local.read_text(encoding="utf-8", errors="strict"), name)
                _SCHEMA_CACHE[key] = cached
            return cached

    key = f"builtin:{name}"
    cached = _SCHEMA_CACHE.get(key)
    if cached is not None:
        return cached

    resource = files("compatlint") / "schemas" / name
    if not resource.is_file():
        raise ValueError(f"schema not found: {name}")
    cached = _parse_schema_text(resource.read_text(encoding="utf-8"), name)
    _SCHEMA_CACHE[key] = cached
    return cached


def _parse_schema_text(text: str, name: str) -> dict[str, Any]:
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError(f"Schema is not a JSON object: {name}")
    return obj


_JSON_TYPES: tuple[tuple[type, str], ...] = (
    (type(None), "null"),
    (bool, "boolean"),
    (int, "integer"),
    (float, "number"),
    (str, "string"),
    (list, "array"),
    (dict, "object"),
)


def json_type_name(value: Any) -> str:
    for py_type, name in _JSON_TYPES:
        if isinstance(value, py_type):
            return name
    return type(value).__name__


def _is_type(value: Any, expected: str) -> bool:
    actual = json_type_name(value)
    return actual == expected or (expected == "number" and actual == "integer")


def _resolve_ref(root: Any, ref: str) -> Any:
    if ref == "#":
        return root
    if not ref.startswith("#/"):
        raise ValueError(f"only internal refs are supported: {ref}")
    node = root
    for token in ref[2:].split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(node, list):
            node = node[int(token)]
        elif isinstance(node, dict) and token in node:
            node = node[token]
        else:
            raise KeyError(token)
    return node


class _Validator:
    """One validation run; collects errors instead of raising."""

    def __init__(self, root_schema: dict[str, Any]) -> None:
        self.root_schema = root_schema
        self.errors: list[SchemaError] = []

    def report(self, path: str, message: str) -> None:
        self.errors.append(SchemaError(path=path, message=message))

    def matches(self, value: Any, schema: Any, path: str) -> bool:
        """Validate against a sub-schema, discarding its errors."""
        mark = len(self.errors)
        self.check(value, schema, path)
        ok = len(self.errors) == mark
        del self.errors[mark:]
        return ok

    def check(self, value: Any, schema: Any, path: str) -> None:
        if schema is True:
            return
        if not isinstance(schema, dict):
            self.report(path, "schema node is not an object")
            return

        if "$ref" in schema:
            self._check_ref(value, schema["$ref"], path)
            return

        # Each step returns False once it reported an error that makes later keywords meaningless.
        for step in (self._check_combinators, self._check_type, self._check_literals):
            if not step(value, schema, path):
                return

        if isinstance(value, str):
            self._check_string(value, schema, path)
        elif isinstance(value, dict):
            self._check_object(value, schema, path)
        elif isinstance(value, list):
            self._check_array(value, schema, path)

    def _check_ref(self, value: Any, ref: Any, path: str) -> None:
        if not isinstance(ref, str):
            self.report(path, "$ref must be a string")
            return
        try:
            target = _resolve_ref(self.root_schema, ref)
        except (ValueError, KeyError, IndexError) as e:
            self.report(path, f"unresolvable $ref {ref}: {e}")
            return
        self.check(value, target, path)

    def _check_combinators(self, value: Any, schema: dict[str, Any], path: str) -> bool:
        for sub in schema.get("allOf") or ():
            self.check(value, sub, path)

        any_of = schema.get("anyOf")
        if isinstance(any_of, list) and not any(self.matches(value, sub, path) for sub in any_of):
            self.report(path, f"does not match any of {len(any_of)} allowed forms")
            return False

        one_of = schema.get("oneOf")
        if isinstance(one_of, list):
            hits = sum(1 for sub in one_of if self.matches(value, sub, path))
            if hits != 1:
                self.report(path, f"matches {hits} of the oneOf forms (expected exactly 1)")
                return False
        return True

    def _check_type(self, value: Any, schema: dict[str, Any], path: str) -> bool:
        expected = schema.get("type")
        if expected is None:
            return True
        allowed = [str(t) for t in expected] if isinstance(expected, list) else [str(expected)]
        if any(_is_type(value, t) for t in allowed):
            return True
        wanted = allowed[0] if len(allowed) == 1 else " or ".join(allowed)
        self.report(path, f"expected {wanted}, got {json_type_name(value)}")
        return False

    def _check_literals(self, value: Any, schema: dict[str, Any], path: str) -> bool:
        if "const" in schema and value != schema["const"]:
            self.report(path, f"expected {schema['const']!r}")
            return False
        allowed = schema.get("enum")
        if isinstance(allowed, list) and value not in allowed:
            self.report(path, f"{value!r} is not one of {allowed}")
            return False
        return True

    def _check_string(self, value: str, schema: dict[str, Any], path: str) -> None:
        if "minLength" in schema and len(value) < int(schema["minLength"]):
            self.report(path, f"shorter than {schema['minLength']} characters")
        if "maxLength" in schema and len(value) > int(schema["maxLength"]):
            self.report(path, f"longer than {schema['maxLength']} characters")

        pattern = schema.get("pattern")
        if isinstance(pattern, str) and not re.search(pattern, value):
            self.report(path, f"{value!r} does not match pattern {pattern}")

        if schema.get("format") == "date":
            try:
                date.fromisoformat(value)
            except ValueError:
                self.report(path, f"{value!r} is not a valid date")

    def _check_object(self, value: dict[str, Any], schema: dict[str, Any], path: str) -> None:
        for key in schema.get("required") or ():
            if key not in value:
                self.report(path, f"missing required '{key}'")

        props = schema.get("properties")
        props = props if isinstance(props, dict) else {}
        addl = schema.get("additionalProperties", True)
        for key in sorted(value):
            child_path = f"{path}.{key}"
            if key in props:
                self.check(value[key], props[key], child_path)
            elif addl is False:
                self.report(child_path, "additional property not allowed")
            elif isinstance(addl, dict):
                self.check(value[key], addl, child_path)

    def _check_array(self, value: list[Any], schema: dict[str, Any], path: str) -> None:
        if "minItems" in schema and len(value) < int(schema["minItems"]):
            self.report(path, f"fewer than {schema['minItems']} items")
        if "maxItems" in schema and len(value) > int(schema["maxItems"]):
            self.report(path, f"more than {schema['maxItems']} items")

        items = schema.get("items")
        if isinstance(items, dict):
            for i, item in enumerate(value):
                self.check(item, items, f"{path}[{i}]")


def validate_schema(obj: Any, schema: dict[str, Any], *, root_schema: dict[str, Any], path: str) -> list[SchemaError]:
    """Validate `obj` against the JSON-schema subset the bundled schemas use.

    Keywords: $ref (internal), allOf, anyOf, oneOf, type, const, enum,
    minLength, maxLength, pattern, format (date), required, properties,
    additionalProperties, minItems, maxItems, items. Errors are returned
    sorted by (path, message).
    """

    validator = _Validator(root_schema)
    validator.check(obj, schema, path)
    return sorted(validator.errors, key=lambda e: (e.path, e.message))
