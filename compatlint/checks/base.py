from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


Status = str  # "PASS" | "FAIL"

SYNTAX_ERROR = "SyntaxError"
SCHEMA_ERROR = "SchemaError"
STYLE_ERROR = "StyleError"
LINK_ERROR = "LinkError"
BROWSER_MATRIX_ERROR = "BrowserMatrixError"
VERSION_ERROR = "VersionError"
CONSISTENCY_ERROR = "ConsistencyError"
REAL_VALUE_ERROR = "RealValueError"
PREFIX_ERROR = "PrefixError"
DESCRIPTION_ERROR = "DescriptionError"
COMPARE_ERROR = "CompareError"
MIGRATION_ERROR = "MigrationError"
FORMAT_ERROR = "FormatError"


@dataclass(frozen=True)
class CheckResult:
    check_id: str
    status: Status
    message: str
    pointers: list[str] = field(default_factory=list)
    category: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "FAIL"

    def render(self) -> str:
        """Single diagnostic line written to the sink for a FAIL result."""
        where = f" ({', '.join(self.pointers)})" if self.pointers else ""
        return f"  {self.category or self.check_id}: {self.message}{where}"


def fail(check_id: str, category: str, message: str, *pointers: str) -> CheckResult:
    return CheckResult(check_id=check_id, status="FAIL", message=message, pointers=list(pointers), category=category)


def passed(check_id: str, message: str) -> CheckResult:
    return CheckResult(check_id=check_id, status="PASS", message=message)


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8", errors="strict"))
