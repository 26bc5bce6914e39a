"""Validate audit reports against the bundled JSON schema."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import ReportValidationError

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "audit-report.schema.json"


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_report(report: Any, schema_path: Path = DEFAULT_SCHEMA) -> None:
    """Raise ReportValidationError when ``report`` does not match the schema."""
    schema = _load_json(schema_path)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(report), key=lambda e: list(map(str, e.path)))
    if errors:
        raise ReportValidationError("Report failed validation:\n" + _format_errors(errors))

    totals = report["totals"]
    if totals["findings"] != len(report["findings"]):
        raise ReportValidationError(
            "Report failed validation:\n- totals/findings: does not match the findings list"
        )
    if report["hasFindings"] != bool(report["findings"]):
        raise ReportValidationError(
            "Report failed validation:\n- hasFindings: does not match the findings list"
        )


def validate_report_file(input_path: Path, schema_path: Path = DEFAULT_SCHEMA) -> None:
    """Load a JSON report from disk and validate it.

    Raises:
        ReportValidationError: If the file is not valid JSON or fails validation.
    """
    try:
        document = _load_json(input_path)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ReportValidationError(f"Failed to read JSON from {input_path}: {exc}") from exc
    validate_report(document, schema_path)
