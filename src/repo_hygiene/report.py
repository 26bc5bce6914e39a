"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .models.finding import SEVERITIES, Finding
from .models.hook_result import HookState

REPORT_VERSION = "1"


def aggregate(
    root: Path,
    findings: Iterable[Finding],
    hooks: Iterable[HookState] | None = None,
    checks_run: Iterable[str] = (),
) -> dict[str, Any]:
    """Aggregate checklist findings into a single schema-compatible report.

    ``hooks`` is None when the repository is not a git checkout; the report
    then carries an empty hook list.
    """
    findings = list(findings)
    totals: dict[str, int] = {"findings": len(findings)}
    for severity in SEVERITIES:
        totals[severity] = sum(1 for f in findings if f.severity == severity)

    report: dict[str, Any] = {
        "version": REPORT_VERSION,
        "root": str(root),
        "hasFindings": bool(findings),
        "checks": list(checks_run),
        "findings": [f.to_dict() for f in findings],
        "hooks": [state.to_dict() for state in hooks or ()],
        "totals": totals,
    }

    return report


def findings_from_report(report: dict[str, Any]) -> list[Finding]:
    """Rebuild Finding objects from a report produced by :func:`aggregate`."""
    return [
        Finding(
            check=str(item.get("check", "")),
            severity=str(item.get("severity", "")),
            message=str(item.get("message", "")),
            remedy=item.get("remedy"),
        )
        for item in report.get("findings", [])
    ]
