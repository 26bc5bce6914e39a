from __future__ import annotations

import json
from pathlib import Path

import pytest

from repo_hygiene.errors import ReportValidationError
from repo_hygiene.models import Finding, HookState
from repo_hygiene.report import aggregate, findings_from_report
from repo_hygiene.summary import render_summary
from repo_hygiene.validators.audit_report import validate_report, validate_report_file

FINDINGS = [
    Finding("license", "critical", "No LICENSE file", "repo-hygiene license MIT"),
    Finding("changelog", "info", "No CHANGELOG"),
    Finding("scripts", "warn", "missing | pipe", "repo-hygiene scripts"),
]


def _report(findings=FINDINGS, hooks=None) -> dict:
    return aggregate(Path("/work/repo"), findings, hooks, ["license", "changelog", "scripts"])


def test_aggregate_totals_and_shape() -> None:
    hooks = [HookState("pre-commit", Path("/work/repo/.git/hooks/pre-commit"), "absent")]

    report = _report(hooks=hooks)

    assert report["version"] == "1"
    assert report["root"] == "/work/repo"
    assert report["hasFindings"] is True
    assert report["totals"] == {"findings": 3, "info": 1, "warn": 1, "critical": 1}
    assert report["hooks"] == [{"hook": "pre-commit", "state": "absent", "executable": False}]
    assert report["findings"][1] == {
        "check": "changelog",
        "severity": "info",
        "message": "No CHANGELOG",
    }
    validate_report(report)


def test_aggregate_empty() -> None:
    report = _report(findings=[])

    assert report["hasFindings"] is False
    assert report["hooks"] == []
    assert report["totals"]["findings"] == 0
    validate_report(report)


def test_findings_from_report_round_trip() -> None:
    assert findings_from_report(_report()) == FINDINGS


def test_render_summary_orders_by_severity() -> None:
    text = render_summary(_report())

    assert text.startswith("# repo-hygiene Summary\n")
    assert "Repository: `/work/repo`" in text
    assert "Findings: 3 | Critical: 1 | Warn: 1 | Info: 1" in text
    rows = [line for line in text.splitlines() if line.startswith("| ") and "---" not in line]
    assert rows[0] == "| Check | Severity | Message | Remedy |"
    assert rows[1].startswith("| license | critical |")
    assert rows[2] == "| scripts | warn | missing \\| pipe | `repo-hygiene scripts` |"
    assert rows[3] == "| changelog | info | No CHANGELOG | n/a |"


def test_render_summary_when_clean() -> None:
    text = render_summary(_report(findings=[]))

    assert "| (all checks) | n/a | All checks passed | n/a |" in text


def test_validate_report_rejects_unknown_keys() -> None:
    report = _report()
    report["extra"] = True

    with pytest.raises(ReportValidationError, match="Report failed validation"):
        validate_report(report)


def test_validate_report_rejects_bad_severity() -> None:
    report = _report()
    report["findings"][0]["severity"] = "blocker"

    with pytest.raises(ReportValidationError, match="findings/0/severity"):
        validate_report(report)


def test_validate_report_checks_totals() -> None:
    report = _report()
    report["totals"]["findings"] = 7

    with pytest.raises(ReportValidationError, match="totals/findings"):
        validate_report(report)


def test_validate_report_checks_has_findings() -> None:
    report = _report()
    report["hasFindings"] = False

    with pytest.raises(ReportValidationError, match="hasFindings"):
        validate_report(report)


def test_validate_report_file(tmp_path: Path) -> None:
    good = tmp_path / "report.json"
    good.write_text(json.dumps(_report()), encoding="utf-8")
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")

    validate_report_file(good)
    with pytest.raises(ReportValidationError, match="Failed to read JSON"):
        validate_report_file(bad)
