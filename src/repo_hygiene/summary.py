"""Human-readable Markdown rendering of an audit report."""

from __future__ import annotations

from typing import Any

from .models.finding import severity_rank


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of findings."""
    totals = report.get("totals", {})
    findings = report.get("findings", [])

    lines = []
    lines.append("# repo-hygiene Summary")
    lines.append("")
    if report.get("root"):
        lines.append(f"Repository: `{report['root']}`")
        lines.append("")
    lines.append(
        f"Findings: {totals.get('findings', 0)} | "
        f"Critical: {totals.get('critical', 0)} | "
        f"Warn: {totals.get('warn', 0)} | "
        f"Info: {totals.get('info', 0)}"
    )
    lines.append("")
    lines.append("| Check | Severity | Message | Remedy |")
    lines.append("| --- | --- | --- | --- |")

    ordered = sorted(
        findings,
        key=lambda f: (-severity_rank(f.get("severity", "info")), f.get("check", "")),
    )
    for finding in ordered:
        remedy = finding.get("remedy")
        remedy_cell = f"`{_cell(remedy)}`" if remedy else "n/a"
        lines.append(
            f"| {_cell(finding.get('check', ''))} "
            f"| {finding.get('severity', '')} "
            f"| {_cell(finding.get('message', ''))} "
            f"| {remedy_cell} |"
        )

    if not ordered:
        lines.append("| (all checks) | n/a | All checks passed | n/a |")

    return "\n".join(lines) + "\n"
