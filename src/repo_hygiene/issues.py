"""Optional GitHub Issue creation/update for audit findings.

The audit only calls this when ``REPO_HYGIENE_CREATE_GH_ISSUE`` is set and
there is something to report; failures here never fail the audit itself.
"""

from __future__ import annotations

from typing import Any

import requests

from .models.finding import severity_rank

ISSUE_TITLE = "Project hygiene checklist findings"
ISSUE_LABELS = ["documentation", "tooling", "repo-hygiene"]
ISSUE_MARKER = "<!-- repo-hygiene-issue-marker: do-not-edit -->"


def _pick_issue_to_update(issues: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Choose an existing issue to update based on marker or title match."""
    for it in issues:
        body = it.get("body") or ""
        if ISSUE_MARKER in body:
            return it
    # Fallback by title
    for it in issues:
        if it.get("title") == ISSUE_TITLE:
            return it
    return None


def _build_issue_body(report: dict[str, Any]) -> str:
    lines = [ISSUE_MARKER, "", "The repository does not yet satisfy these checklist items:", ""]
    findings = sorted(
        report.get("findings", []),
        key=lambda f: (-severity_rank(f.get("severity", "info")), f.get("check", "")),
    )
    for f in findings:
        line = f"- [ ] **{f.get('check')}** ({f.get('severity')}): {f.get('message')}"
        if f.get("remedy"):
            line += f" Fix: `{f['remedy']}`"
        lines.append(line)
    return "\n".join(lines) + "\n"


def create_or_update_issue(
    report: dict[str, Any],
    token: str,
    repository: str,
    labels: list[str] | None = None,
) -> str:
    """Create or update a single issue; return issue URL.

    Performs simple GET/POST/PATCH calls against the GitHub REST API. Raises
    on HTTP errors.
    """
    api = f"https://api.github.com/repos/{repository}/issues"
    headers = {"Authorization": f"token {token}", "Accept": "application/vnd.github+json"}

    # Find existing issues
    r = requests.get(api, params={"state": "open", "per_page": 50}, headers=headers, timeout=10)
    r.raise_for_status()
    existing = r.json()
    chosen = _pick_issue_to_update(existing if isinstance(existing, list) else [])

    payload = {
        "title": ISSUE_TITLE,
        "body": _build_issue_body(report),
        "labels": labels or ISSUE_LABELS,
    }

    if chosen:
        r2 = requests.patch(chosen.get("url"), json=payload, headers=headers, timeout=10)
    else:
        r2 = requests.post(api, json=payload, headers=headers, timeout=10)
    r2.raise_for_status()
    return r2.json().get("html_url", "")
