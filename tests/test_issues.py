from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests

from repo_hygiene import issues
from repo_hygiene.models import Finding
from repo_hygiene.report import aggregate


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def report() -> dict:
    findings = [
        Finding("changelog", "info", "No CHANGELOG"),
        Finding("license", "critical", "No LICENSE file", "repo-hygiene license MIT"),
    ]
    return aggregate(Path("/work/repo"), findings)


def _install(monkeypatch: pytest.MonkeyPatch, existing: list[dict]) -> list[tuple]:
    calls: list[tuple] = []

    def fake_get(url, **kwargs):
        calls.append(("GET", url, kwargs))
        return FakeResponse(existing)

    def fake_post(url, **kwargs):
        calls.append(("POST", url, kwargs))
        return FakeResponse({"html_url": "https://github.com/o/r/issues/1"}, 201)

    def fake_patch(url, **kwargs):
        calls.append(("PATCH", url, kwargs))
        return FakeResponse({"html_url": "https://github.com/o/r/issues/7"})

    monkeypatch.setattr(issues.requests, "get", fake_get)
    monkeypatch.setattr(issues.requests, "post", fake_post)
    monkeypatch.setattr(issues.requests, "patch", fake_patch)
    return calls


def test_body_lists_findings_most_severe_first(report: dict) -> None:
    body = issues._build_issue_body(report)

    lines = body.splitlines()
    assert lines[0] == issues.ISSUE_MARKER
    checklist = [line for line in lines if line.startswith("- [ ]")]
    assert checklist == [
        "- [ ] **license** (critical): No LICENSE file Fix: `repo-hygiene license MIT`",
        "- [ ] **changelog** (info): No CHANGELOG",
    ]


def test_creates_issue_when_none_exists(monkeypatch: pytest.MonkeyPatch, report: dict) -> None:
    calls = _install(monkeypatch, [{"title": "Something else", "url": "u1", "body": ""}])

    url = issues.create_or_update_issue(report, token="t0k", repository="o/r")

    assert url == "https://github.com/o/r/issues/1"
    method, api, kwargs = calls[1]
    assert method == "POST"
    assert api == "https://api.github.com/repos/o/r/issues"
    assert kwargs["json"]["title"] == issues.ISSUE_TITLE
    assert kwargs["json"]["labels"] == issues.ISSUE_LABELS
    assert kwargs["headers"]["Authorization"] == "token t0k"


def test_updates_issue_with_marker(monkeypatch: pytest.MonkeyPatch, report: dict) -> None:
    existing = [
        {"title": issues.ISSUE_TITLE, "url": "by-title", "body": ""},
        {"title": "Renamed", "url": "by-marker", "body": issues.ISSUE_MARKER + "\nold"},
    ]
    calls = _install(monkeypatch, existing)

    url = issues.create_or_update_issue(report, token="t", repository="o/r", labels=["hygiene"])

    assert url == "https://github.com/o/r/issues/7"
    assert calls[1][0] == "PATCH"
    assert calls[1][1] == "by-marker"
    assert calls[1][2]["json"]["labels"] == ["hygiene"]


def test_falls_back_to_title_match() -> None:
    existing = [{"title": issues.ISSUE_TITLE, "url": "by-title", "body": None}]

    assert issues._pick_issue_to_update(existing) == existing[0]
    assert issues._pick_issue_to_update([]) is None


def test_http_errors_propagate(monkeypatch: pytest.MonkeyPatch, report: dict) -> None:
    monkeypatch.setattr(issues.requests, "get", lambda url, **kw: FakeResponse({}, 401))

    with pytest.raises(requests.HTTPError):
        issues.create_or_update_issue(report, token="t", repository="o/r")
