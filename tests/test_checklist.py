from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from conftest import write_package_json
from repo_hygiene.checklist import (
    CHECKS,
    CheckContext,
    get_check,
    get_known_check_ids,
    run_checks,
)
from repo_hygiene.config import Settings
from repo_hygiene.discovery import discover_project_files
from repo_hygiene.errors import UnknownCheckError
from repo_hygiene.hooks import hook_status, install_hooks


def _ids(findings) -> list[str]:
    return [f.check for f in findings]


def _run(root: Path, settings: Settings | None = None, hooks: bool = True):
    layout = discover_project_files(root)
    states = tuple(hook_status(root)) if hooks and layout.is_git_checkout else None
    return run_checks(CheckContext(layout=layout, settings=settings or Settings(), hooks=states))


def test_registry_severities() -> None:
    assert get_check("license").severity == "critical"
    assert get_check("readme").severity == "critical"
    assert get_check("pr-template").severity == "info"
    assert get_known_check_ids()[0] == "license"
    assert all(rule.severity in {"info", "warn", "critical"} for rule in CHECKS.values())


def test_unknown_check() -> None:
    with pytest.raises(UnknownCheckError, match="nope"):
        get_check("nope")


def test_empty_directory_findings(empty_repo: Path) -> None:
    findings = _run(empty_repo)

    assert _ids(findings) == [
        "license",
        "readme",
        "contributing",
        "code-of-conduct",
        "changelog",
        "gitignore",
        "editorconfig",
        "tests",
        "pr-template",
    ]


def test_complete_repository_only_lacks_hooks(complete_repo: Path) -> None:
    findings = _run(complete_repo)

    assert _ids(findings) == ["githooks"]
    assert findings[0].remedy == "repo-hygiene hooks install"
    assert "pre-commit (absent)" in findings[0].message


def test_complete_repository_with_hooks_is_clean(complete_repo: Path) -> None:
    install_hooks(complete_repo)

    assert _run(complete_repo) == []


def test_githooks_reports_unmanaged_and_non_executable(complete_repo: Path) -> None:
    install_hooks(complete_repo)
    hooks_dir = complete_repo / ".git" / "hooks"
    (hooks_dir / "pre-push").write_text("#!/bin/sh\n", encoding="utf-8")
    (hooks_dir / "pre-commit").chmod(0o644)

    findings = _run(complete_repo)

    assert _ids(findings) == ["githooks"]
    assert "pre-commit (not executable)" in findings[0].message
    assert "pre-push (unmanaged)" in findings[0].message


def test_disabled_checks_are_skipped(empty_repo: Path) -> None:
    settings = Settings(disabled_checks=("license", "readme", "pr-template"))

    ids = _ids(_run(empty_repo, settings))

    assert "license" not in ids
    assert "readme" not in ids
    assert "pr-template" not in ids
    assert "contributing" in ids


def test_disabled_unknown_check_raises(empty_repo: Path) -> None:
    with pytest.raises(UnknownCheckError):
        _run(empty_repo, Settings(disabled_checks=("licence",)))


def test_short_readme(complete_repo: Path) -> None:
    (complete_repo / "README.md").write_text("# tiny\n", encoding="utf-8")

    findings = [f for f in _run(complete_repo, hooks=False) if f.check == "readme-sections"]

    assert len(findings) == 1
    assert "shorter than 200 bytes" in findings[0].message
    assert findings[0].severity == "info"


def test_readme_without_usage_section(complete_repo: Path) -> None:
    text = "# Project\n\n" + "Lorem ipsum. " * 30
    (complete_repo / "README.md").write_text(text, encoding="utf-8")

    findings = [f for f in _run(complete_repo, hooks=False) if f.check == "readme-sections"]

    assert "no installation or usage section" in findings[0].message


def test_gitignore_must_ignore_node_modules(complete_repo: Path) -> None:
    (complete_repo / ".gitignore").write_text("dist/\n", encoding="utf-8")

    findings = [f for f in _run(complete_repo, hooks=False) if f.check == "gitignore"]

    assert findings[0].message == ".gitignore does not ignore node_modules"
    assert findings[0].severity == "warn"


def test_node_checks_without_configs_or_scripts(make_node_repo: Callable[..., Path]) -> None:
    root = make_node_repo(
        git=False, scripts={"test": 'echo "Error: no test specified" && exit 1'}
    )

    by_id = {f.check: f for f in _run(root)}

    assert "lint-config" in by_id
    assert "format-config" in by_id
    assert "tests" in by_id
    assert by_id["scripts"].message == (
        "package.json is missing script(s): lint, checkLint, checkPretty, test"
    )
    assert "githooks" not in by_id


def test_test_script_satisfies_tests_check(make_node_repo: Callable[..., Path]) -> None:
    root = make_node_repo(git=False, scripts={"test": "vitest run"})

    assert "tests" not in _ids(_run(root))


@pytest.mark.parametrize(
    ("declared", "expected"),
    [
        ({"eslint": "^7.32.0"}, ["eslint range '^7.32.0' allows 7.32.0, below the minimum 8.0.0"]),
        ({"eslint": "*"}, ["eslint range '*' does not pin a minimum (need >= 8.0.0)"]),
        (
            {"eslint": "<9.0.0"},
            ["eslint range '<9.0.0' does not pin a minimum (need >= 8.0.0)"],
        ),
        (
            {"eslint": "^8.0.0 || *"},
            ["eslint range '^8.0.0 || *' does not pin a minimum (need >= 8.0.0)"],
        ),
        (
            {"eslint": "^7.0.0 || ^8.0.0"},
            ["eslint range '^7.0.0 || ^8.0.0' allows 7.0.0, below the minimum 8.0.0"],
        ),
        ({"eslint": "^8.0.0", "prettier": "^3.1.0"}, []),
        ({"eslint": "github:eslint/eslint"}, []),
        ({}, []),
    ],
)
def test_tool_versions(tmp_path: Path, declared: dict[str, str], expected: list[str]) -> None:
    write_package_json(tmp_path, {"name": "x", "devDependencies": declared})

    findings = [f for f in _run(tmp_path) if f.check == "tool-versions"]

    assert [f.message for f in findings] == expected


def test_tool_versions_respects_configured_minimum(tmp_path: Path) -> None:
    write_package_json(tmp_path, {"name": "x", "devDependencies": {"prettier": "^3.1.0"}})

    settings = Settings(min_versions={"prettier": "3.2.0"})
    findings = [f for f in _run(tmp_path, settings) if f.check == "tool-versions"]

    assert findings[0].remedy == "npm install --save-dev prettier@^3.2.0"
