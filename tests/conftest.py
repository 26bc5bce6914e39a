"""Shared fixtures: throwaway repositories built under tmp_path."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from repo_hygiene import config as config_mod

README_TEXT = """# Example

An example project used by the repo-hygiene tests. It exists only so the
README is long enough to count as documentation rather than a stub.

## Installation

    npm install example

## Usage

    npx example --help
"""


def write_package_json(root: Path, data: dict[str, Any], indent: int | str = 2) -> Path:
    path = root / "package.json"
    path.write_text(json.dumps(data, indent=indent) + "\n", encoding="utf-8")
    return path


def init_git(root: Path, config: str = "") -> Path:
    """Lay out a minimal .git directory that GitPython accepts."""
    git_dir = root / ".git"
    for name in ("hooks", "objects", "refs/heads"):
        (git_dir / name).mkdir(parents=True)
    (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (git_dir / "config").write_text(
        "[core]\n\trepositoryformatversion = 0\n" + config, encoding="utf-8"
    )
    return git_dir


@pytest.fixture(autouse=True)
def _isolate_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    for name in (
        config_mod.CONFIG_PATH_ENV_VAR,
        "REPO_HYGIENE_CREATE_GH_ISSUE",
        "REPO_HYGIENE_WARN_ONLY",
        "REPO_HYGIENE_LOG_LEVEL",
        "GITHUB_TOKEN",
        "GITHUB_REPOSITORY",
        "XDG_CONFIG_HOME",
        "GIT_DIR",
        "GIT_COMMON_DIR",
        "GIT_WORK_TREE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    root = tmp_path / "empty"
    root.mkdir()
    return root


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    root = tmp_path / "git-repo"
    root.mkdir()
    init_git(root)
    return root


@pytest.fixture
def make_node_repo(tmp_path: Path) -> Callable[..., Path]:
    """Build a git-backed node project; keyword args override package.json."""

    def _make(name: str = "node-repo", git: bool = True, **manifest: Any) -> Path:
        root = tmp_path / name
        root.mkdir()
        data: dict[str, Any] = {"name": name, "version": "1.0.0"}
        data.update(manifest)
        write_package_json(root, data)
        if git:
            init_git(root)
        return root

    return _make


@pytest.fixture
def complete_repo(make_node_repo: Callable[..., Path]) -> Path:
    """A node project that satisfies every checklist item except git hooks."""
    root = make_node_repo(
        "complete",
        scripts={
            "lint": "eslint --fix src",
            "checkLint": "eslint src",
            "pretty": 'prettier --write "src/**/*.js"',
            "checkPretty": 'prettier --check "src/**/*.js"',
            "test": "jest",
        },
        devDependencies={"eslint": "^8.57.0", "prettier": "^3.2.0", "jest": "^29.0.0"},
    )
    (root / "LICENSE").write_text("MIT License\n", encoding="utf-8")
    (root / "README.md").write_text(README_TEXT, encoding="utf-8")
    (root / "CONTRIBUTING.md").write_text("# Contributing\n", encoding="utf-8")
    (root / "CODE_OF_CONDUCT.md").write_text("# Code of Conduct\n", encoding="utf-8")
    (root / "CHANGELOG.md").write_text("# Changelog\n", encoding="utf-8")
    (root / ".gitignore").write_text("node_modules/\ndist/\n", encoding="utf-8")
    (root / ".editorconfig").write_text("root = true\n", encoding="utf-8")
    (root / ".eslintrc.json").write_text("{}\n", encoding="utf-8")
    (root / ".prettierrc").write_text("{}\n", encoding="utf-8")
    (root / "tests").mkdir()
    (root / ".github").mkdir()
    (root / ".github" / "pull_request_template.md").write_text("- [ ] tests\n", encoding="utf-8")
    return root
