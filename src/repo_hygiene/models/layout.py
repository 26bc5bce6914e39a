"""Snapshot of the checklist-relevant files found in a repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ProjectLayout:
    """What discovery found at the repository root.

    Each optional path is the first matching candidate, or ``None`` when the
    repository has no such file.
    """

    root: Path
    license: Path | None = None
    readme: Path | None = None
    contributing: Path | None = None
    code_of_conduct: Path | None = None
    changelog: Path | None = None
    gitignore: Path | None = None
    editorconfig: Path | None = None
    pr_template: Path | None = None
    eslint_config: Path | None = None
    prettier_config: Path | None = None
    tests_dir: Path | None = None
    package_json: Path | None = None
    git_dir: Path | None = None
    manifest: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_node_project(self) -> bool:
        return self.package_json is not None

    @property
    def is_git_checkout(self) -> bool:
        return self.git_dir is not None

    @property
    def scripts(self) -> dict[str, str]:
        scripts = self.manifest.get("scripts")
        if not isinstance(scripts, dict):
            return {}
        return {str(k): str(v) for k, v in scripts.items()}

    def relative(self, path: Path | None) -> str | None:
        if path is None:
            return None
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)
