"""Repository, checklist file and git directory discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import git
import git.exc

from .errors import NotAGitRepositoryError
from .logging_config import get_logger
from .models.layout import ProjectLayout
from .parsers.package_json import load_manifest

logger = get_logger(__name__)

LOCKFILES = {
    "pnpm": "pnpm-lock.yaml",
    "yarn": "yarn.lock",
    "npm": "package-lock.json",
}

# Candidate names per checklist item, matched case-insensitively, in
# priority order. Entries with a slash are looked up relative to the root.
CANDIDATES: dict[str, tuple[str, ...]] = {
    "license": ("LICENSE", "LICENSE.md", "LICENSE.txt", "LICENCE", "LICENCE.md", "COPYING"),
    "readme": ("README.md", "README", "README.rst", "README.txt"),
    "contributing": (
        "CONTRIBUTING.md",
        "CONTRIBUTING",
        ".github/CONTRIBUTING.md",
        ".github/CONTRIBUTING",
        "docs/CONTRIBUTING.md",
        "docs/CONTRIBUTING",
    ),
    "code_of_conduct": (
        "CODE_OF_CONDUCT.md",
        "CODE_OF_CONDUCT",
        ".github/CODE_OF_CONDUCT.md",
        ".github/CODE_OF_CONDUCT",
        "docs/CODE_OF_CONDUCT.md",
        "docs/CODE_OF_CONDUCT",
    ),
    "changelog": ("CHANGELOG.md", "CHANGELOG", "HISTORY.md", "CHANGES.md"),
    "gitignore": (".gitignore",),
    "editorconfig": (".editorconfig",),
    "pr_template": (
        ".github/pull_request_template.md",
        "PULL_REQUEST_TEMPLATE.md",
        "docs/pull_request_template.md",
    ),
    "eslint_config": (
        "eslint.config.js",
        "eslint.config.mjs",
        "eslint.config.cjs",
        ".eslintrc",
        ".eslintrc.js",
        ".eslintrc.cjs",
        ".eslintrc.json",
        ".eslintrc.yml",
        ".eslintrc.yaml",
    ),
    "prettier_config": (
        ".prettierrc",
        ".prettierrc.json",
        ".prettierrc.yml",
        ".prettierrc.yaml",
        ".prettierrc.js",
        ".prettierrc.cjs",
        "prettier.config.js",
        "prettier.config.cjs",
    ),
}

TEST_DIRS = ("test", "tests", "__tests__", "spec")


def _find_case_insensitive(root: Path, relative: str, want_dir: bool = False) -> Path | None:
    """Return the path matching ``relative`` ignoring case, if it exists."""
    current = root
    for part in relative.split("/"):
        if not current.is_dir():
            return None
        exact = current / part
        if exact.exists():
            current = exact
            continue
        lowered = part.lower()
        match = next(
            (child for child in sorted(current.iterdir()) if child.name.lower() == lowered),
            None,
        )
        if match is None:
            return None
        current = match

    if want_dir:
        return current if current.is_dir() else None
    return current if current.is_file() else None


def find_first(root: Path, names: tuple[str, ...]) -> Path | None:
    for name in names:
        found = _find_case_insensitive(root, name)
        if found is not None:
            return found
    return None


def discover_project_files(root: Path) -> ProjectLayout:
    """Collect the checklist-relevant files found at ``root``.

    Raises:
        ManifestError: If a root package.json exists but cannot be parsed.
    """
    root = root.resolve()
    found: dict[str, Any] = {
        key: find_first(root, names) for key, names in CANDIDATES.items()
    }

    tests_dir = None
    for name in TEST_DIRS:
        tests_dir = _find_case_insensitive(root, name, want_dir=True)
        if tests_dir is not None:
            break

    package_json = root / "package.json"
    manifest: dict[str, Any] = {}
    if package_json.is_file():
        manifest = load_manifest(package_json).data
        if found["eslint_config"] is None and "eslintConfig" in manifest:
            found["eslint_config"] = package_json
        if found["prettier_config"] is None and "prettier" in manifest:
            found["prettier_config"] = package_json
    else:
        package_json = None

    layout = ProjectLayout(
        root=root,
        tests_dir=tests_dir,
        package_json=package_json,
        git_dir=resolve_git_dir(root),
        manifest=manifest,
        **found,
    )
    logger.debug(
        "Discovered layout for %s: node=%s git=%s",
        root,
        layout.is_node_project,
        layout.is_git_checkout,
    )
    return layout


def detect_package_manager(root: Path) -> str:
    """Pick the package manager from the lock file at ``root``."""
    if (root / LOCKFILES["pnpm"]).is_file():
        return "pnpm"
    if (root / LOCKFILES["yarn"]).is_file():
        return "yarn"
    return "npm"


def _open_repo(root: Path) -> git.Repo | None:
    try:
        return git.Repo(root)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as exc:
        logger.debug("No git repository at %s: %r", root, exc)
        return None


def resolve_git_dir(root: Path) -> Path | None:
    """Return the git directory for ``root``, or None outside a checkout.

    ``.git`` may be a directory or a ``gitdir:`` file (worktrees and
    submodules); GitPython follows the file.
    """
    repo = _open_repo(root)
    if repo is None:
        return None
    with repo:
        return Path(repo.git_dir).resolve()


def resolve_hooks_dir(root: Path) -> Path:
    """Return the directory git reads hooks from for ``root``.

    Honours ``core.hooksPath`` from every config level git reads (system,
    global, repository and their includes). A relative value is taken against
    the repository root, which is how git itself interprets it for hooks.
    Without it, hooks live in the common git dir so linked worktrees share
    them with the main checkout.

    Raises:
        NotAGitRepositoryError: If ``root`` is not a git checkout.
    """
    root = root.resolve()
    repo = _open_repo(root)
    if repo is None:
        raise NotAGitRepositoryError(f"{root} is not a git repository")

    with repo:
        hooks_path = repo.config_reader().get_value("core", "hooksPath", "")
        common = Path(repo.common_dir).resolve()

    if hooks_path:
        path = Path(str(hooks_path)).expanduser()
        return path if path.is_absolute() else root / path

    return common / "hooks"
