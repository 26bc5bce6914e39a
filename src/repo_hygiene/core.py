"""Core audit and setup entrypoints.

This module MUST NOT print or parse arguments so it can be used by both the
``repo-hygiene`` CLI and ``scripts/audit.py``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import requests

from . import issues as issues_mod
from .checklist import CheckContext, get_known_check_ids, run_checks
from .config import Settings, load_settings
from .discovery import discover_project_files
from .hooks import HookOptions, hook_status, install_hooks
from .logging_config import get_logger
from .manifest import ensure_scripts, recommended_scripts
from .models.finding import Finding
from .models.hook_result import HookInstallResult
from .models.setup_result import SetupResult
from .report import aggregate, findings_from_report
from .scaffold import write_editorconfig, write_pr_template

logger = get_logger(__name__)

FINDINGS_EXIT_CODE = 10
_TRUTHY = {"1", "true", "yes", "y"}


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def audit_repository(root: Path, settings: Settings | None = None) -> dict[str, Any]:
    """Audit a repository against the project checklist.

    Params:
        root: repository root to audit
        settings: optional settings; when None they are loaded from ``root``

    Returns: dict report matching ``schemas/audit-report.schema.json``
    """
    root = root.resolve()
    settings = settings or load_settings(root)
    layout = discover_project_files(root)
    hooks = tuple(hook_status(root, settings.hooks)) if layout.is_git_checkout else None

    findings = run_checks(CheckContext(layout=layout, settings=settings, hooks=hooks))
    checks_run = [c for c in get_known_check_ids() if settings.is_enabled(c)]
    report = aggregate(root, findings, hooks, checks_run)
    logger.info(
        "Audited %s: %d finding(s), %d critical",
        root,
        report["totals"]["findings"],
        report["totals"]["critical"],
    )

    if report["hasFindings"] and env_flag("REPO_HYGIENE_CREATE_GH_ISSUE"):
        _report_issue(report)

    return report


def _report_issue(report: dict[str, Any]) -> None:
    token = os.getenv("GITHUB_TOKEN", "")
    repository = os.getenv("GITHUB_REPOSITORY", "")
    if not token or not repository:
        logger.warning("Missing GITHUB_TOKEN or GITHUB_REPOSITORY; not creating an issue")
        return
    try:
        url = issues_mod.create_or_update_issue(report, token=token, repository=repository)
    except (requests.RequestException, ValueError, AttributeError) as exc:
        logger.warning("Failed to create or update GitHub issue: %s", exc)
        return
    logger.info("Findings reported in %s", url)


def setup_repository(
    root: Path,
    settings: Settings | None = None,
    force: bool = False,
) -> SetupResult:
    """Apply every checklist fix the tool can make on its own.

    Adds manifest scripts to node projects, installs hooks in git checkouts,
    and writes the PR template and .editorconfig when missing.
    """
    root = root.resolve()
    settings = settings or load_settings(root)
    layout = discover_project_files(root)
    notes: list[str] = []

    scripts_update = None
    if layout.package_json is not None:
        scripts_update = ensure_scripts(
            layout.package_json,
            recommended_scripts(settings.source_dir, settings.extensions),
            force=force,
        )
    else:
        notes.append("No package.json found; skipped lint and format scripts")

    hook_results: tuple[HookInstallResult, ...] = ()
    if layout.is_git_checkout:
        options = HookOptions.from_settings(root, settings)
        hook_results = tuple(install_hooks(root, settings.hooks, options, force=force))
    else:
        notes.append("Not a git checkout; skipped git hooks")

    written = tuple(
        path for path in (write_pr_template(root), write_editorconfig(root)) if path is not None
    )

    return SetupResult(
        scripts=scripts_update, hooks=hook_results, written=written, notes=tuple(notes)
    )


def exit_code_for(
    report: dict[str, Any], fail_on: str = "critical", warn_only: bool = False
) -> int:
    """Return the process exit code for ``report``.

    Findings below ``fail_on`` never fail; ``warn_only`` disables failing.
    """
    if warn_only:
        return 0
    findings: list[Finding] = findings_from_report(report)
    if any(f.at_least(fail_on) for f in findings):
        return FINDINGS_EXIT_CODE
    return 0
