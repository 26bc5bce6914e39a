"""Command-line interface for repo-hygiene.

Usage:
  repo-hygiene audit [--root .] [--format json|markdown] [--warn-only]
  repo-hygiene setup [--root .] [--force]
  repo-hygiene hooks install|uninstall|status [--hook KIND ...] [--force]
  repo-hygiene scripts [--root .] [--force]
  repo-hygiene license SPDX_ID --holder NAME [--year YEAR]
  repo-hygiene validate-report PATH
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import HOOK_KINDS, load_settings
from .core import audit_repository, env_flag, exit_code_for, setup_repository
from .discovery import discover_project_files
from .errors import ManifestError, RepoHygieneError
from .hooks import HookOptions, hook_status, install_hooks, uninstall_hooks
from .logging_config import setup_logging
from .manifest import ensure_scripts, recommended_scripts
from .models.finding import SEVERITIES
from .scaffold import write_license
from .summary import render_summary
from .validators.audit_report import validate_report_file


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--root", type=Path, default=Path("."), help="Repository root")
    parser.add_argument("--config", type=Path, default=None, help="Path to a config file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-hygiene",
        description="Audit and set up open-source project hygiene: license, README, "
        "lint and format scripts, and git hooks.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    audit = sub.add_parser("audit", help="Check the repository against the checklist")
    _add_common(audit)
    audit.add_argument("--format", choices=("json", "markdown"), default="json")
    audit.add_argument("--output", type=Path, default=None, help="Write the report here")
    audit.add_argument("--warn-only", action="store_true", help="Never exit non-zero")
    audit.add_argument(
        "--fail-on",
        choices=SEVERITIES,
        default=None,
        help="Lowest severity that fails the audit (default from config: critical)",
    )

    setup = sub.add_parser("setup", help="Add scripts, hooks, PR template and .editorconfig")
    _add_common(setup)
    setup.add_argument("--force", action="store_true", help="Replace existing entries")

    hooks = sub.add_parser("hooks", help="Manage git hooks")
    hooks.add_argument("action", choices=("install", "uninstall", "status"))
    _add_common(hooks)
    hooks.add_argument(
        "--hook",
        dest="kinds",
        action="append",
        choices=HOOK_KINDS,
        default=None,
        help="Hook to act on (repeatable; default: configured hooks)",
    )
    hooks.add_argument("--force", action="store_true", help="Replace unmanaged hooks")

    scripts = sub.add_parser("scripts", help="Add lint and format scripts to package.json")
    _add_common(scripts)
    scripts.add_argument("--force", action="store_true", help="Replace differing scripts")

    license_ = sub.add_parser("license", help="Write a LICENSE file")
    license_.add_argument("spdx_id", help="SPDX identifier, e.g. MIT or Apache-2.0")
    license_.add_argument("--holder", required=True, help="Copyright holder")
    license_.add_argument("--year", type=int, default=None)
    license_.add_argument("--root", type=Path, default=Path("."), help="Repository root")

    validate = sub.add_parser("validate-report", help="Validate a JSON audit report")
    validate.add_argument("path", type=Path)

    return parser


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.write_text(text, encoding="utf-8")


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _cmd_audit(args: argparse.Namespace) -> int:
    settings = load_settings(args.root, args.config)
    report = audit_repository(args.root, settings)
    if args.format == "markdown":
        _emit(render_summary(report), args.output)
    else:
        _emit(json.dumps(report, indent=2) + "\n", args.output)

    warn_only = args.warn_only or env_flag("REPO_HYGIENE_WARN_ONLY")
    return exit_code_for(report, fail_on=args.fail_on or settings.fail_on, warn_only=warn_only)


def _cmd_setup(args: argparse.Namespace) -> int:
    settings = load_settings(args.root, args.config)
    result = setup_repository(args.root, settings, force=args.force)
    _print_json(result.to_dict())
    return 0


def _cmd_hooks(args: argparse.Namespace) -> int:
    settings = load_settings(args.root, args.config)
    kinds = args.kinds or list(settings.hooks)
    if args.action == "status":
        _print_json([state.to_dict() for state in hook_status(args.root, kinds)])
        return 0
    if args.action == "uninstall":
        results = uninstall_hooks(args.root, kinds)
    else:
        options = HookOptions.from_settings(args.root.resolve(), settings)
        results = install_hooks(args.root, kinds, options, force=args.force)
    _print_json([result.to_dict() for result in results])
    return 1 if any(result.status == "skipped" for result in results) else 0


def _cmd_scripts(args: argparse.Namespace) -> int:
    settings = load_settings(args.root, args.config)
    layout = discover_project_files(args.root)
    if layout.package_json is None:
        raise ManifestError(f"No package.json in {layout.root}")
    update = ensure_scripts(
        layout.package_json,
        recommended_scripts(settings.source_dir, settings.extensions),
        force=args.force,
    )
    _print_json(update.to_dict())
    return 1 if update.conflicts else 0


def _cmd_license(args: argparse.Namespace) -> int:
    path = write_license(args.root.resolve(), args.spdx_id, args.holder, args.year)
    if path is None:
        print("A license file already exists; nothing written", file=sys.stderr)
        return 0
    print(f"Wrote {path}")
    return 0


def _cmd_validate_report(args: argparse.Namespace) -> int:
    validate_report_file(args.path)
    print(f"Report {args.path} is valid")
    return 0


COMMANDS = {
    "audit": _cmd_audit,
    "setup": _cmd_setup,
    "hooks": _cmd_hooks,
    "scripts": _cmd_scripts,
    "license": _cmd_license,
    "validate-report": _cmd_validate_report,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else None)

    try:
        return COMMANDS[args.command](args)
    except (RepoHygieneError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
