#!/usr/bin/env python3
"""Local entrypoint to audit a repository without installing the console script.

Usage:
  python scripts/audit.py --root . [--config .repo-hygiene.yml] [--warn-only]

This calls the same core audit_repository used by the ``repo-hygiene audit``
command and prints the JSON report.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from repo_hygiene.config import load_settings
from repo_hygiene.core import audit_repository, env_flag, exit_code_for
from repo_hygiene.logging_config import setup_logging


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--root", type=Path, default=Path("."))
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--warn-only", action="store_true")
    args = parser.parse_args()

    setup_logging()
    settings = load_settings(args.root, args.config)
    report = audit_repository(args.root, settings)
    print(json.dumps(report, indent=2))

    warn_only = args.warn_only or env_flag("REPO_HYGIENE_WARN_ONLY")
    return exit_code_for(report, fail_on=settings.fail_on, warn_only=warn_only)


if __name__ == "__main__":
    raise SystemExit(main())
