"""Git hook script templates.

Each template is a POSIX ``sh`` script that calls the project's package
manager and propagates the tool's exit status. Placeholders use an ``@@``
delimiter so the shell's own ``$`` expansions pass through untouched.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from string import Template

from ..config import DEFAULT_PROTECTED_BRANCHES, DEFAULT_SOURCE_DIR, Settings
from ..discovery import LOCKFILES, detect_package_manager
from ..errors import HookError, UnknownHookError

HOOK_MARKER = "# repo-hygiene-managed-hook: do-not-edit"

_BRANCH_NAME = re.compile(r"^[A-Za-z0-9._/-]+$")

RUN_COMMANDS = {
    "npm": "npm run --silent",
    "yarn": "yarn run --silent",
    "pnpm": "pnpm run --silent",
}
INSTALL_COMMANDS = {
    "npm": "npm install",
    "yarn": "yarn install",
    "pnpm": "pnpm install",
}


class HookTemplate(Template):
    delimiter = "@@"


_PRE_COMMIT = """\
#!/bin/sh
@@{marker}
# Lint staged sources before the commit is recorded.

if [ -z "$(git diff --cached --name-only --diff-filter=ACMR -- @@{source_dir})" ]; then
    exit 0
fi

if ! @@{run} checkLint; then
    echo "pre-commit: lint check failed. Run '@@{run} lint' to fix it," >&2
    echo "or commit with --no-verify to skip this check." >&2
    exit 1
fi
"""

_PRE_PUSH = """\
#!/bin/sh
@@{marker}
# Lint, format check and test before anything is pushed.

run_step() {
    step="$1"
    shift
    if ! "$@"; then
        echo "pre-push: $step failed; push aborted." >&2
        exit 1
    fi
}

run_step "lint check" @@{run} checkLint
run_step "format check" @@{run} checkPretty
run_step "tests" @@{run} test
"""

_POST_CHECKOUT = """\
#!/bin/sh
@@{marker}
# $3 is 1 for branch checkouts and 0 for file checkouts.
[ "$3" = "1" ] || exit 0

if git diff --name-only "$1" "$2" -- package.json @@{lockfile} 2>/dev/null | grep -q .; then
    echo "post-checkout: dependencies changed, running @@{install}"
    @@{install} || echo "post-checkout: @@{install} failed" >&2
fi
"""

_POST_MERGE = """\
#!/bin/sh
@@{marker}

if git diff-tree -r --name-only --no-commit-id ORIG_HEAD HEAD -- package.json @@{lockfile} | grep -q .; then
    echo "post-merge: dependencies changed, running @@{install}"
    @@{install} || echo "post-merge: @@{install} failed" >&2
fi
"""

_PREPARE_COMMIT_MSG = """\
#!/bin/sh
@@{marker}
# Prefix the commit message with the current branch name.
COMMIT_MSG_FILE="$1"
COMMIT_SOURCE="$2"

case "$COMMIT_SOURCE" in
    merge|squash|commit) exit 0 ;;
esac

BRANCH=$(git symbolic-ref --short -q HEAD) || exit 0
[ -n "$BRANCH" ] || exit 0

case " @@{protected_branches} " in
    *" $BRANCH "*) exit 0 ;;
esac

PREFIX="[$BRANCH] "
FIRST_LINE=$(head -n 1 "$COMMIT_MSG_FILE")
case "$FIRST_LINE" in
    "$PREFIX"*) exit 0 ;;
esac

TMP_FILE="$COMMIT_MSG_FILE.tmp"
{ printf '%s' "$PREFIX"; cat "$COMMIT_MSG_FILE"; } > "$TMP_FILE" && mv "$TMP_FILE" "$COMMIT_MSG_FILE"
"""

HOOK_TEMPLATES: dict[str, HookTemplate] = {
    "pre-commit": HookTemplate(_PRE_COMMIT),
    "pre-push": HookTemplate(_PRE_PUSH),
    "post-checkout": HookTemplate(_POST_CHECKOUT),
    "post-merge": HookTemplate(_POST_MERGE),
    "prepare-commit-msg": HookTemplate(_PREPARE_COMMIT_MSG),
}


@dataclass(frozen=True)
class HookOptions:
    """Values substituted into the hook templates."""

    package_manager: str = "npm"
    source_dir: str = DEFAULT_SOURCE_DIR
    lockfile: str | None = None
    protected_branches: tuple[str, ...] = DEFAULT_PROTECTED_BRANCHES

    def __post_init__(self) -> None:
        if self.package_manager not in RUN_COMMANDS:
            raise HookError(f"Unsupported package manager: {self.package_manager}")
        if not self.source_dir:
            raise HookError("source_dir must be non-empty")
        bad = [b for b in self.protected_branches if not _BRANCH_NAME.match(b)]
        if bad:
            raise HookError(f"Invalid protected branch name(s): {', '.join(bad)}")

    @classmethod
    def from_settings(cls, root: Path, settings: Settings) -> HookOptions:
        manager = settings.package_manager
        if manager == "auto":
            manager = detect_package_manager(root)
        return cls(
            package_manager=manager,
            source_dir=settings.source_dir,
            protected_branches=settings.protected_branches,
        )

    @property
    def resolved_lockfile(self) -> str:
        return self.lockfile or LOCKFILES[self.package_manager]

    def substitutions(self) -> dict[str, str]:
        return {
            "marker": HOOK_MARKER,
            "source_dir": shlex.quote(self.source_dir),
            "lockfile": shlex.quote(self.resolved_lockfile),
            "run": RUN_COMMANDS[self.package_manager],
            "install": INSTALL_COMMANDS[self.package_manager],
            "protected_branches": " ".join(self.protected_branches),
        }


def get_hook_template(kind: str) -> HookTemplate:
    """Return the template for ``kind``, or raise UnknownHookError."""
    template = HOOK_TEMPLATES.get(kind)
    if template is None:
        known = ", ".join(sorted(HOOK_TEMPLATES))
        raise UnknownHookError(f"Unknown hook '{kind}'. Known hooks: {known}")
    return template


def render_hook(kind: str, options: HookOptions | None = None) -> str:
    """Render the hook script for ``kind``."""
    template = get_hook_template(kind)
    return template.substitute((options or HookOptions()).substitutions())


def is_managed(content: str) -> bool:
    """Return True when ``content`` was written by repo-hygiene."""
    return HOOK_MARKER in content
