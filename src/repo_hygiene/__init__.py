"""repo-hygiene core package.

Audits a repository against an open-source project checklist (license,
README, lint and format tooling, git hooks, PR checklist) and writes the
pieces it can fix on its own: package.json scripts, git hooks, a PR template
and an .editorconfig.
"""

__version__ = "0.1.0"

__all__ = [
    "core",
]
