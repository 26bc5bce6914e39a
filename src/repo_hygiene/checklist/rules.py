"""Open-source project checklist rules and their registry.

Each rule inspects a :class:`CheckContext` and returns the findings for the
checklist items the repository does not satisfy. Rules never touch the
filesystem beyond reading files discovery already located.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

from ..config import Settings
from ..errors import UnknownCheckError
from ..manifest import missing_scripts
from ..models.finding import Finding
from ..models.hook_result import HookState
from ..models.layout import ProjectLayout
from ..parsers.package_json import dependency_pairs
from ..parsers.semver import NO_LOWER_BOUND, minimum_version

README_MIN_BYTES = 200
NPM_PLACEHOLDER_TEST = 'echo "Error: no test specified" && exit 1'

_README_HEADING = re.compile(
    r"^\s*(?:#{1,6}\s*|\*\*)?(install(?:ation|ing)?|usage|getting started|quick ?start)\b",
    re.IGNORECASE | re.MULTILINE,
)
_NODE_MODULES_PATTERNS = {
    "node_modules",
    "node_modules/",
    "/node_modules",
    "/node_modules/",
    "**/node_modules",
    "**/node_modules/",
}


@dataclass(frozen=True)
class CheckContext:
    """Everything a rule may look at."""

    layout: ProjectLayout
    settings: Settings = field(default_factory=Settings)
    hooks: tuple[HookState, ...] | None = None


RuleFunction: TypeAlias = Callable[[CheckContext], list[Finding]]


@dataclass(frozen=True)
class CheckRule:
    """Binding of a check ID to its rule function and default severity."""

    check_id: str
    severity: str
    description: str
    run: RuleFunction


def _finding(rule_id: str, message: str, remedy: str | None = None) -> list[Finding]:
    severity = CHECKS[rule_id].severity
    return [Finding(check=rule_id, severity=severity, message=message, remedy=remedy)]


def _has_test_script(layout: ProjectLayout) -> bool:
    command = layout.scripts.get("test", "").strip()
    return bool(command) and command != NPM_PLACEHOLDER_TEST


def _check_license(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.license is not None:
        return []
    return _finding(
        "license",
        "No LICENSE file; without one nobody may legally reuse the code",
        "repo-hygiene license MIT --holder 'Your Name'",
    )


def _check_readme(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.readme is not None:
        return []
    return _finding("readme", "No README describing what the project is and how to use it")


def _check_readme_sections(ctx: CheckContext) -> list[Finding]:
    readme = ctx.layout.readme
    if readme is None:
        return []
    text = readme.read_text(encoding="utf-8", errors="replace")
    name = ctx.layout.relative(readme)
    if len(text.encode("utf-8")) < README_MIN_BYTES:
        return _finding("readme-sections", f"{name} is shorter than {README_MIN_BYTES} bytes")
    if not _README_HEADING.search(text):
        return _finding("readme-sections", f"{name} has no installation or usage section")
    return []


def _check_contributing(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.contributing is not None:
        return []
    return _finding("contributing", "No CONTRIBUTING guide for new contributors")


def _check_code_of_conduct(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.code_of_conduct is not None:
        return []
    return _finding("code-of-conduct", "No CODE_OF_CONDUCT")


def _check_changelog(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.changelog is not None:
        return []
    return _finding("changelog", "No CHANGELOG recording notable changes per release")


def _check_gitignore(ctx: CheckContext) -> list[Finding]:
    gitignore = ctx.layout.gitignore
    if gitignore is None:
        return _finding(
            "gitignore", "No .gitignore; build output and dependencies may get committed"
        )
    if not ctx.layout.is_node_project:
        return []
    text = gitignore.read_text(encoding="utf-8", errors="replace")
    lines = {line.strip() for line in text.splitlines()}
    if lines & _NODE_MODULES_PATTERNS:
        return []
    return _finding(
        "gitignore",
        ".gitignore does not ignore node_modules",
        "echo node_modules/ >> .gitignore",
    )


def _check_editorconfig(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.editorconfig is not None:
        return []
    return _finding(
        "editorconfig", "No .editorconfig for consistent whitespace", "repo-hygiene setup"
    )


def _check_tests(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.tests_dir is not None or _has_test_script(ctx.layout):
        return []
    return _finding("tests", "No tests directory and no test script")


def _check_lint_config(ctx: CheckContext) -> list[Finding]:
    if not ctx.layout.is_node_project or ctx.layout.eslint_config is not None:
        return []
    return _finding("lint-config", "No ESLint configuration", "npm init @eslint/config")


def _check_format_config(ctx: CheckContext) -> list[Finding]:
    if not ctx.layout.is_node_project or ctx.layout.prettier_config is not None:
        return []
    return _finding(
        "format-config",
        "No Prettier configuration",
        "echo {} > .prettierrc.json",
    )


def _check_tool_versions(ctx: CheckContext) -> list[Finding]:
    if not ctx.layout.is_node_project:
        return []
    declared = dict(dependency_pairs(ctx.layout.manifest))
    findings: list[Finding] = []
    for package, required in sorted(ctx.settings.min_versions.items()):
        expr = declared.get(package)
        if expr is None:
            continue
        floor = minimum_version(required)
        if floor is None:
            continue
        lowest = minimum_version(expr)
        if lowest is None or lowest >= floor:
            continue
        if lowest == NO_LOWER_BOUND:
            message = f"{package} range '{expr}' does not pin a minimum (need >= {required})"
        else:
            message = f"{package} range '{expr}' allows {lowest}, below the minimum {required}"
        findings.extend(
            _finding("tool-versions", message, f"npm install --save-dev {package}@^{required}")
        )
    return findings


def _check_scripts(ctx: CheckContext) -> list[Finding]:
    if not ctx.layout.is_node_project:
        return []
    scripts = dict(ctx.layout.scripts)
    if not _has_test_script(ctx.layout):
        scripts.pop("test", None)
    missing = missing_scripts(scripts)
    if not missing:
        return []
    return _finding(
        "scripts",
        f"package.json is missing script(s): {', '.join(missing)}",
        "repo-hygiene scripts",
    )


def _check_githooks(ctx: CheckContext) -> list[Finding]:
    if not ctx.layout.is_git_checkout or ctx.hooks is None:
        return []
    problems = [
        f"{state.kind} ({state.state if state.state != 'managed' else 'not executable'})"
        for state in ctx.hooks
        if not state.healthy
    ]
    if not problems:
        return []
    return _finding(
        "githooks",
        f"Git hooks not installed: {', '.join(problems)}",
        "repo-hygiene hooks install",
    )


def _check_pr_template(ctx: CheckContext) -> list[Finding]:
    if ctx.layout.pr_template is not None:
        return []
    return _finding(
        "pr-template", "No pull request template with a review checklist", "repo-hygiene setup"
    )


# Registry of known checks, keyed by check ID, in report order.
CHECKS: dict[str, CheckRule] = {
    rule.check_id: rule
    for rule in (
        CheckRule("license", "critical", "Project has a license", _check_license),
        CheckRule("readme", "critical", "Project has a README", _check_readme),
        CheckRule(
            "readme-sections",
            "info",
            "README explains installation or usage",
            _check_readme_sections,
        ),
        CheckRule("contributing", "warn", "Project has a contributing guide", _check_contributing),
        CheckRule(
            "code-of-conduct", "info", "Project has a code of conduct", _check_code_of_conduct
        ),
        CheckRule("changelog", "info", "Project keeps a changelog", _check_changelog),
        CheckRule("gitignore", "warn", "Project ignores generated files", _check_gitignore),
        CheckRule("editorconfig", "info", "Project has an .editorconfig", _check_editorconfig),
        CheckRule("tests", "warn", "Project has tests", _check_tests),
        CheckRule("lint-config", "warn", "Project configures a linter", _check_lint_config),
        CheckRule(
            "format-config", "warn", "Project configures a formatter", _check_format_config
        ),
        CheckRule(
            "tool-versions",
            "warn",
            "Lint and format tools meet minimum versions",
            _check_tool_versions,
        ),
        CheckRule(
            "scripts", "warn", "package.json exposes lint/format/test scripts", _check_scripts
        ),
        CheckRule("githooks", "warn", "Git hooks run the checks", _check_githooks),
        CheckRule("pr-template", "info", "Project has a PR checklist", _check_pr_template),
    )
}


def get_check(check_id: str) -> CheckRule:
    """Return the rule for ``check_id``, or raise UnknownCheckError."""
    rule = CHECKS.get(check_id)
    if rule is None:
        known = ", ".join(CHECKS)
        raise UnknownCheckError(f"Unknown check '{check_id}'. Known checks: {known}")
    return rule


def get_known_check_ids() -> list[str]:
    """Return all registered check IDs in report order."""
    return list(CHECKS)


def validate_check_ids(check_ids: tuple[str, ...] | list[str]) -> None:
    """Raise UnknownCheckError if any ID is not registered."""
    unknown = [check_id for check_id in check_ids if check_id not in CHECKS]
    if unknown:
        raise UnknownCheckError(
            f"Unknown check(s): {', '.join(unknown)}. Registered checks: {', '.join(CHECKS)}"
        )


def run_checks(ctx: CheckContext) -> list[Finding]:
    """Run every enabled check and return the findings in report order."""
    validate_check_ids(ctx.settings.disabled_checks)
    findings: list[Finding] = []
    for check_id, rule in CHECKS.items():
        if not ctx.settings.is_enabled(check_id):
            continue
        findings.extend(rule.run(ctx))
    return findings
