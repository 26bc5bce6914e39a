"""Exception hierarchy shared across repo-hygiene modules."""

from __future__ import annotations


class RepoHygieneError(RuntimeError):
    """Base error for failures the CLI reports without a traceback."""


class ConfigError(RepoHygieneError):
    """Raised when the configuration file cannot be loaded or is invalid."""


class ManifestError(RepoHygieneError):
    """Raised when package.json is missing, unreadable or malformed."""


class NotAGitRepositoryError(RepoHygieneError):
    """Raised when a git directory is required but none can be found."""


class HookError(RepoHygieneError):
    """Raised when a hook cannot be rendered, written or removed."""


class UnknownHookError(HookError, ValueError):
    """Raised when a hook kind has no registered template."""


class UnknownCheckError(RepoHygieneError, ValueError):
    """Raised when a check ID is not found in the registry."""


class LicenseFetchError(RepoHygieneError):
    """Raised when a license text cannot be fetched or parsed."""


class ReportValidationError(RepoHygieneError, ValueError):
    """Raised when an audit report does not match its JSON schema."""
