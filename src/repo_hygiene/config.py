"""Configuration loader for repo-hygiene.

Settings are read from a YAML or JSON file. Resolution order:

1. Explicit path argument
2. ``REPO_HYGIENE_CONFIG`` environment variable
3. ``.repo-hygiene.yml`` / ``.repo-hygiene.yaml`` / ``.repo-hygiene.json`` in
   the repository root
4. Built-in defaults

Validation is done here by hand so that every error names the offending key.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from packaging.version import InvalidVersion, Version

from .errors import ConfigError
from .logging_config import get_logger
from .models.finding import SEVERITIES

logger = get_logger(__name__)

CONFIG_PATH_ENV_VAR = "REPO_HYGIENE_CONFIG"
CONFIG_FILENAMES = (".repo-hygiene.yml", ".repo-hygiene.yaml", ".repo-hygiene.json")

HOOK_KINDS = (
    "pre-commit",
    "pre-push",
    "post-checkout",
    "post-merge",
    "prepare-commit-msg",
)
PACKAGE_MANAGERS = ("auto", "npm", "yarn", "pnpm")

DEFAULT_SOURCE_DIR = "src"
DEFAULT_EXTENSIONS = ("js", "jsx", "ts", "tsx", "json", "css", "scss", "md")
DEFAULT_PROTECTED_BRANCHES = ("main", "master", "develop", "HEAD")
DEFAULT_MIN_VERSIONS = {"eslint": "8.0.0", "prettier": "3.0.0"}

_KNOWN_KEYS = {
    "source_dir",
    "package_manager",
    "hooks",
    "disabled_checks",
    "fail_on",
    "extensions",
    "protected_branches",
    "min_versions",
}


def _string_list(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"'{key}' must be a list of non-empty strings")
    return tuple(value)


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    source_dir: str = DEFAULT_SOURCE_DIR
    package_manager: str = "auto"
    hooks: tuple[str, ...] = HOOK_KINDS
    disabled_checks: tuple[str, ...] = ()
    fail_on: str = "critical"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    protected_branches: tuple[str, ...] = DEFAULT_PROTECTED_BRANCHES
    min_versions: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MIN_VERSIONS))
    path: Path | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> Settings:
        """Create Settings from a decoded config mapping, validating every key."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        source_dir = data.get("source_dir", DEFAULT_SOURCE_DIR)
        if not isinstance(source_dir, str) or not source_dir.strip():
            raise ConfigError("'source_dir' must be a non-empty string")
        source_dir = source_dir.strip()
        if Path(source_dir).is_absolute() or ".." in Path(source_dir).parts:
            raise ConfigError("'source_dir' must be a path inside the repository")
        source_dir = source_dir.rstrip("/") or "."

        package_manager = data.get("package_manager", "auto")
        if package_manager not in PACKAGE_MANAGERS:
            raise ConfigError(
                f"'package_manager' must be one of: {', '.join(PACKAGE_MANAGERS)}"
            )

        hooks = _string_list(data, "hooks", HOOK_KINDS)
        unknown_hooks = sorted(set(hooks) - set(HOOK_KINDS))
        if unknown_hooks:
            raise ConfigError(f"Unknown hook kind(s) in 'hooks': {', '.join(unknown_hooks)}")

        fail_on = data.get("fail_on", "critical")
        if fail_on not in SEVERITIES:
            raise ConfigError(f"'fail_on' must be one of: {', '.join(SEVERITIES)}")

        extensions = tuple(
            ext.lstrip(".") for ext in _string_list(data, "extensions", DEFAULT_EXTENSIONS)
        )
        if not extensions:
            raise ConfigError("'extensions' must contain at least one entry")

        min_versions = data.get("min_versions", DEFAULT_MIN_VERSIONS)
        if not isinstance(min_versions, dict) or not all(
            isinstance(k, str) and isinstance(v, (str, int, float))
            for k, v in min_versions.items()
        ):
            raise ConfigError("'min_versions' must map package names to version strings")
        for package, version in min_versions.items():
            try:
                Version(str(version))
            except InvalidVersion:
                raise ConfigError(
                    f"'min_versions' entry for '{package}' is not a valid version: {version}"
                ) from None

        return cls(
            source_dir=source_dir,
            package_manager=package_manager,
            hooks=hooks,
            disabled_checks=_string_list(data, "disabled_checks", ()),
            fail_on=fail_on,
            extensions=extensions,
            protected_branches=_string_list(
                data, "protected_branches", DEFAULT_PROTECTED_BRANCHES
            ),
            min_versions={k: str(v) for k, v in min_versions.items()},
            path=path,
        )

    def is_enabled(self, check_id: str) -> bool:
        return check_id not in self.disabled_checks


def _resolve_config_path(root: Path, path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path, or None to use defaults."""
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate

    return None


def _decode(config_path: Path, content: str) -> Any:
    if config_path.suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc


def load_settings(root: Path | str = ".", path: Path | str | None = None) -> Settings:
    """Load and validate settings for the repository at ``root``.

    Args:
        root: Repository root, searched for a ``.repo-hygiene.*`` file.
        path: Optional explicit config file path.

    Returns:
        Validated Settings; defaults when no config file exists.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(Path(root), path)
    if config_path is None:
        logger.debug("No configuration file found under %s; using defaults", root)
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(
            f"Configuration file {config_path} is not valid UTF-8: {exc}"
        ) from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    data = _decode(config_path, content)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    logger.debug("Loaded configuration from %s", config_path)
    return Settings.from_dict(data, path=config_path)
