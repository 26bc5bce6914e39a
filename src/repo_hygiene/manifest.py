"""Add lint and format scripts to package.json."""

from __future__ import annotations

import shlex
from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import DEFAULT_EXTENSIONS, DEFAULT_SOURCE_DIR
from .errors import ManifestError
from .logging_config import get_logger
from .models.setup_result import ScriptsUpdate
from .parsers.package_json import load_manifest, write_manifest

logger = get_logger(__name__)

REQUIRED_SCRIPTS = ("lint", "checkLint", "checkPretty", "test")


def _glob(source_dir: str, extensions: Iterable[str]) -> str:
    exts = [ext.lstrip(".") for ext in extensions]
    if len(exts) == 1:
        pattern = f"{source_dir}/**/*.{exts[0]}"
    else:
        pattern = f"{source_dir}/**/*.{{{','.join(exts)}}}"
    return f'"{pattern}"'


def recommended_scripts(
    source_dir: str = DEFAULT_SOURCE_DIR,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> dict[str, str]:
    """Return the lint/format scripts for ``source_dir``, in insertion order."""
    glob = _glob(source_dir, extensions)
    target = shlex.quote(source_dir)
    return {
        "lint": f"eslint --fix {target}",
        "checkLint": f"eslint {target}",
        "pretty": f"prettier --write {glob}",
        "checkPretty": f"prettier --check {glob}",
    }


def ensure_scripts(
    path: Path,
    scripts: Mapping[str, str],
    force: bool = False,
) -> ScriptsUpdate:
    """Merge ``scripts`` into the manifest's ``scripts`` section.

    Existing entries with a different command are reported as conflicts and
    kept, unless ``force`` is set. The file is only rewritten when an entry
    was added or replaced.

    Raises:
        ManifestError: If the manifest is missing or malformed.
    """
    manifest = load_manifest(path)
    section = manifest.data.get("scripts")
    if section is None:
        section = {}
    elif not isinstance(section, dict):
        raise ManifestError(f"'scripts' in {path} must be an object")

    added: list[str] = []
    replaced: list[str] = []
    conflicts: list[str] = []

    for name, command in scripts.items():
        current = section.get(name)
        if current is None:
            section[name] = command
            added.append(name)
        elif current == command:
            continue
        elif force:
            section[name] = command
            replaced.append(name)
        else:
            conflicts.append(name)

    update = ScriptsUpdate(
        path=path,
        added=tuple(added),
        replaced=tuple(replaced),
        conflicts=tuple(conflicts),
    )

    if update.changed:
        manifest.data["scripts"] = section
        write_manifest(manifest)
        logger.info(
            "Updated scripts in %s (added: %s; replaced: %s)",
            path,
            ", ".join(added) or "none",
            ", ".join(replaced) or "none",
        )
    for name in conflicts:
        logger.warning(
            "Keeping existing '%s' script in %s; use --force to replace it", name, path
        )

    return update


def missing_scripts(scripts: Mapping[str, str]) -> list[str]:
    """Return required script names absent from ``scripts``."""
    return [name for name in REQUIRED_SCRIPTS if not scripts.get(name)]
