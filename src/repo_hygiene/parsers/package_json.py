"""Read and write package.json while preserving its formatting."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ManifestError

DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


@dataclass
class PackageManifest:
    """Decoded package.json plus the formatting needed to write it back."""

    path: Path
    data: dict[str, Any]
    indent: str = "  "
    trailing_newline: bool = True


def _detect_indent(text: str) -> str:
    for line in text.splitlines()[1:]:
        stripped = line.lstrip(" \t")
        if not stripped or len(stripped) == len(line):
            continue
        prefix = line[: len(line) - len(stripped)]
        if prefix.startswith("\t"):
            return "\t"
        return prefix
    return "  "


def load_manifest(path: Path) -> PackageManifest:
    """Load package.json, remembering its indent and final newline."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(f"Manifest {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ManifestError(f"Failed to read manifest {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must contain a JSON object")

    return PackageManifest(
        path=path,
        data=data,
        indent=_detect_indent(text),
        trailing_newline=text.endswith("\n"),
    )


def dump_manifest(manifest: PackageManifest) -> str:
    """Serialise the manifest the way it was read."""
    text = json.dumps(manifest.data, indent=manifest.indent, ensure_ascii=False)
    if manifest.trailing_newline:
        text += "\n"
    return text


def write_manifest(manifest: PackageManifest) -> None:
    try:
        manifest.path.write_text(dump_manifest(manifest), encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to write manifest {manifest.path}: {exc}") from exc


def dependency_pairs(data: dict[str, Any]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            pairs.append((name, str(version)))

    return pairs
