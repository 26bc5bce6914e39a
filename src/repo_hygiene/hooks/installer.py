"""Install, remove and inspect managed git hooks."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from pathlib import Path

from ..config import HOOK_KINDS
from ..discovery import resolve_hooks_dir
from ..errors import HookError
from ..logging_config import get_logger
from ..models.hook_result import HookInstallResult, HookState
from .templates import HookOptions, get_hook_template, is_managed, render_hook

logger = get_logger(__name__)

HOOK_MODE = 0o755


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise HookError(f"Failed to read hook {path}: {exc}") from exc


def _write_executable(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8", newline="\n")
        os.chmod(path, HOOK_MODE)
    except OSError as exc:
        raise HookError(f"Failed to write hook {path}: {exc}") from exc


def _next_backup_path(path: Path) -> Path:
    candidate = path.with_name(f"{path.name}.bak")
    counter = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.bak.{counter}")
        counter += 1
    return candidate


def _backups(path: Path) -> list[Path]:
    """Return existing backups of ``path``, newest first."""
    found: list[tuple[int, Path]] = []
    plain = path.with_name(f"{path.name}.bak")
    if plain.is_file():
        found.append((0, plain))
    for candidate in path.parent.glob(f"{path.name}.bak.*"):
        suffix = candidate.name.rsplit(".", 1)[-1]
        if suffix.isdigit() and candidate.is_file():
            found.append((int(suffix), candidate))
    return [p for _, p in sorted(found, reverse=True)]


def _validate_kinds(kinds: Iterable[str] | None) -> list[str]:
    selected = list(kinds) if kinds is not None else list(HOOK_KINDS)
    for kind in selected:
        get_hook_template(kind)
    return selected


def install_hooks(
    root: Path,
    kinds: Iterable[str] | None = None,
    options: HookOptions | None = None,
    force: bool = False,
) -> list[HookInstallResult]:
    """Write managed hooks for ``kinds`` into the repository's hooks directory.

    Hooks that were not written by repo-hygiene are left alone unless
    ``force`` is set, in which case they are backed up first.

    Raises:
        NotAGitRepositoryError: If ``root`` is not a git checkout.
        UnknownHookError: If any kind has no template.
        HookError: If a hook file cannot be read or written.
    """
    selected = _validate_kinds(kinds)
    options = options or HookOptions()
    hooks_dir = resolve_hooks_dir(root)
    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise HookError(f"Failed to create hooks directory {hooks_dir}: {exc}") from exc

    results: list[HookInstallResult] = []
    for kind in selected:
        path = hooks_dir / kind
        content = render_hook(kind, options)

        if not path.exists():
            _write_executable(path, content)
            results.append(HookInstallResult(kind=kind, path=path, status="installed"))
            logger.info("Installed %s hook at %s", kind, path)
            continue

        existing = _read(path)
        if is_managed(existing):
            if existing == content and os.access(path, os.X_OK):
                results.append(HookInstallResult(kind=kind, path=path, status="unchanged"))
                continue
            _write_executable(path, content)
            results.append(HookInstallResult(kind=kind, path=path, status="updated"))
            logger.info("Updated %s hook at %s", kind, path)
            continue

        if not force:
            results.append(HookInstallResult(kind=kind, path=path, status="skipped"))
            logger.warning(
                "Leaving existing %s hook at %s untouched; use --force to replace it",
                kind,
                path,
            )
            continue

        backup = _next_backup_path(path)
        try:
            path.rename(backup)
        except OSError as exc:
            raise HookError(f"Failed to back up hook {path}: {exc}") from exc
        _write_executable(path, content)
        results.append(HookInstallResult(kind=kind, path=path, status="replaced", backup=backup))
        logger.info("Replaced %s hook at %s (backup: %s)", kind, path, backup)

    return results


def uninstall_hooks(root: Path, kinds: Iterable[str] | None = None) -> list[HookInstallResult]:
    """Remove managed hooks, restoring the newest backup when one exists."""
    selected = _validate_kinds(kinds)
    hooks_dir = resolve_hooks_dir(root)

    results: list[HookInstallResult] = []
    for kind in selected:
        path = hooks_dir / kind
        if not path.exists():
            results.append(HookInstallResult(kind=kind, path=path, status="absent"))
            continue

        if not is_managed(_read(path)):
            results.append(HookInstallResult(kind=kind, path=path, status="skipped"))
            logger.warning("Not removing unmanaged %s hook at %s", kind, path)
            continue

        backups = _backups(path)
        try:
            path.unlink()
            if backups:
                backups[0].rename(path)
        except OSError as exc:
            raise HookError(f"Failed to remove hook {path}: {exc}") from exc

        if backups:
            results.append(
                HookInstallResult(kind=kind, path=path, status="restored", backup=backups[0])
            )
            logger.info("Removed %s hook and restored %s", kind, backups[0])
        else:
            results.append(HookInstallResult(kind=kind, path=path, status="removed"))
            logger.info("Removed %s hook at %s", kind, path)

    return results


def hook_status(root: Path, kinds: Iterable[str] | None = None) -> list[HookState]:
    """Report whether each hook is managed, unmanaged or absent."""
    selected = _validate_kinds(kinds)
    hooks_dir = resolve_hooks_dir(root)

    states: list[HookState] = []
    for kind in selected:
        path = hooks_dir / kind
        if not path.is_file():
            states.append(HookState(kind=kind, path=path, state="absent"))
            continue
        executable = bool(path.stat().st_mode & stat.S_IXUSR)
        state = "managed" if is_managed(_read(path)) else "unmanaged"
        states.append(HookState(kind=kind, path=path, state=state, executable=executable))

    return states
