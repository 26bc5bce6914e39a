"""Results returned by manifest edits and full repository setup."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .hook_result import HookInstallResult


@dataclass(frozen=True)
class ScriptsUpdate:
    """Describe how ``package.json`` scripts were merged."""

    path: Path
    added: tuple[str, ...] = ()
    replaced: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.replaced)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "added": list(self.added),
            "replaced": list(self.replaced),
            "conflicts": list(self.conflicts),
        }


@dataclass(frozen=True)
class SetupResult:
    """Everything ``setup_repository`` changed, or chose not to change."""

    scripts: ScriptsUpdate | None = None
    hooks: tuple[HookInstallResult, ...] = ()
    written: tuple[Path, ...] = ()
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        if self.scripts is not None and self.scripts.changed:
            return True
        return bool(self.written) or any(result.changed for result in self.hooks)

    def to_dict(self) -> dict[str, object]:
        return {
            "scripts": self.scripts.to_dict() if self.scripts is not None else None,
            "hooks": [result.to_dict() for result in self.hooks],
            "written": [str(path) for path in self.written],
            "notes": list(self.notes),
        }
