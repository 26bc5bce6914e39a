"""Result models for hook installation and inspection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_INSTALL_STATUSES = {
    "installed",
    "updated",
    "unchanged",
    "skipped",
    "replaced",
    "removed",
    "restored",
    "absent",
}
_STATES = {"managed", "unmanaged", "absent"}


@dataclass(frozen=True)
class HookInstallResult:
    """Outcome of installing or removing a single hook."""

    kind: str
    path: Path
    status: str
    backup: Path | None = None

    def __post_init__(self) -> None:
        if self.status not in _INSTALL_STATUSES:
            raise ValueError(f"Invalid hook status: {self.status}")

    @property
    def changed(self) -> bool:
        return self.status not in {"unchanged", "skipped", "absent"}

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "hook": self.kind,
            "path": str(self.path),
            "status": self.status,
        }
        if self.backup is not None:
            data["backup"] = str(self.backup)
        return data


@dataclass(frozen=True)
class HookState:
    """Current state of a hook file in the hooks directory."""

    kind: str
    path: Path
    state: str
    executable: bool = False

    def __post_init__(self) -> None:
        if self.state not in _STATES:
            raise ValueError(f"Invalid hook state: {self.state}")

    @property
    def healthy(self) -> bool:
        return self.state == "managed" and self.executable

    def to_dict(self) -> dict[str, object]:
        return {
            "hook": self.kind,
            "state": self.state,
            "executable": self.executable,
        }
