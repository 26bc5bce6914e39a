"""Data models for audits, hook installation and project setup."""

from __future__ import annotations

from .finding import SEVERITIES, Finding, severity_rank
from .hook_result import HookInstallResult, HookState
from .layout import ProjectLayout
from .setup_result import ScriptsUpdate, SetupResult

__all__ = [
    "SEVERITIES",
    "Finding",
    "HookInstallResult",
    "HookState",
    "ProjectLayout",
    "ScriptsUpdate",
    "SetupResult",
    "severity_rank",
]
