"""The open-source project checklist: rule registry and runner."""

from .rules import (
    CHECKS,
    CheckContext,
    CheckRule,
    get_check,
    get_known_check_ids,
    run_checks,
    validate_check_ids,
)

__all__ = [
    "CHECKS",
    "CheckContext",
    "CheckRule",
    "get_check",
    "get_known_check_ids",
    "run_checks",
    "validate_check_ids",
]
