"""Checklist finding model."""

from __future__ import annotations

from dataclasses import dataclass

# Ordered from least to most severe.
SEVERITIES: tuple[str, ...] = ("info", "warn", "critical")


def severity_rank(severity: str) -> int:
    """Return the position of ``severity`` in :data:`SEVERITIES`."""
    try:
        return SEVERITIES.index(severity)
    except ValueError:
        raise ValueError(f"Invalid severity: {severity}") from None


@dataclass(frozen=True)
class Finding:
    """A single checklist item the repository does not satisfy."""

    check: str
    severity: str
    message: str
    remedy: str | None = None

    def __post_init__(self) -> None:
        if not self.check:
            raise ValueError("Finding check must be non-empty")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")
        if not self.message:
            raise ValueError("Finding message must be non-empty")

    def at_least(self, severity: str) -> bool:
        return severity_rank(self.severity) >= severity_rank(severity)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "check": self.check,
            "severity": self.severity,
            "message": self.message,
        }
        if self.remedy:
            data["remedy"] = self.remedy
        return data
