"""Lower bounds of npm semver ranges, built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3", "v1.2.3", "=1.2.3")
- caret and tilde ranges (^x.y.z, ~x.y.z), bounded below by x.y.z
- comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- hyphen ranges and ``||`` unions
"""

from __future__ import annotations

from packaging.version import InvalidVersion, Version

# Returned for ranges that admit every version down to 0.0.0.
NO_LOWER_BOUND = Version("0.0.0")

_WILDCARDS = {"", "*", "x", "X"}
_NON_REGISTRY_PREFIXES = (
    "http://",
    "https://",
    "git",
    "file:",
    "link:",
    "workspace:",
    "npm:",
    "github:",
)


def _parse_version(v: str) -> Version:
    v = v.strip()
    if v.startswith("v"):
        v = v[1:]
    return Version(v)


def minimum_version(expr: str) -> Version | None:
    """Return the lowest version the range ``expr`` admits.

    Ranges with no lower bound (``*``, ``<9.0.0``, ``^7.0.0 || *``) give
    :data:`NO_LOWER_BOUND`. None means the range cannot be judged: URLs, git
    and local paths, the workspace protocol, dist-tags such as ``latest``, and
    anything else that does not parse.

    For ``||`` unions the lowest bound across alternatives wins. Hyphen ranges
    (``1.2.3 - 2.0.0``) use their left-hand side.
    """
    expr = expr.strip()
    if expr in _WILDCARDS:
        return NO_LOWER_BOUND
    if expr.startswith(_NON_REGISTRY_PREFIXES):
        return None

    if "||" in expr:
        bounds = [minimum_version(part) for part in expr.split("||")]
        if any(bound is None for bound in bounds):
            return None
        return min(bound for bound in bounds if bound is not None)

    if " - " in expr:
        expr = expr.split(" - ", 1)[0].strip()

    lower: Version | None = None
    for token in expr.split():
        if token.startswith("<") or token in _WILDCARDS:
            continue
        candidate = token.lstrip("^~>=")
        if candidate.lower().endswith((".x", ".*")):
            candidate = candidate[:-2] + ".0"
        try:
            version = _parse_version(candidate)
        except InvalidVersion:
            return None
        if token.startswith(">") and not token.startswith(">="):
            # strict lower bound; the bound itself is excluded
            version = Version(f"{version.major}.{version.minor}.{version.micro + 1}")
        if lower is None or version > lower:
            lower = version

    return lower if lower is not None else NO_LOWER_BOUND
